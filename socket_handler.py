"""Low-level socket read/write utilities."""

from __future__ import annotations

import socket

from config import BUFFER_SIZE


class HTTPReadError(Exception):
    """Raised when a client request cannot be read from the socket."""


def read_http_request(client_socket: socket.socket, buffer_size: int = BUFFER_SIZE) -> bytes:
    """Read the request bytes with a single ``recv`` call.

    Only the request line is ever used, so whatever arrives in the first read is
    enough. Returns ``b""`` when the client closed without sending anything.
    """
    try:
        return client_socket.recv(buffer_size)
    except OSError as exc:
        raise HTTPReadError("Failed to read request bytes") from exc


def write_http_response(client_socket: socket.socket, payload: bytes) -> int:
    """Write the complete response payload to a client socket."""
    client_socket.sendall(payload)
    return len(payload)
