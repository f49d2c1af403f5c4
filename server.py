"""Main HTTP server entry point and connection lifecycle orchestration."""

from __future__ import annotations

import argparse
import json
import logging
import os
import socket
import threading
import time
from pathlib import Path

from config import ACCEPT_POLL_SECS, HOST, LISTEN_BACKLOG, LOG_FORMAT, PORT
from dispatcher import RequestDispatcher
from request import HTTPRequest, HTTPRequestParseError
from socket_handler import HTTPReadError, read_http_request, write_http_response

logger = logging.getLogger(__name__)


class HTTPServer:
    def __init__(
        self,
        host: str = HOST,
        port: int = PORT,
        root: str | os.PathLike[str] | None = None,
        *,
        log_format: str = LOG_FORMAT,
    ) -> None:
        self.host = host
        self.port = port
        self.root = Path(root).absolute() if root is not None else Path.cwd()
        self.log_format = log_format
        self.dispatcher = RequestDispatcher(self.root)

        self._server_socket: socket.socket | None = None
        self._next_connection_id = 0
        self._running = False

    def start(self) -> None:
        """Listen and hand each accepted connection to its own thread."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server_socket:
            self._server_socket = server_socket
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.host, self.port))
            server_socket.listen(LISTEN_BACKLOG)
            server_socket.settimeout(ACCEPT_POLL_SECS)
            self.port = server_socket.getsockname()[1]
            logger.info("Serving %s on http://%s:%s", self.root, self.host, self.port)

            self._running = True
            while self._running:
                try:
                    client_socket, address = server_socket.accept()
                except socket.timeout:
                    continue
                except OSError:
                    break

                # Accepted sockets inherit the listener timeout; reads here block.
                client_socket.settimeout(None)
                self._next_connection_id += 1
                worker = threading.Thread(
                    target=self._handle_client,
                    args=(client_socket, address, self._next_connection_id),
                    name=f"http-conn-{self._next_connection_id}",
                    daemon=True,
                )
                worker.start()

    def stop(self) -> None:
        self._running = False
        if self._server_socket is not None:
            self._server_socket.close()
            self._server_socket = None

    def _handle_client(
        self,
        client_socket: socket.socket,
        address: tuple[str, int],
        connection_id: int,
    ) -> None:
        with client_socket:
            started_at = time.perf_counter()
            try:
                raw_request = read_http_request(client_socket)
            except HTTPReadError:
                logger.debug("connection_id=%s read failed", connection_id, exc_info=True)
                return

            response = self.dispatcher.dispatch(raw_request)
            payload = response.to_bytes()
            try:
                bytes_sent = write_http_response(client_socket, payload)
            except OSError:
                logger.debug("connection_id=%s write failed", connection_id, exc_info=True)
                return

            method, path = _describe_request(raw_request)
            self._record_and_log(
                address=address,
                method=method,
                path=path,
                status_code=response.status_code,
                bytes_in=len(raw_request),
                bytes_out=bytes_sent,
                started_at=started_at,
                connection_id=connection_id,
            )

    def _record_and_log(
        self,
        *,
        address: tuple[str, int],
        method: str,
        path: str,
        status_code: int,
        bytes_in: int,
        bytes_out: int,
        started_at: float,
        connection_id: int,
    ) -> None:
        duration_ms = (time.perf_counter() - started_at) * 1000
        event = {
            "client": address[0],
            "method": method,
            "path": path,
            "status": status_code,
            "connection_id": connection_id,
            "bytes_in": bytes_in,
            "bytes_out": bytes_out,
            "latency_ms": round(duration_ms, 3),
        }
        if self.log_format == "json":
            logger.info(json.dumps(event, sort_keys=True))
            return

        logger.info(
            (
                "client=%s method=%s path=%s status=%s connection_id=%s "
                "bytes_in=%s bytes_out=%s duration_ms=%.2f"
            ),
            event["client"],
            event["method"],
            event["path"],
            event["status"],
            event["connection_id"],
            event["bytes_in"],
            event["bytes_out"],
            duration_ms,
        )


def _describe_request(raw_request: bytes) -> tuple[str, str]:
    try:
        request = HTTPRequest.from_bytes(raw_request)
    except HTTPRequestParseError:
        return "-", "-"
    return request.method, request.raw_target


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve files and directory listings from one root")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--root", type=Path, default=None, help="directory to serve (default: cwd)")
    parser.add_argument("--log-format", choices=["plain", "json"], default=LOG_FORMAT)
    args = parser.parse_args(argv)
    if args.root is not None and not args.root.is_dir():
        parser.error(f"--root is not a directory: {args.root}")
    return args


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    server = HTTPServer(
        host=args.host,
        port=args.port,
        root=args.root,
        log_format=args.log_format,
    )
    try:
        server.start()
    except KeyboardInterrupt:
        server.stop()


if __name__ == "__main__":
    main()
