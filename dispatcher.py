"""Request dispatch: request line to resolved path to response bytes."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from handlers.file_handlers import bad_request, internal_error, serve_directory, serve_file
from request import HTTPRequest, HTTPRequestParseError
from response import HTTPResponse
from utils import request_tail, resolve_requested_path

logger = logging.getLogger(__name__)


class RequestDispatcher:
    """Turns raw requests into responses for files under a single root directory."""

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def handle(self, raw_request: bytes | str) -> bytes:
        """Return the serialized response for ``raw_request``. Never raises."""
        return self.dispatch(raw_request).to_bytes()

    def dispatch(self, raw_request: bytes | str) -> HTTPResponse:
        try:
            if isinstance(raw_request, bytes):
                request = HTTPRequest.from_bytes(raw_request)
            else:
                request = HTTPRequest.from_text(raw_request)
        except HTTPRequestParseError as exc:
            logger.debug("Rejecting request: %s", exc)
            return bad_request()

        try:
            return self._dispatch(request)
        except Exception:
            logger.exception("Unhandled error while serving %s", request.raw_target)
            return internal_error("Internal Server Error")

    def _dispatch(self, request: HTTPRequest) -> HTTPResponse:
        resolved = resolve_requested_path(request.raw_target, self._root)
        if resolved is None:
            return bad_request()

        if resolved.is_file():
            return serve_file(resolved)
        if resolved.is_dir():
            return serve_directory(
                resolved,
                request_tail(request.raw_target),
                is_root=self._is_root(resolved),
            )
        return bad_request()

    def _is_root(self, path: Path) -> bool:
        if path == self._root:
            return True
        try:
            return os.path.samefile(path, self._root)
        except OSError:
            return False
