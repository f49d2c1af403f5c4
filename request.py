"""HTTP request-line model and parser."""

from dataclasses import dataclass


class HTTPRequestParseError(ValueError):
    """Request parse error carrying an HTTP status code."""

    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class HTTPRequest:
    method: str
    raw_target: str
    http_version: str = ""

    @classmethod
    def from_bytes(cls, raw: bytes) -> "HTTPRequest":
        """Parse the request line out of raw request bytes."""
        return cls.from_text(raw.decode("utf-8", errors="replace"))

    @classmethod
    def from_text(cls, text: str) -> "HTTPRequest":
        """Parse the request line; headers and body are ignored."""
        if not text:
            raise HTTPRequestParseError("Missing request line")

        tokens = text.split("\n", 1)[0].split()
        if len(tokens) < 2:
            raise HTTPRequestParseError("Invalid request line")

        method, target = tokens[0], tokens[1]
        http_version = tokens[2] if len(tokens) > 2 else ""
        return cls(method=method, raw_target=target, http_version=http_version)
