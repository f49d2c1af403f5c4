"""HTTP response model and serializer."""

from dataclasses import dataclass, field

REASON_PHRASES: dict[int, str] = {
    200: "OK",
    400: "Bad Request",
    500: "Internal Server Error",
}


@dataclass(slots=True)
class HTTPResponse:
    status_code: int
    reason_phrase: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | str = b""
    include_content_length: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    def to_bytes(self) -> bytes:
        """Serialize the response into HTTP/1.1 wire format bytes.

        Headers are written exactly as set. ``Content-Length`` is only added when
        ``include_content_length`` is true; text bodies are delimited by the
        connection closing instead.
        """
        reason = self.reason_phrase or REASON_PHRASES.get(self.status_code, "Unknown")
        headers = dict(self.headers)
        if self.include_content_length:
            headers["Content-Length"] = str(len(self.body))

        header_lines = [f"HTTP/1.1 {self.status_code} {reason}"]
        header_lines.extend(f"{key}: {value}" for key, value in headers.items())
        head = "\r\n".join(header_lines).encode("iso-8859-1") + b"\r\n\r\n"
        return head + self.body
