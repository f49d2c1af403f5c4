"""Configuration constants for the confined file server."""

HOST: str = "127.0.0.1"
PORT: int = 8080
BUFFER_SIZE: int = 4096
LISTEN_BACKLOG: int = 128
ACCEPT_POLL_SECS: float = 0.2
LOG_FORMAT: str = "plain"
