"""File, directory listing and error response handlers."""

import html
import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path

from content_types import ContentKind, get_content_kind, get_mime_type
from response import HTTPResponse
from url_codec import url_encode
from utils import WINDOWS_LONG_PATH_PREFIX

logger = logging.getLogger(__name__)

LONG_PATH_NOTE = (
    "'\\\\?\\' is a Windows MAX_PATH feature that allows paths longer than 260 characters"
)

PAGE_HEAD = """<!DOCTYPE html>
<html>
<head>
    <style>
        body { font-family: monospace; }
    </style>
</head>
<body>
"""


@dataclass(slots=True)
class DirectoryListing:
    directories: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)


def bad_request() -> HTTPResponse:
    return HTTPResponse(status_code=400, body="Bad Request")


def internal_error(message: str) -> HTTPResponse:
    return HTTPResponse(status_code=500, body=message)


def serve_file(file_path: Path) -> HTTPResponse:
    """Serve a regular file.

    Images and videos go out as raw bytes with an explicit Content-Length. Anything
    else is read as UTF-8 text and sent without one.
    """
    kind = get_content_kind(file_path)
    mime_type = get_mime_type(file_path)

    if kind is not ContentKind.OTHER:
        try:
            body = file_path.read_bytes()
        except OSError:
            logger.warning("Failed to read %s file %s", kind.value, file_path, exc_info=True)
            return internal_error(f"Error reading {kind.value}")
        return HTTPResponse(
            status_code=200,
            headers={"Content-Type": mime_type},
            body=body,
            include_content_length=True,
        )

    try:
        # Decoded from bytes so CRLF and lone CR line endings reach the client untouched.
        contents = file_path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError):
        logger.warning("Failed to read file %s", file_path, exc_info=True)
        return internal_error("Error reading file")
    return HTTPResponse(
        status_code=200,
        headers={"Content-Type": mime_type},
        body=contents,
    )


def list_directory(dir_path: Path) -> DirectoryListing:
    """Split the entries of ``dir_path`` into sorted directory and file names.

    Entries whose metadata cannot be read (broken symlinks, races with deletion)
    are left out. Raises ``OSError`` if the directory itself cannot be listed.
    """
    listing = DirectoryListing()
    with os.scandir(dir_path) as entries:
        for entry in entries:
            try:
                mode = entry.stat().st_mode
            except OSError:
                continue
            if stat.S_ISDIR(mode):
                listing.directories.append(entry.name)
            else:
                listing.files.append(entry.name)
    listing.directories.sort()
    listing.files.sort()
    return listing


def _display(text: str) -> str:
    # Undecodable file names arrive as surrogate escapes.
    text = text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    return html.escape(text)


def _heading(dir_path: Path) -> str:
    display = _display(str(dir_path))
    if WINDOWS_LONG_PATH_PREFIX in str(dir_path):
        return f'<abbr title="{html.escape(LONG_PATH_NOTE)}">{display}</abbr>'
    return display


def _link(icon: str, target: str, label: str) -> str:
    href = "/" + url_encode(target)
    return f"{icon} <a href=\"{href}\">{_display(label)}</a><br>"


def _join_tail(tail: str, name: str) -> str:
    return f"{tail}/{name}" if tail else name


def serve_directory(dir_path: Path, tail: str, *, is_root: bool) -> HTTPResponse:
    """Render an HTML listing of ``dir_path``.

    ``tail`` is the decoded request path without leading slashes; links for the
    parent and each entry are built from it.
    """
    try:
        listing = list_directory(dir_path)
    except OSError:
        logger.warning("Failed to list directory %s", dir_path, exc_info=True)
        return internal_error("Error reading directory")

    tail = tail.rstrip("/")
    parts = [PAGE_HEAD, f"<h1>Contents of: {_heading(dir_path)}</h1>\n"]

    if not is_root:
        parent_tail = tail.rpartition("/")[0]
        parts.append(_link("&#8592;", parent_tail, "Parent Directory") + "<br>\n")

    for name in listing.directories:
        parts.append(_link("&#128193;", _join_tail(tail, name), name) + "\n")
    for name in listing.files:
        parts.append(_link("&#128196;", _join_tail(tail, name), name) + "\n")

    parts.append("</body>\n</html>\n")
    return HTTPResponse(
        status_code=200,
        headers={"Content-Type": "text/html"},
        body="".join(parts),
    )
