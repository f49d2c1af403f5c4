"""Utility helpers shared across server modules."""

import os
from pathlib import Path, PurePath

from url_codec import url_decode

WINDOWS_LONG_PATH_PREFIX = "\\\\?\\"


def _repair_utf8(text: str) -> str:
    # Decoded escapes are one character per byte; read them back as UTF-8 when they form it.
    try:
        return text.encode("latin-1").decode("utf-8")
    except UnicodeError:
        return text


def request_tail(raw_target: str) -> str:
    """Decode a request target and strip its leading slashes."""
    return _repair_utf8(url_decode(raw_target)).lstrip("/")


def strip_long_path_prefix(path: Path) -> Path:
    text = str(path)
    if text.startswith(WINDOWS_LONG_PATH_PREFIX):
        return Path(text.removeprefix(WINDOWS_LONG_PATH_PREFIX))
    return path


def _is_traversal_attempt(tail: str) -> bool:
    if os.path.isabs(tail) or PurePath(tail).anchor:
        return True
    return ".." in PurePath(tail).parts


def _canonicalize(path: Path) -> Path | None:
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return None


def resolve_requested_path(raw_target: str, root: str | os.PathLike[str]) -> Path | None:
    """Resolve a request target to a path confined to ``root``.

    Returns ``None`` for traversal attempts, absolute paths and anything that does
    not exist; callers answer all of these the same way.
    """
    root_path = Path(root)
    tail = request_tail(raw_target)
    if not tail:
        return root_path

    if _is_traversal_attempt(tail):
        return None

    candidate = _canonicalize(root_path / tail)
    canonical_root = _canonicalize(root_path)
    if candidate is None or canonical_root is None:
        return None

    try:
        strip_long_path_prefix(candidate).relative_to(strip_long_path_prefix(canonical_root))
    except ValueError:
        return None

    return candidate
