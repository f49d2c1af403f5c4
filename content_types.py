"""Extension-based MIME type and content kind classification."""

from enum import Enum
from pathlib import PurePath

DEFAULT_MIME_TYPE = "text/plain"

IMAGE_MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    "tiff": "image/tiff",
    "tif": "image/tiff",
}

VIDEO_MIME_TYPES: dict[str, str] = {
    "mp4": "video/mp4",
    "webm": "video/webm",
    "ogg": "video/ogg",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
    "mkv": "video/x-matroska",
    "wmv": "video/x-ms-wmv",
    "flv": "video/x-flv",
    "m4v": "video/x-m4v",
}


class ContentKind(Enum):
    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"


def _extension(file_path: str | PurePath) -> str:
    return PurePath(file_path).suffix.removeprefix(".").lower()


def get_mime_type(file_path: str | PurePath) -> str:
    extension = _extension(file_path)
    return IMAGE_MIME_TYPES.get(extension) or VIDEO_MIME_TYPES.get(extension) or DEFAULT_MIME_TYPE


def is_image_file(file_path: str | PurePath) -> bool:
    return _extension(file_path) in IMAGE_MIME_TYPES


def is_video_file(file_path: str | PurePath) -> bool:
    return _extension(file_path) in VIDEO_MIME_TYPES


def get_content_kind(file_path: str | PurePath) -> ContentKind:
    """Coarse kind used to pick between a binary and a text read."""
    if is_image_file(file_path):
        return ContentKind.IMAGE
    if is_video_file(file_path):
        return ContentKind.VIDEO
    return ContentKind.OTHER
