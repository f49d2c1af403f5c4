"""Unit tests for file, directory and error response handlers."""

import os
from pathlib import Path

import pytest

from handlers.file_handlers import bad_request, list_directory, serve_directory, serve_file


@pytest.fixture()
def root(tmp_path: Path) -> Path:
    (tmp_path / "sub dir").mkdir()
    (tmp_path / "sub dir" / "inner.txt").write_text("inner", encoding="utf-8")
    (tmp_path / "alpha").mkdir()
    (tmp_path / "notes.txt").write_text("Static file is working\n", encoding="utf-8")
    (tmp_path / "a&b?.txt").write_text("odd name", encoding="utf-8")
    (tmp_path / "pixel.PNG").write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff")
    (tmp_path / "clip.mp4").write_bytes(b"\x00\x00\x00\x18ftypmp42")
    (tmp_path / "binary.dat").write_bytes(b"\xff\xfe\x00bad utf8")
    return tmp_path


def test_serve_text_file(root: Path) -> None:
    response = serve_file(root / "notes.txt")

    assert response.status_code == 200
    assert response.headers == {"Content-Type": "text/plain"}
    assert response.body == b"Static file is working\n"
    assert b"Content-Length" not in response.to_bytes()


def test_serve_image_as_raw_bytes(root: Path) -> None:
    response = serve_file(root / "pixel.PNG")
    raw = response.to_bytes()

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "image/png"
    assert response.body == b"\x89PNG\r\n\x1a\n\x00\xff"
    assert b"Content-Length: 10\r\n" in raw


def test_serve_video_as_raw_bytes(root: Path) -> None:
    response = serve_file(root / "clip.mp4")

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "video/mp4"
    assert response.include_content_length is True


def test_invalid_utf8_text_file_returns_500(root: Path) -> None:
    response = serve_file(root / "binary.dat")

    assert response.status_code == 500
    assert response.body == b"Error reading file"


def test_unreadable_image_returns_500(root: Path) -> None:
    response = serve_file(root / "vanished.jpg")

    assert response.status_code == 500
    assert response.body == b"Error reading image"


def test_unreadable_video_returns_500(root: Path) -> None:
    response = serve_file(root / "vanished.webm")

    assert response.status_code == 500
    assert response.body == b"Error reading video"


def test_list_directory_partitions_and_sorts(root: Path) -> None:
    listing = list_directory(root)

    assert listing.directories == ["alpha", "sub dir"]
    assert listing.files == ["a&b?.txt", "binary.dat", "clip.mp4", "notes.txt", "pixel.PNG"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_list_directory_skips_broken_entries(root: Path) -> None:
    try:
        (root / "dangling").symlink_to(root / "nowhere")
    except OSError:
        pytest.skip("cannot create symlinks here")

    listing = list_directory(root)

    assert "dangling" not in listing.files
    assert "dangling" not in listing.directories


def test_root_listing_has_links_and_no_parent(root: Path) -> None:
    response = serve_directory(root, "", is_root=True)
    body = response.body.decode("utf-8")

    assert response.status_code == 200
    assert response.headers == {"Content-Type": "text/html"}
    assert f"<h1>Contents of: {root}</h1>" in body
    assert "Parent Directory" not in body
    assert '&#128193; <a href="/sub%20dir">sub dir</a><br>' in body
    assert '&#128193; <a href="/alpha">alpha</a><br>' in body
    assert '&#128196; <a href="/notes.txt">notes.txt</a><br>' in body
    assert '&#128196; <a href="/a%26b%3F.txt">a&amp;b?.txt</a><br>' in body


def test_directories_are_listed_before_files(root: Path) -> None:
    body = serve_directory(root, "", is_root=True).body.decode("utf-8")

    assert body.index("sub%20dir") < body.index("a%26b%3F.txt")


def test_subdirectory_listing_has_parent_link(root: Path) -> None:
    response = serve_directory(root / "sub dir", "sub dir", is_root=False)
    body = response.body.decode("utf-8")

    assert '&#8592; <a href="/">Parent Directory</a><br><br>' in body
    assert '<a href="/sub%20dir/inner.txt">inner.txt</a>' in body


def test_nested_parent_link_drops_last_segment(tmp_path: Path) -> None:
    nested = tmp_path / "a" / "b c"
    nested.mkdir(parents=True)

    body = serve_directory(nested, "a/b c/", is_root=False).body.decode("utf-8")

    assert '<a href="/a">Parent Directory</a>' in body


def test_empty_directory_listing_is_ok(tmp_path: Path) -> None:
    response = serve_directory(tmp_path, "", is_root=True)

    assert response.status_code == 200
    assert b"&#128196;" not in response.body
    assert response.body.rstrip().endswith(b"</html>")


def test_missing_directory_returns_500(tmp_path: Path) -> None:
    response = serve_directory(tmp_path / "gone", "gone", is_root=False)

    assert response.status_code == 500
    assert response.body == b"Error reading directory"


def test_bad_request() -> None:
    assert bad_request().to_bytes() == b"HTTP/1.1 400 Bad Request\r\n\r\nBad Request"


def test_text_file_line_endings_are_preserved(tmp_path: Path) -> None:
    (tmp_path / "win.txt").write_bytes(b"line1\r\nline2\rend\n")

    response = serve_file(tmp_path / "win.txt")

    assert response.status_code == 200
    assert response.body == b"line1\r\nline2\rend\n"
