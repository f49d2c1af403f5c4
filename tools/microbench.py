"""Micro-benchmarks for URL coding, MIME detection and path resolution."""

from __future__ import annotations

import argparse
import json
import tempfile
import timeit
from collections.abc import Callable
from pathlib import Path

from content_types import get_mime_type
from url_codec import url_decode, url_encode
from utils import resolve_requested_path

DECODE_CASES = [
    "hello%20world",
    "path%2Fwith%2Fslashes%2Fand%2Fmore%2Fslashes",
    "complex%21%40%23%24%25%5E%26%2A%28%29",
    "very%20long%20path%20with%20many%20encoded%20characters%20%21%40%23%24%25%5E%26%2A%28%29",
]
ENCODE_CASES = [
    "hello world",
    "file with spaces.txt",
    "special!@#$%^&*()characters",
    "very long filename with many special characters !@#$%^&*() and more",
]
MIME_CASES = ["test.jpg", "test.PNG", "movie.mp4", "clip.MKV", "notes.txt", "README"]
TARGETS = ["/", "/docs", "/docs/readme.txt", "/../etc/passwd", "/missing.txt"]


def _time_per_call(func: Callable[[], object], number: int) -> float:
    return timeit.timeit(func, number=number) / number * 1_000_000


def run_benchmarks(root: Path, number: int) -> dict[str, float]:
    """Return microseconds per call for each benchmark."""
    return {
        "url_decode_us": _time_per_call(lambda: [url_decode(case) for case in DECODE_CASES], number),
        "url_encode_us": _time_per_call(lambda: [url_encode(case) for case in ENCODE_CASES], number),
        "mime_type_us": _time_per_call(lambda: [get_mime_type(case) for case in MIME_CASES], number),
        "resolve_path_us": _time_per_call(
            lambda: [resolve_requested_path(target, root) for target in TARGETS], number
        ),
    }


def _build_fixture(root: Path) -> None:
    (root / "docs").mkdir()
    (root / "docs" / "readme.txt").write_text("benchmark\n", encoding="utf-8")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Time the request resolution pipeline")
    parser.add_argument("--number", type=int, default=10_000)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    with tempfile.TemporaryDirectory() as tmp_dir:
        root = Path(tmp_dir)
        _build_fixture(root)
        results = run_benchmarks(root, args.number)
    results = {name: round(value, 3) for name, value in results.items()}
    print(json.dumps(results, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
