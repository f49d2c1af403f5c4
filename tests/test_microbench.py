"""Smoke test for the micro-benchmark helpers."""

from pathlib import Path

from tools.microbench import _build_fixture, run_benchmarks


def test_run_benchmarks_reports_each_operation(tmp_path: Path) -> None:
    _build_fixture(tmp_path)

    results = run_benchmarks(tmp_path, number=5)

    assert set(results) == {"url_decode_us", "url_encode_us", "mime_type_us", "resolve_path_us"}
    assert all(value > 0 for value in results.values())
