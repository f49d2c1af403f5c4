"""Mixed-target load generator for the file server.

Each worker cycles through file, directory listing and traversal targets and every
response is checked against the status (and, for listings, the content type) that
kind of target should produce. The report is broken down per kind.
"""

from __future__ import annotations

import argparse
import asyncio
import itertools
import json
import time
from collections import Counter
from dataclasses import dataclass, field

TRAVERSAL_TARGET = "/..%2F..%2Fetc%2Fpasswd"


@dataclass(frozen=True, slots=True)
class Target:
    kind: str
    path: str
    expected_status: int
    expected_content_type: str | None = None


@dataclass(slots=True)
class FetchResult:
    status: int
    content_type: str | None
    body: bytes


@dataclass(slots=True)
class KindStats:
    requests: int = 0
    errors: int = 0
    unexpected: int = 0
    status_counts: Counter[str] = field(default_factory=Counter)
    latencies_ms: list[float] = field(default_factory=list)

    def record(self, target: Target, result: FetchResult | None, latency_ms: float) -> None:
        self.requests += 1
        self.latencies_ms.append(latency_ms)
        if result is None:
            self.errors += 1
            return
        self.status_counts[str(result.status)] += 1
        if result.status != target.expected_status:
            self.unexpected += 1
        elif target.expected_content_type is not None and (
            result.content_type != target.expected_content_type
        ):
            self.unexpected += 1

    def summary(self, duration_secs: float) -> dict[str, float | int | dict[str, int]]:
        return {
            "requests": self.requests,
            "errors": self.errors,
            "unexpected": self.unexpected,
            "rps": round(self.requests / duration_secs, 2) if duration_secs > 0 else 0.0,
            "p50_ms": round(percentile(self.latencies_ms, 50), 2),
            "p95_ms": round(percentile(self.latencies_ms, 95), 2),
            "status_counts": dict(self.status_counts),
        }


@dataclass(slots=True)
class LoadReport:
    by_kind: dict[str, KindStats]
    duration_secs: float = 0.0

    @property
    def total_requests(self) -> int:
        return sum(stats.requests for stats in self.by_kind.values())

    @property
    def total_errors(self) -> int:
        return sum(stats.errors for stats in self.by_kind.values())

    def summary(self) -> dict[str, object]:
        return {
            "requests": self.total_requests,
            "errors": self.total_errors,
            "duration_secs": round(self.duration_secs, 3),
            "kinds": {
                kind: stats.summary(self.duration_secs) for kind, stats in self.by_kind.items()
            },
        }


def default_targets(file_path: str, directory_path: str) -> list[Target]:
    return [
        Target("file", file_path, 200),
        Target("directory", directory_path, 200, expected_content_type="text/html"),
        Target("traversal", TRAVERSAL_TARGET, 400),
    ]


def parse_response(raw: bytes) -> FetchResult:
    """Split a complete response into status, content type and body."""
    head, separator, body = raw.partition(b"\r\n\r\n")
    if not separator:
        raise ValueError("Response has no header terminator")

    status_line, *header_lines = head.decode("iso-8859-1").split("\r\n")
    parts = status_line.split(" ", 2)
    if len(parts) < 2 or not parts[0].startswith("HTTP/"):
        raise ValueError("Malformed status line")

    content_type = None
    for line in header_lines:
        name, _, value = line.partition(":")
        if name.strip().lower() == "content-type":
            content_type = value.strip()
    return FetchResult(status=int(parts[1]), content_type=content_type, body=body)


async def fetch(host: str, port: int, path: str, timeout: float) -> FetchResult:
    reader, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout=timeout)
    try:
        writer.write(f"GET {path} HTTP/1.1\r\nHost: {host}:{port}\r\n\r\n".encode("utf-8"))
        await writer.drain()
        # One response per connection, delimited by the server closing it.
        raw = await asyncio.wait_for(reader.read(), timeout=timeout)
    finally:
        writer.close()
        await writer.wait_closed()
    return parse_response(raw)


async def run_mixed_load(
    host: str,
    port: int,
    targets: list[Target],
    *,
    concurrency: int,
    duration_secs: float,
    timeout_secs: float,
) -> LoadReport:
    if not targets:
        raise ValueError("targets cannot be empty")

    report = LoadReport(by_kind={target.kind: KindStats() for target in targets})
    stop_at = time.perf_counter() + duration_secs

    async def worker(offset: int) -> None:
        rotation = itertools.islice(itertools.cycle(targets), offset % len(targets), None)
        for target in rotation:
            if time.perf_counter() >= stop_at:
                return
            started = time.perf_counter()
            try:
                result: FetchResult | None = await fetch(host, port, target.path, timeout_secs)
            except (OSError, asyncio.TimeoutError, ValueError):
                result = None
            latency_ms = (time.perf_counter() - started) * 1000
            report.by_kind[target.kind].record(target, result, latency_ms)

    started = time.perf_counter()
    await asyncio.gather(*(worker(index) for index in range(concurrency)))
    report.duration_secs = time.perf_counter() - started
    return report


def percentile(values: list[float], pct: int) -> float:
    if not values:
        return 0.0
    ordered = sorted(values)
    rank = (len(ordered) - 1) * min(max(pct, 0), 100) / 100
    lower = int(rank)
    upper = min(lower + 1, len(ordered) - 1)
    weight = rank - lower
    return ordered[lower] * (1 - weight) + ordered[upper] * weight


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run mixed file/listing/traversal load")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--file", default="/README.md", help="target expected to be a file")
    parser.add_argument("--directory", default="/", help="target expected to be a directory")
    parser.add_argument("--concurrency", type=int, default=50)
    parser.add_argument("--duration", type=float, default=10.0)
    parser.add_argument("--timeout", type=float, default=2.0)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    report = asyncio.run(
        run_mixed_load(
            args.host,
            args.port,
            default_targets(args.file, args.directory),
            concurrency=args.concurrency,
            duration_secs=args.duration,
            timeout_secs=args.timeout,
        )
    )
    print(json.dumps(report.summary(), indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
