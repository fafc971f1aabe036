# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""healthprobe CLI."""

from __future__ import annotations

import argparse
import sys

from ..config import CheckSettings, load_settings
from ..errors import DispatchFatalError
from ..http import create_default_http_client
from ..log import setup_logging
from ..models import CheckReport, Endpoint, ProbeOutcome
from ..runtime import HealthChecker
from ..version import __version__

RULE = "━" * 23

DEFAULT_ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint(name="Github API", url="https://api.github.com"),
    Endpoint(name="JSONPlaceholder", url="https://jsonplaceholder.typicode.com/posts/1"),
    Endpoint(name="Dog Breeds API", url="https://dog.ceo/api/breeds/list/all"),
)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {parsed}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="healthcheck",
        description="A CLI tool for health checking endpoints",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    check = subparsers.add_parser(
        "check",
        help="Check the health of configured endpoints",
        description=(
            "Performs health checks on multiple endpoints concurrently. Each endpoint is "
            "checked via HTTP GET; results include status code, response time and health."
        ),
    )
    check.add_argument(
        "-t",
        "--timeout",
        type=_positive_int,
        default=None,
        help="Request timeout in seconds (default: 10, or HEALTHPROBE_TIMEOUT)",
    )
    check.add_argument(
        "-u",
        "--urls",
        action="append",
        default=[],
        help="Comma-separated list of endpoints to check (repeatable)",
    )
    check.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    check.add_argument(
        "--max-workers",
        type=_positive_int,
        default=None,
        help="Maximum number of concurrent probes (default: one per endpoint)",
    )
    return parser


def build_endpoints(raw_urls: list[str]) -> list[Endpoint]:
    """Turn --urls values into endpoints, falling back to the defaults."""
    urls = [url.strip() for chunk in raw_urls for url in chunk.split(",") if url.strip()]
    if not urls:
        return list(DEFAULT_ENDPOINTS)
    return [Endpoint(name=f"Custom-{index}", url=url) for index, url in enumerate(urls, start=1)]


def format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.2f}s"


def print_outcome(outcome: ProbeOutcome) -> None:
    status = "✓ HEALTHY" if outcome.healthy else "✗ UNHEALTHY"
    print(f"{status} [{outcome.endpoint.name}]")
    print(f"  URL: {outcome.endpoint.url}")
    if outcome.error is not None:
        print(f"  Error: {outcome.error}")
    else:
        print(f"  Status: {outcome.status_code}")
        print(f"  Response Time: {format_duration(outcome.duration)}")
    print()


def print_summary(report: CheckReport) -> None:
    print(RULE)
    print(
        f"✓ Health check complete: {report.total} endpoints "
        f"({report.healthy_count} healthy, {report.unhealthy_count} unhealthy) "
        f"in {format_duration(report.elapsed)}"
    )


def run_check(args: argparse.Namespace) -> int:
    settings: CheckSettings = load_settings()
    if args.timeout is not None:
        settings.timeout = float(args.timeout)
    if args.max_workers is not None:
        settings.max_workers = args.max_workers

    endpoints = build_endpoints(args.urls)

    print(f"Health Checker v{__version__}")
    print(RULE)
    if args.verbose:
        print(f"⚙️ Timeout: {settings.timeout:g}s")
    print()

    http_client = create_default_http_client(settings)
    try:
        with HealthChecker(http_client=http_client, settings=settings) as checker:
            report = checker.check(endpoints, on_outcome=print_outcome)
    except DispatchFatalError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print_summary(report)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=getattr(args, "verbose", False))

    if args.command != "check":
        parser.print_help(sys.stderr)
        return 2
    return run_check(args)


if __name__ == "__main__":
    raise SystemExit(main())
