"""Command line tester: upload a PDF, wait for extraction and summarize it.

Usage:
    API_KEY=... python -m vector_api drawing.pdf
    API_KEY=... USE_LOCALHOST=1 python -m vector_api drawing.pdf --timeout 120
    API_KEY=... python -m vector_api drawing.pdf --legacy-paths
"""

from __future__ import annotations

import argparse
import logging
import sys

from vector_api.core.errors import VectorAPIError
from vector_api.schemas.vectors import VectorResult, VectorStatus
from vector_api.services.vector_client import VectorClient
from vector_api.settings import get_settings

log = logging.getLogger("vector_api.cli")


def summarize_result(data: VectorResult) -> list[str]:
    lines = [f"Got results for file {data.file_name} with {len(data.pages)} pages"]
    for page_num, page in enumerate(data.pages, start=1):
        points = sum(len(group.points) for group in page.groups)
        paths = sum(len(group.paths) for group in page.groups)
        lines.append(f"Page {page_num} has {len(page.groups)} groups with {points} points and {paths} paths")
    return lines


def _print_progress(status: VectorStatus) -> None:
    print("Got progress:", status.progress)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vector-api", description=__doc__.splitlines()[0])
    parser.add_argument("file", help="PDF file to upload")
    parser.add_argument("--poll-interval", type=float, default=None, help="Seconds between status checks")
    parser.add_argument("--timeout", type=float, default=None, help="Give up after this many seconds")
    parser.add_argument(
        "--legacy-paths",
        action="store_true",
        help="Decode paths in the older flat shape (one curve per path)",
    )
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=(args.log_level or settings.LOG_LEVEL).upper())

    if not settings.API_KEY:
        print(
            "Please set the 'API_KEY' environment variable to use the command line tester.",
            file=sys.stderr,
        )
        return 1
    if args.legacy_paths:
        settings = settings.model_copy(update={"VECTOR_API_PATH_REVISION": "flat"})

    with VectorClient(settings) as client:
        try:
            token = client.upload_pdf(args.file)
        except (VectorAPIError, OSError) as exc:
            print("Got upload error:", exc, file=sys.stderr)
            return 1
        print("Got token:", token)

        try:
            data = client.wait_for_result(
                token,
                poll_interval=args.poll_interval,
                timeout=args.timeout,
                on_progress=_print_progress,
            )
        except VectorAPIError as exc:
            log.debug("status loop failed code=%s details=%s", exc.code, exc.details)
            print("Got status error:", exc, file=sys.stderr)
            return 1

    for line in summarize_result(data):
        print(line)
    return 0
