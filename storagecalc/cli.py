"""
Module: cli
Purpose: Command-line interface entry point.
"""

import argparse
import os
import sys
from typing import List

from . import reporting
from .cli_formatter import CLIFormatter, detect_terminal_capabilities
from .exceptions import ProbeError, StorageCalcError
from .probe import probe_image
from .session import Session
from .utils import (
    DEFAULT_PIXEL_LIMIT,
    MAX_OVERRIDE_LIMIT,
    PIXEL_LIMIT_ENV,
    configure_pixel_limit,
    log_info,
)

_RUN_LOG_PATH: str | None = None


def _ensure_run_log_path() -> str:
    """
    Guarantee storagecalc.log exists and return its absolute path.
    """
    global _RUN_LOG_PATH
    if _RUN_LOG_PATH:
        return _RUN_LOG_PATH
    _RUN_LOG_PATH = reporting.ensure_log_initialized()
    return _RUN_LOG_PATH


def _current_log_path() -> str:
    if _RUN_LOG_PATH:
        return _RUN_LOG_PATH
    return os.path.abspath(reporting.LOG_FILE_NAME)


def _pixel_limit_arg(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Pixel limit must be an integer.") from exc
    if parsed < DEFAULT_PIXEL_LIMIT or parsed > MAX_OVERRIDE_LIMIT:
        raise argparse.ArgumentTypeError(
            f"Pixel limit must be between {DEFAULT_PIXEL_LIMIT} and {MAX_OVERRIDE_LIMIT}."
        )
    return parsed


def _preload_files(session: Session, paths: List[str]) -> int:
    """
    Register image files given on the command line. Files that cannot
    be identified are reported and skipped.
    """
    loaded = 0
    for path in paths:
        try:
            fmt, width, height = probe_image(path)
        except ProbeError as exc:
            session.formatter.warning(f"[skipped] {exc}")
            continue
        session.formatter.line(f"{os.path.basename(path)} ({width}x{height})")
        session.add_image(fmt, width, height)
        loaded += 1
    return loaded


def _write_report(session: Session, outfile: str) -> None:
    try:
        reporting.write_json_report(session.catalog.records, session.groups, session.total, outfile)
    except OSError as exc:
        raise StorageCalcError(f"Unable to write report {outfile}: {exc}") from exc
    log_info(f"Session report written to {os.path.abspath(outfile)}")


def main():
    """
    Argument parser entry point.

    Args:
        None

    Returns:
        None

    Raises:
        SystemExit: When execution fails.
    """
    parser = argparse.ArgumentParser(
        prog="storagecalc",
        description=(
            "Estimate image storage footprints. Reads one command per line from stdin: "
            "'<jpg|j|jp2|jpeg2000|bmp> <width> <height>', 'g <index> ...' or 'q'."
        ),
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Image files (JPEG, JPEG 2000, BMP) to catalog before reading commands.",
    )
    parser.add_argument(
        "--no-banner",
        action="store_true",
        help="Suppress the usage header.",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Plain mode: ASCII-only separators, no ANSI colors.",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default=None,
        help="Force color usage: auto (default), always, or never.",
    )
    parser.add_argument(
        "--max-pixels",
        type=_pixel_limit_arg,
        default=None,
        help=(
            f"Override Pillow decompression guard for probed files (default {DEFAULT_PIXEL_LIMIT} pixels). "
            f"Maximum allowed is {MAX_OVERRIDE_LIMIT}. Also configurable via ${PIXEL_LIMIT_ENV}."
        ),
    )
    parser.add_argument(
        "--report",
        metavar="PATH",
        default=None,
        help="Write a JSON summary of images, groups and the final total on exit.",
    )
    args = parser.parse_args()

    config = detect_terminal_capabilities(
        color_preference=args.color,
        plain_mode=args.plain,
        no_banner=args.no_banner,
    )
    formatter = CLIFormatter(config=config)

    try:
        _ensure_run_log_path()
        limit, source = configure_pixel_limit(args.max_pixels)
        log_info(f"Session started (pixel limit {limit:,} from {source})")
        formatter.print_banner()
        session = Session(formatter=formatter)
        if args.files:
            _preload_files(session, args.files)
        session.run(sys.stdin)
        if args.report:
            _write_report(session, args.report)
    except KeyboardInterrupt:
        reporting.write_log(["[WARNING] Session aborted via Ctrl+C"])
        formatter.failure_summary(
            reason="Interrupted by user (Ctrl+C).",
            log_hint=_current_log_path(),
            remediation=["Re-run the command when ready."],
        )
        sys.exit(1)
    except StorageCalcError as exc:
        reporting.write_log([f"[ERROR] {exc}"])
        formatter.failure_summary(
            reason=str(exc),
            log_hint=_current_log_path(),
            remediation=["Address the reported issue, then rerun the command."],
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
