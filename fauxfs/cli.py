"""Command-line front door for fauxfs.

Parses arguments, asks for confirmation, drives ``generate_tree`` and prints
the run summary followed by the filesystem's inode usage.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from .generator import GenerationRequest, GenerationResult, NullProgress, TqdmProgress, generate_tree
from .logger import setup_logger
from .probe import ProbeError, create_provider, query_inode_usage
from .sizes import format_number, human_readable_size
from .style import RULE, Palette, resolve_palette
from .writer import SIGNATURE_LENGTH


PROG_NAME = "fauxFS"


class ArgumentError(ValueError):
    """Raised when command-line arguments are missing or malformed."""


class UserAbort(RuntimeError):
    """Raised when the user declines the confirmation prompt."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ArgumentError(message)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="fauxfs",
        description="Generate a tree of randomly sized files to load-test a filesystem.",
    )
    parser.add_argument("base_path", type=Path, help="Directory under which dir_<i>/file_<i>.bin are created.")
    parser.add_argument("count", type=_positive_int, help="Number of directory/file pairs to create.")
    parser.add_argument("max_size", type=_positive_int, help="Maximum file size in bytes.")
    parser.add_argument(
        "--signature",
        action="store_true",
        help="Prefix every file with the EICAR antivirus test string.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible file contents.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    parser.add_argument("--no-progress", action="store_true", help="Do not draw the progress bar.")
    parser.add_argument(
        "--inode-provider",
        choices=("auto", "df", "none"),
        default="auto",
        help="How to query filesystem inode usage after generation.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write log records to this file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress details to stderr.")
    return parser


def print_banner(palette: Palette) -> None:
    print(palette.paint("rule", RULE))
    print(palette.paint("banner", PROG_NAME))
    print(palette.paint("banner", "Filesystem load generator"))
    print(palette.paint("rule", RULE))


def confirm(request: GenerationRequest, palette: Palette) -> None:
    mode = "on" if request.use_signature else "off"
    print(
        palette.paint(
            "warning",
            f"You are about to create {format_number(request.count)} files with a maximum size of "
            f"{human_readable_size(request.max_size)} each.",
        )
    )
    print(palette.paint("warning", f"Signature mode: {mode}"))
    if request.use_signature and request.max_size < SIGNATURE_LENGTH:
        print(
            palette.paint(
                "warning",
                f"Max size is below the {SIGNATURE_LENGTH}-byte signature; files will hold the full signature.",
            )
        )
    print(palette.paint("warning", "Do you want to proceed? (yes/no): "), flush=True)

    answer = sys.stdin.readline()
    if answer.strip().lower() != "yes":
        raise UserAbort("Operation cancelled by the user.")


def print_summary(result: GenerationResult, palette: Palette) -> None:
    lines = [
        f"Created {format_number(result.files_created)} files and directories in {result.elapsed_seconds:.2f}s",
        f"Total size: {human_readable_size(result.total_bytes_written)}",
        f"Average file size: {human_readable_size(result.average_size)}",
        f"Total inodes used (estimated): {format_number(result.inode_estimate)}",
    ]
    for line in lines:
        print(palette.paint("summary", line))
    print(palette.paint("rule", RULE))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except ArgumentError as exc:
        sys.stderr.write(parser.format_usage())
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return 1

    palette = resolve_palette(args.no_color, sys.stdout.isatty())
    logger = setup_logger(args.log_file, level=logging.INFO if args.verbose else logging.WARNING)
    request = GenerationRequest(
        base_path=args.base_path,
        count=args.count,
        max_size=args.max_size,
        use_signature=args.signature,
    )

    print_banner(palette)
    try:
        confirm(request, palette)
    except UserAbort as exc:
        logger.info("Run aborted at confirmation")
        print(palette.paint("warning", str(exc)))
        return 1

    progress = NullProgress() if args.no_progress else TqdmProgress(total=request.count)
    try:
        result = generate_tree(request, rng=random.Random(args.seed), progress=progress, logger=logger)
    except OSError as exc:
        logger.info("Generation failed: %s", exc)
        print(palette.paint("error", f"Error creating files: {exc}"), file=sys.stderr)
        return 1

    print_summary(result, palette)
    try:
        inode_usage = query_inode_usage(args.base_path, create_provider(args.inode_provider))
    except ProbeError as exc:
        logger.info("Inode probe failed: %s", exc)
        print(palette.paint("error", f"Error querying inode usage: {exc}"), file=sys.stderr)
        return 0
    print(palette.paint("probe", f"Filesystem inode usage: {format_number(inode_usage)}"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
