"""Command-line access to a loose files store or an archive set.

Usage:
    content-assets PATH cat            # store stdin, print its digest
    content-assets PATH cat DIGEST     # write the asset to stdout
    content-assets PATH ls             # list stored digests
    content-assets -a PATH ...         # PATH holds archives (read-only)
"""

import argparse
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO, TextIO

from content_assets.digests import Digest
from content_assets.exceptions import ContentAssetsError, HashParseError
from content_assets.logging import setup_logging
from content_assets.settings import settings
from content_assets.stores import ArchiveSet, LooseFiles


def _digest_arg(value: str) -> Digest:
    try:
        return Digest.parse(value)
    except HashParseError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="content-assets", description="Content-addressed asset storage")
    parser.add_argument("-a", "--archives", action="store_true", help="PATH contains archives instead of loose files")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the log level",
    )
    parser.add_argument("path", type=Path, help="Location of the repository")
    subparsers = parser.add_subparsers(dest="command")
    cat = subparsers.add_parser("cat", help="Read or write a single asset")
    cat.add_argument(
        "digest",
        nargs="?",
        type=_digest_arg,
        help="Digest of the asset to write to stdout. If absent, new data is inserted from stdin.",
    )
    subparsers.add_parser("ls", help="List stored assets")
    return parser


def main(
    argv: list[str] | None = None,
    *,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Entry point for the content-assets CLI with cat/ls subcommands."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    setup_logging(level=args.log_level)
    stdin = stdin or sys.stdin.buffer
    stdout = stdout or sys.stdout.buffer
    stderr = stderr or sys.stderr

    try:
        if args.archives:
            return _run_archives(args, stdout, stderr)
        return _run_loose(args, stdin, stdout)
    except (ContentAssetsError, OSError) as e:
        print(f"Error: {e}", file=stderr)
        return 1


def _run_archives(args: argparse.Namespace, stdout: BinaryIO, stderr: TextIO) -> int:
    repo = ArchiveSet.open(args.path)
    if args.command == "ls":
        _print_digests(repo.list(), stdout)
        return 0
    if args.digest is None:
        print("archive sets are read-only", file=stderr)
        return 1
    stdout.write(memoryview(repo.get(args.digest)))
    stdout.flush()
    return 0


def _run_loose(args: argparse.Namespace, stdin: BinaryIO, stdout: BinaryIO) -> int:
    repo = LooseFiles.open(args.path, kind=settings.hash_kind)
    if args.command == "ls":
        _print_digests(repo.list(), stdout)
        return 0
    if args.digest is None:
        digest = repo.put_stream(stdin)
        stdout.write(f"{digest}\n".encode())
    else:
        stdout.write(memoryview(repo.get(args.digest)))
    stdout.flush()
    return 0


def _print_digests(digests: Iterable[Digest], stdout: BinaryIO) -> None:
    for digest in digests:
        stdout.write(f"{digest}\n".encode())
    stdout.flush()


if __name__ == "__main__":
    sys.exit(main())
