"""rcpt CLI: run a command and emit an execution receipt."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import List, Optional

from rcpt.errors import RcptError, WRAPPER_FAILURE_EXIT_CODE

DEFAULT_RECEIPT_PATH = "receipt.json"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the rcpt command."""
    try:
        rcpt_version = get_version("rcpt")
    except PackageNotFoundError:
        rcpt_version = "dev"

    parser = argparse.ArgumentParser(
        prog="rcpt",
        description="Execute commands and emit execution receipts as JSON"
    )
    parser.add_argument("--version", action="version", version=f"rcpt {rcpt_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug diagnostics to stderr."
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run a command and emit an execution receipt",
        parents=[parent_parser]
    )
    run_parser.add_argument(
        "-o",
        "--out",
        type=Path,
        default=Path(DEFAULT_RECEIPT_PATH),
        help=f"Output path for the receipt JSON file (defaults to '{DEFAULT_RECEIPT_PATH}')"
    )
    run_parser.set_defaults(run_parser=run_parser)
    run_parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to execute, followed by its arguments (use -- to separate)"
    )
    return parser


def _command_tokens(raw: List[str]) -> List[str]:
    """Drop the leading '--' separator, if argparse left it in place."""
    if raw and raw[0] == "--":
        return raw[1:]
    return raw


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point for rcpt commands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.subcommand:
        parser.print_help()
        sys.exit(WRAPPER_FAILURE_EXIT_CODE)

    if args.subcommand == "run":
        command = _command_tokens(args.command)
        if not command:
            # error() exits with status 2 and a usage line on stderr
            args.run_parser.error("the following arguments are required: command")

        _configure_logging(args.verbose)

        # Lazy import: only import executor and writer when run is invoked
        from rcpt.executor import execute_command
        from rcpt.writer import write_receipt

        try:
            receipt = execute_command(command)
            out_path = write_receipt(args.out, receipt)
        except RcptError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(WRAPPER_FAILURE_EXIT_CODE)

        if not args.quiet:
            print(f"Receipt written to: {out_path}")

        # Exit with the same code as the wrapped command (1 if it died from a signal)
        sys.exit(receipt.process_exit_code)

    parser.print_help()
    sys.exit(WRAPPER_FAILURE_EXIT_CODE)


if __name__ == "__main__":
    main()
