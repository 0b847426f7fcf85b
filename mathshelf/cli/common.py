"""Shared CLI plumbing: logging switches and the per-run session."""
import argparse
import logging
import sys

from rich.markup import escape
from rich.console import Console

from mathshelf.config import is_read_only
from mathshelf.models.session import SessionContext


console = Console()


def add_logging_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )


def setup_logging(args: argparse.Namespace) -> None:
    if args.debug:
        log_level = logging.DEBUG
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    elif args.verbose:
        log_level = logging.INFO
        log_format = "%(asctime)s - %(levelname)s - %(message)s"
    else:
        log_level = logging.WARNING
        log_format = "%(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def admin_session() -> SessionContext:
    """Session for editing commands; read-only deployments refuse edits."""
    read_only = is_read_only()
    return SessionContext(admin_mode=not read_only, read_only=read_only)


def exit_on_error(result: dict) -> None:
    """Print an error result and exit 1; success results pass through."""
    if result["status"] != "success":
        console.print(f"[red]✗ {escape(result['message'])}[/red]")
        sys.exit(1)
