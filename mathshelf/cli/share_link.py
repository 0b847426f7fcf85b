"""CLI to print a student share link for one chapter."""
import argparse

from mathshelf.actions import open_book, share_chapter_link
from mathshelf.cli.common import add_logging_args, console, exit_on_error, setup_logging
from mathshelf.models.session import SessionContext


def main():
    parser = argparse.ArgumentParser(
        description="Build a view-only link to a chapter"
    )
    parser.add_argument("--book", type=str, required=True, help="Book id")
    parser.add_argument("--chapter", type=int, required=True, help="Chapter index (0-based)")
    parser.add_argument(
        "--base-url",
        type=str,
        help="Viewer page the link points at (default: MATHSHELF_SHARE_BASE_URL)"
    )
    add_logging_args(parser)
    args = parser.parse_args()
    setup_logging(args)

    opened = open_book(SessionContext(), args.book)
    exit_on_error(opened)
    chapters = opened["book"]["chapters"]
    if not 0 <= args.chapter < len(chapters):
        console.print(f"[yellow]⚠ Book has no chapter {args.chapter}; link will open the whole book[/yellow]")

    result = share_chapter_link(args.book, args.chapter, args.base_url)
    console.print(result["url"])


if __name__ == "__main__":
    main()
