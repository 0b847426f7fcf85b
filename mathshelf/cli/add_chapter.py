"""CLI to append a chapter to a book."""
import argparse

from rich.markup import escape

from mathshelf.actions import add_chapter, open_book
from mathshelf.cli.common import add_logging_args, admin_session, console, exit_on_error, setup_logging


def main():
    parser = argparse.ArgumentParser(
        description="Add a chapter to a book"
    )
    parser.add_argument("--book", type=str, required=True, help="Book id")
    parser.add_argument("name", type=str, help="Chapter name")
    add_logging_args(parser)
    args = parser.parse_args()
    setup_logging(args)

    session = admin_session()
    exit_on_error(open_book(session, args.book))

    result = add_chapter(session, args.name)
    exit_on_error(result)
    console.print(f"✓ [green]{escape(result['message'])}[/green] (chapter index {result['chapter_index']})")
    if not result["saved"]:
        console.print("[yellow]⚠ Catalog could not be saved[/yellow]")


if __name__ == "__main__":
    main()
