"""CLI to add a book to a grade (creating the grade if needed)."""
import argparse

from rich.markup import escape

from mathshelf.actions import add_book
from mathshelf.cli.common import add_logging_args, admin_session, console, exit_on_error, setup_logging


def main():
    parser = argparse.ArgumentParser(
        description="Add a book to the shelf"
    )
    parser.add_argument("title", type=str, help="Book title")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--grade",
        type=str,
        help="Existing grade id"
    )
    group.add_argument(
        "--new-grade",
        type=str,
        help="Create a new grade with this name"
    )
    parser.add_argument(
        "--cover",
        type=str,
        help="Path or URL of a cover image"
    )
    add_logging_args(parser)
    args = parser.parse_args()
    setup_logging(args)

    result = add_book(
        admin_session(),
        title=args.title,
        grade_id=args.grade,
        new_grade_name=args.new_grade,
        cover_image=args.cover,
    )
    exit_on_error(result)

    book = result["book"]
    console.print(f"✓ [green]{escape(result['message'])}[/green]")
    console.print(f"  Book id:  {book['id']}")
    console.print(f"  Grade id: {result['grade_id']}")
    if not result["saved"]:
        console.print("[yellow]⚠ Catalog could not be saved[/yellow]")


if __name__ == "__main__":
    main()
