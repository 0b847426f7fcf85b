"""CLI to delete a book by its position within a grade."""
import argparse

from rich.markup import escape
from rich.prompt import Confirm

from mathshelf.actions import delete_book, list_shelf
from mathshelf.cli.common import add_logging_args, admin_session, console, exit_on_error, setup_logging


def main():
    parser = argparse.ArgumentParser(
        description="Delete a book (and all its chapters and videos)"
    )
    parser.add_argument("grade_id", type=str, help="Grade id")
    parser.add_argument("index", type=int, help="Position of the book in the grade (0-based)")
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Do not ask for confirmation"
    )
    add_logging_args(parser)
    args = parser.parse_args()
    setup_logging(args)

    if not args.yes:
        shelf = list_shelf()
        exit_on_error(shelf)
        grade = next((g for g in shelf["grades"] if g["id"] == args.grade_id), None)
        if grade and 0 <= args.index < len(grade["books"]):
            title = grade["books"][args.index]["title"]
            if not Confirm.ask(f"'{escape(title)}' 문제집을 삭제하시겠습니까?"):
                return

    result = delete_book(admin_session(), args.grade_id, args.index)
    exit_on_error(result)
    console.print(f"✓ [green]{escape(result['message'])}[/green]")
    if not result["saved"]:
        console.print("[yellow]⚠ Catalog could not be saved[/yellow]")


if __name__ == "__main__":
    main()
