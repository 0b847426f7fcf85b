"""CLI to add problem videos to a chapter, or edit one."""
import argparse

from rich.markup import escape

from mathshelf.actions import begin_add_video, begin_edit_video, open_book, save_video
from mathshelf.cli.common import add_logging_args, admin_session, console, exit_on_error, setup_logging


def main():
    parser = argparse.ArgumentParser(
        description="Add videos to a chapter (or edit one with --edit)"
    )
    parser.add_argument("--book", type=str, required=True, help="Book id")
    parser.add_argument("--chapter", type=int, required=True, help="Chapter index (0-based)")
    parser.add_argument(
        "--start",
        type=int,
        help="Problem number (first number in bulk mode); defaults to the next number"
    )
    parser.add_argument(
        "--title",
        type=str,
        help="Video title (single video only); --title \"\" resets an edited title to the default"
    )
    parser.add_argument(
        "--url",
        type=str,
        help="YouTube or file URL (single video only); --url \"\" unlinks an edited video"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="Add this many consecutive placeholders without links"
    )
    parser.add_argument(
        "--edit",
        type=int,
        metavar="INDEX",
        help="Edit the video at this position instead of adding"
    )
    add_logging_args(parser)
    args = parser.parse_args()
    setup_logging(args)

    session = admin_session()
    exit_on_error(open_book(session, args.book))

    if args.edit is not None:
        form = begin_edit_video(session, args.chapter, args.edit)
        exit_on_error(form)
        problem_no = args.start if args.start is not None else form["problem_no"]
        title = form["title"] if args.title is None else args.title
        url = form["url"] if args.url is None else args.url
        result = save_video(session, problem_no, title, url)
    else:
        form = begin_add_video(session, args.chapter)
        exit_on_error(form)
        problem_no = args.start if args.start is not None else form["problem_no"]
        if args.count > 1 and args.title:
            console.print("[yellow]⚠ --title is ignored when adding several videos[/yellow]")
        result = save_video(session, problem_no, args.title or "", args.url or "", args.count)

    exit_on_error(result)
    numbers = ", ".join(str(n) for n in result["problem_nos"])
    console.print(f"✓ [green]{escape(result['message'])}[/green]: {numbers}")
    if not result["saved"]:
        console.print("[yellow]⚠ Catalog could not be saved[/yellow]")


if __name__ == "__main__":
    main()
