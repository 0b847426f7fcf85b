"""CLI to print the player URL for a video."""
import argparse

from rich.markup import escape

from mathshelf.actions import open_book, play_video
from mathshelf.cli.common import add_logging_args, console, exit_on_error, setup_logging
from mathshelf.models.session import SessionContext


def main():
    parser = argparse.ArgumentParser(
        description="Show what the player would load for a video"
    )
    parser.add_argument("--book", type=str, required=True, help="Book id")
    parser.add_argument("--chapter", type=int, required=True, help="Chapter index (0-based)")
    parser.add_argument("video", type=int, help="Video position in the chapter (0-based)")
    add_logging_args(parser)
    args = parser.parse_args()
    setup_logging(args)

    session = SessionContext()
    exit_on_error(open_book(session, args.book))

    result = play_video(session, args.chapter, args.video)
    exit_on_error(result)
    console.print(f"[bold]{escape(result['label'])}[/bold] [dim]({result['type']})[/dim]")
    console.print(result["embed_url"])


if __name__ == "__main__":
    main()
