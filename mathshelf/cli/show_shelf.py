"""CLI to browse the shelf, a single book, or the target of a share link."""
import argparse
import locale

from rich.color import Color, ColorParseError
from rich.markup import escape
from rich.tree import Tree

from mathshelf.actions import list_shelf, open_book, open_deep_link
from mathshelf.cli.common import add_logging_args, console, exit_on_error, setup_logging
from mathshelf.config import is_read_only
from mathshelf.models.session import SessionContext
from mathshelf.tools.playback import FALLBACK_COVER_COLOR


def _cover_style(fill: str) -> str:
    """Background style for a cover color; unparseable colors use the fallback."""
    try:
        Color.parse(fill)
    except ColorParseError:
        return f"on {FALLBACK_COVER_COLOR}"
    return f"on {fill}"


def render_book(book: dict, target_chapter: int | None = None) -> Tree:
    tree = Tree(f"[bold]{escape(book['title'])}[/bold] [dim]({escape(book['id'])})[/dim]")
    for chapter in book["chapters"]:
        if target_chapter is not None and chapter["index"] != target_chapter:
            continue
        index_label = escape(f"[{chapter['index']}]")
        branch = tree.add(f"{index_label} [cyan]{escape(chapter['name'])}[/cyan]")
        if not chapter["videos"]:
            branch.add("[dim](no videos)[/dim]")
            continue
        cells = []
        for video in chapter["videos"]:
            if video["has_link"]:
                cells.append(f"[green]{video['problem_no']}[/green]")
            else:
                cells.append(f"[dim]{video['problem_no']}[/dim]")
        branch.add(" ".join(cells))
    return tree


def render_shelf(grades: list[dict]) -> Tree:
    shelf = Tree("[bold cyan]Bookshelf[/bold cyan]")
    for grade in grades:
        section = shelf.add(f"[bold]{escape(grade['name'])}[/bold] [dim]({escape(grade['id'])})[/dim]")
        for position, book in enumerate(grade["books"]):
            if book["cover_image"]:
                cover = "[dim]🖼[/dim]"
            else:
                cover = f"[{_cover_style(book['cover_fill'])}] {escape(book['cover_label'])} [/]"
            section.add(
                f"{position}. {cover} {escape(book['title'])} "
                f"[dim]{escape(book['id'])} · {book['chapter_count']} chapters[/dim]"
            )
    return shelf


def main():
    parser = argparse.ArgumentParser(
        description="Show the bookshelf"
    )
    parser.add_argument(
        "--book",
        type=str,
        help="Show chapters and videos of this book id"
    )
    parser.add_argument(
        "--link",
        type=str,
        help="Open a share link (view-only, single chapter)"
    )
    add_logging_args(parser)
    args = parser.parse_args()
    setup_logging(args)

    # grade names collate per the user's locale
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        pass

    session = SessionContext(read_only=is_read_only())

    if args.link:
        result = open_deep_link(session, args.link)
        if result["status"] == "success":
            console.print(render_book(result["book"], result["target_chapter"]))
            return
        # unknown book: fall back to the shelf
        console.print(f"[yellow]{escape(result['message'])}[/yellow]\n")

    if args.book:
        result = open_book(session, args.book)
        exit_on_error(result)
        console.print(render_book(result["book"]))
        return

    result = list_shelf()
    exit_on_error(result)

    if not result["grades"]:
        console.print("Shelf is empty. Add a book with mathshelf-add-book.")
        return

    console.print(render_shelf(result["grades"]))
    console.print(f"\n{escape(result['message'])}")


if __name__ == "__main__":
    main()
