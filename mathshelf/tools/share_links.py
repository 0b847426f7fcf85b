"""Share links that open a single book/chapter in view-only mode."""
from typing import Optional
from urllib.parse import parse_qs, urlparse


def build_share_link(base_url: str, book_id: str, chapter_index: int) -> str:
    """e.g. build_share_link("https://x/", "b1", 0) -> "https://x/?book=b1&chapter=0"."""
    return f"{base_url}?book={book_id}&chapter={chapter_index}"


def parse_share_link(url: str) -> tuple[Optional[str], Optional[int]]:
    """Return (book_id, chapter_index) from a share link; missing parts are None."""
    params = parse_qs(urlparse(url).query)
    book_id = params.get("book", [None])[0] or None

    chapter_index = None
    raw_chapter = params.get("chapter", [None])[0]
    if raw_chapter is not None:
        try:
            chapter_index = int(raw_chapter)
        except ValueError:
            chapter_index = None

    return book_id, chapter_index
