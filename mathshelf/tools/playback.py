"""How books and videos are presented: cover fallbacks and player URLs."""
from mathshelf.models.catalog import Book, Video

FALLBACK_COVER_COLOR = "#bdc3c7"


def embed_url(video: Video) -> str:
    """URL to load in the player. YouTube watch/short links become embed links."""
    url = video.url
    if video.type != "youtube":
        return url
    if "watch?v=" in url:
        return url.replace("watch?v=", "embed/")
    if "youtu.be/" in url:
        return url.replace("youtu.be/", "youtube.com/embed/")
    return url


def video_label(video: Video) -> str:
    return f"{video.problem_no}. {video.title}"


def cover_label(book: Book) -> str:
    """Text printed on a cover that has no image."""
    return book.title[:2]


def cover_fill(book: Book) -> str:
    return book.cover_color or FALLBACK_COVER_COLOR
