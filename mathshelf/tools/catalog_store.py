"""Catalog mutations and lookups.

Operations never raise for things the operator can get wrong (unknown ids,
stale indexes): they return None or leave the catalog unchanged. Input
checks such as "title must not be empty" belong to the caller.
"""
import random
import time
from typing import Optional

from mathshelf.models.catalog import Book, Catalog, Chapter, Grade, Video, default_title


def _existing_ids(catalog: Catalog) -> set[str]:
    ids = set()
    for grade in catalog.grades:
        ids.add(grade.id)
        ids.update(book.id for book in grade.books)
    return ids


def _generate_id(catalog: Catalog, prefix: str) -> str:
    """Time-based id like "book_1718000000000", bumped until unused."""
    taken = _existing_ids(catalog)
    stamp = int(time.time() * 1000)
    while f"{prefix}_{stamp}" in taken:
        stamp += 1
    return f"{prefix}_{stamp}"


def random_cover_color() -> str:
    return f"#{random.randrange(0x1000000):06x}"


def _title_or_default(title: Optional[str], problem_no: int) -> str:
    if title and title.strip():
        return title
    return default_title(problem_no)


def _sort_videos(chapter: Chapter) -> None:
    chapter.videos.sort(key=lambda v: v.problem_no)


def find_grade(catalog: Catalog, grade_id: str) -> Optional[Grade]:
    return next((g for g in catalog.grades if g.id == grade_id), None)


def add_grade(catalog: Catalog, name: str) -> Grade:
    """Append a new, empty grade."""
    grade = Grade(id=_generate_id(catalog, "grade"), name=name, books=[])
    catalog.grades.append(grade)
    return grade


def add_book(
    catalog: Catalog,
    grade_id: str,
    title: str,
    cover_color: Optional[str] = None,
    cover_image: Optional[str] = None,
) -> Optional[Book]:
    """
    Append a book to a grade.

    Returns None if the grade does not exist. Without an explicit color a
    random one is chosen and stored, so the card keeps its color.
    """
    grade = find_grade(catalog, grade_id)
    if grade is None:
        return None

    book = Book(
        id=_generate_id(catalog, "book"),
        title=title,
        cover_color=cover_color or random_cover_color(),
        cover_image=cover_image,
        chapters=[],
    )
    grade.books.append(book)
    return book


def remove_book(catalog: Catalog, grade_id: str, book_index: int) -> Optional[Book]:
    """Remove the book at book_index in the grade. Out of range is a no-op."""
    grade = find_grade(catalog, grade_id)
    if grade is None or not 0 <= book_index < len(grade.books):
        return None
    return grade.books.pop(book_index)


def add_chapter(book: Book, name: str) -> Chapter:
    chapter = Chapter(name=name, videos=[])
    book.chapters.append(chapter)
    return chapter


def add_video(
    chapter: Chapter,
    problem_no_start: int,
    title: Optional[str] = None,
    url: Optional[str] = None,
    count: int = 1,
) -> list[Video]:
    """
    Add one video, or `count` consecutive placeholders.

    Bulk mode always uses default titles and empty urls; `title` and `url`
    only apply when a single video is added. The chapter stays sorted by
    problem number.
    """
    if count > 1:
        created = [
            Video(problem_no=no, title=default_title(no), type="youtube", url="")
            for no in range(problem_no_start, problem_no_start + count)
        ]
    else:
        created = [
            Video(
                problem_no=problem_no_start,
                title=_title_or_default(title, problem_no_start),
                type="youtube",
                url=url or "",
            )
        ]

    chapter.videos.extend(created)
    _sort_videos(chapter)
    return created


def update_video(
    chapter: Chapter,
    index: int,
    problem_no: int,
    title: Optional[str] = None,
    url: Optional[str] = None,
) -> Optional[Video]:
    """Replace number, title and url of the video at index; its type is kept."""
    if not 0 <= index < len(chapter.videos):
        return None

    video = chapter.videos[index]
    video.problem_no = problem_no
    video.title = _title_or_default(title, problem_no)
    video.url = url or ""
    _sort_videos(chapter)
    return video


def resolve_deep_link(
    catalog: Catalog, book_id: str, chapter_index: Optional[int] = None
) -> Optional[Book]:
    """
    Find the book a share link points at, searching every grade.

    chapter_index is only a hint for the viewer and is not checked here.
    """
    for grade in catalog.grades:
        for book in grade.books:
            if book.id == book_id:
                return book
    return None


def next_problem_no(chapter: Chapter) -> int:
    """Suggested number for the next video added to the chapter."""
    return len(chapter.videos) + 1


def editable_title(video: Video) -> str:
    """Title to prefill when editing; default titles show as blank."""
    if video.title == default_title(video.problem_no):
        return ""
    return video.title
