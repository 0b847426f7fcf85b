"""Operator actions behind the shelf UI.

Each action loads the catalog from a gateway, applies one change through the
store, saves, and returns a plain dict:

    {"status": "success" | "error", "message": str, ...}

Input the store accepts silently (blank titles, edits outside admin mode) is
rejected here. Session state travels in an explicit SessionContext.
"""
import logging
from typing import Optional

from mathshelf.config import default_gateway, share_base_url
from mathshelf.models.catalog import Book, Catalog
from mathshelf.models.session import SessionContext
from mathshelf.tools.catalog_io import (
    CatalogGateway,
    read_catalog,
    read_catalog_for_update,
    write_catalog,
)
from mathshelf.tools.catalog_store import (
    add_book as store_add_book,
    add_chapter as store_add_chapter,
    add_grade,
    add_video,
    editable_title,
    find_grade,
    next_problem_no,
    remove_book,
    resolve_deep_link,
    update_video,
)
from mathshelf.tools.grade_order import sorted_grades
from mathshelf.tools.playback import cover_fill, cover_label, embed_url, video_label
from mathshelf.tools.share_links import build_share_link, parse_share_link

logger = logging.getLogger(__name__)

NEW_GRADE = "NEW_GRADE"

READ_ONLY_MESSAGE = "웹(NAS) 환경에서는 '조회'만 가능합니다.\n데이터 수정은 PC 프로그램에서 해주세요."
ADMIN_REQUIRED_MESSAGE = "관리자 모드에서만 수정할 수 있습니다."
NO_LINK_MESSAGE = "이 문제에는 아직 동영상이 연결되지 않았습니다."
UNREADABLE_MESSAGE = "Catalog file could not be read; nothing was saved so the existing file is kept."


def _error(message: str) -> dict:
    return {"status": "error", "message": message}


def _require_admin(session: SessionContext) -> Optional[dict]:
    if session.read_only:
        return _error(READ_ONLY_MESSAGE)
    if not session.admin_mode:
        return _error(ADMIN_REQUIRED_MESSAGE)
    return None


def _save(catalog: Catalog, gateway: CatalogGateway) -> bool:
    saved = write_catalog(catalog, gateway)
    if not saved:
        logger.warning("Catalog change was not saved")
    return saved


def _book_summary(book: Book) -> dict:
    return {
        "id": book.id,
        "title": book.title,
        "cover_image": book.cover_image,
        "cover_fill": cover_fill(book),
        "cover_label": cover_label(book),
        "chapter_count": len(book.chapters),
    }


def _book_detail(book: Book) -> dict:
    detail = _book_summary(book)
    detail["chapters"] = [
        {
            "index": c_index,
            "name": chapter.name,
            "videos": [
                {
                    "index": v_index,
                    "problem_no": video.problem_no,
                    "title": video.title,
                    "type": video.type,
                    "has_link": video.has_link,
                }
                for v_index, video in enumerate(chapter.videos)
            ],
        }
        for c_index, chapter in enumerate(book.chapters)
    ]
    return detail


# ============================================================================
# BROWSING
# ============================================================================

def list_shelf(gateway: Optional[CatalogGateway] = None) -> dict:
    """
    List grades in display order with their books.

    Returns:
        dict with:
        - status: "success" or "error"
        - grades: list of {id, name, books: [book summary]}
        - total_books: number of books across all grades
    """
    gateway = gateway or default_gateway()
    try:
        catalog = read_catalog(gateway)
        grades = [
            {
                "id": grade.id,
                "name": grade.name,
                "books": [_book_summary(book) for book in grade.books],
            }
            for grade in sorted_grades(catalog)
        ]
        total_books = sum(len(g["books"]) for g in grades)
        return {
            "status": "success",
            "grades": grades,
            "total_books": total_books,
            "message": f"{len(grades)} grades, {total_books} books",
        }
    except Exception as e:
        return _error(f"Failed to list shelf: {str(e)}")


def open_book(session: SessionContext, book_id: str, gateway: Optional[CatalogGateway] = None) -> dict:
    """Select a book and return its chapters and videos."""
    gateway = gateway or default_gateway()
    try:
        catalog = read_catalog(gateway)
        book = resolve_deep_link(catalog, book_id)
        if book is None:
            return _error(f"Book {book_id} not found")

        session.selected_book_id = book.id
        session.selected_chapter_index = None
        return {"status": "success", "book": _book_detail(book), "message": book.title}
    except Exception as e:
        return _error(f"Failed to open book: {str(e)}")


def open_deep_link(session: SessionContext, url: str, gateway: Optional[CatalogGateway] = None) -> dict:
    """
    Open the book/chapter a share link points at, in view-only mode.

    Returns:
        dict with:
        - status: "success" or "error" (unknown book: caller shows the shelf)
        - book: book detail
        - target_chapter: chapter index to expand, or None when the link has
          no chapter or it is out of range
    """
    gateway = gateway or default_gateway()
    try:
        book_id, chapter_index = parse_share_link(url)
        if not book_id:
            return _error("Link has no book parameter")

        catalog = read_catalog(gateway)
        book = resolve_deep_link(catalog, book_id, chapter_index)
        if book is None:
            return _error(f"Book {book_id} not found")

        target = chapter_index
        if target is not None and not 0 <= target < len(book.chapters):
            logger.info("Chapter %s is out of range for %s, showing whole book", target, book_id)
            target = None

        session.admin_mode = False
        session.selected_book_id = book.id
        session.selected_chapter_index = target
        return {
            "status": "success",
            "book": _book_detail(book),
            "target_chapter": target,
            "message": book.title,
        }
    except Exception as e:
        return _error(f"Failed to open link: {str(e)}")


def share_chapter_link(book_id: str, chapter_index: int, base_url: Optional[str] = None) -> dict:
    """Link students can open to see one chapter."""
    url = build_share_link(base_url or share_base_url(), book_id, chapter_index)
    return {"status": "success", "url": url, "message": "링크가 복사되었습니다!\n학생에게 이 주소를 보내주세요."}


def play_video(
    session: SessionContext,
    chapter_index: int,
    video_index: int,
    gateway: Optional[CatalogGateway] = None,
) -> dict:
    """Resolve what the player should load for a video of the selected book."""
    gateway = gateway or default_gateway()
    try:
        catalog = read_catalog(gateway)
        book = resolve_deep_link(catalog, session.selected_book_id or "")
        if book is None:
            return _error("No book selected")
        if not 0 <= chapter_index < len(book.chapters):
            return _error(f"Chapter {chapter_index} not found")
        videos = book.chapters[chapter_index].videos
        if not 0 <= video_index < len(videos):
            return _error(f"Video {video_index} not found")

        video = videos[video_index]
        if not video.has_link:
            return _error(NO_LINK_MESSAGE)
        return {
            "status": "success",
            "type": video.type,
            "embed_url": embed_url(video),
            "label": video_label(video),
            "message": video_label(video),
        }
    except Exception as e:
        return _error(f"Failed to play video: {str(e)}")


# ============================================================================
# ADMIN
# ============================================================================

def toggle_admin(session: SessionContext) -> dict:
    """Switch admin mode; hosted read-only copies stay in view mode."""
    if session.read_only:
        return _error(READ_ONLY_MESSAGE)
    session.admin_mode = not session.admin_mode
    return {
        "status": "success",
        "admin_mode": session.admin_mode,
        "message": "ON" if session.admin_mode else "OFF",
    }


def add_book(
    session: SessionContext,
    title: str,
    grade_id: Optional[str] = None,
    new_grade_name: Optional[str] = None,
    cover_image: Optional[str] = None,
    gateway: Optional[CatalogGateway] = None,
) -> dict:
    """
    Add a book to an existing grade, or to a new grade created on the spot.

    Args:
        title: Book title (required)
        grade_id: Existing grade id; None or NEW_GRADE to create a grade
        new_grade_name: Name of the grade to create
        cover_image: Optional path or URL of a cover image

    Returns:
        dict with status, grade_id, book (summary), saved, message
    """
    denied = _require_admin(session)
    if denied:
        return denied
    if not title or not title.strip():
        return _error("제목을 입력해주세요")

    gateway = gateway or default_gateway()
    try:
        catalog = read_catalog_for_update(gateway)
        if catalog is None:
            return _error(UNREADABLE_MESSAGE)

        if grade_id in (None, NEW_GRADE):
            if not new_grade_name or not new_grade_name.strip():
                return _error("새 학년 이름을 입력해주세요")
            grade = add_grade(catalog, new_grade_name.strip())
            grade_id = grade.id
            logger.info("Created grade %s (%s)", grade.name, grade.id)
        elif find_grade(catalog, grade_id) is None:
            return _error(f"Grade {grade_id} not found")

        book = store_add_book(catalog, grade_id, title.strip(), cover_image=cover_image)
        saved = _save(catalog, gateway)
        logger.info("Added book %s (%s)", book.title, book.id)
        return {
            "status": "success",
            "grade_id": grade_id,
            "book": _book_summary(book),
            "saved": saved,
            "message": f"Added '{book.title}'" + ("" if saved else " (not saved)"),
        }
    except Exception as e:
        return _error(f"Failed to add book: {str(e)}")


def delete_book(
    session: SessionContext,
    grade_id: str,
    book_index: int,
    gateway: Optional[CatalogGateway] = None,
) -> dict:
    """Delete the book at a shelf position, with all its chapters and videos."""
    denied = _require_admin(session)
    if denied:
        return denied

    gateway = gateway or default_gateway()
    try:
        catalog = read_catalog_for_update(gateway)
        if catalog is None:
            return _error(UNREADABLE_MESSAGE)
        removed = remove_book(catalog, grade_id, book_index)
        if removed is None:
            return _error(f"No book at position {book_index} in grade {grade_id}")

        if session.selected_book_id == removed.id:
            session.selected_book_id = None
            session.selected_chapter_index = None
        saved = _save(catalog, gateway)
        return {
            "status": "success",
            "book_id": removed.id,
            "saved": saved,
            "message": f"'{removed.title}' 문제집을 삭제했습니다.",
        }
    except Exception as e:
        return _error(f"Failed to delete book: {str(e)}")


def add_chapter(session: SessionContext, name: str, gateway: Optional[CatalogGateway] = None) -> dict:
    """Append an empty chapter to the selected book."""
    denied = _require_admin(session)
    if denied:
        return denied
    if not name or not name.strip():
        return _error("단원명을 입력해주세요")

    gateway = gateway or default_gateway()
    try:
        catalog = read_catalog_for_update(gateway)
        if catalog is None:
            return _error(UNREADABLE_MESSAGE)
        book = resolve_deep_link(catalog, session.selected_book_id or "")
        if book is None:
            return _error("No book selected")

        store_add_chapter(book, name.strip())
        chapter_index = len(book.chapters) - 1
        saved = _save(catalog, gateway)
        return {
            "status": "success",
            "chapter_index": chapter_index,
            "saved": saved,
            "message": f"Added chapter '{name.strip()}'",
        }
    except Exception as e:
        return _error(f"Failed to add chapter: {str(e)}")


def begin_add_video(
    session: SessionContext,
    chapter_index: int,
    gateway: Optional[CatalogGateway] = None,
) -> dict:
    """Start adding videos to a chapter; returns the form's initial values."""
    denied = _require_admin(session)
    if denied:
        return denied

    gateway = gateway or default_gateway()
    try:
        catalog = read_catalog(gateway)
        book = resolve_deep_link(catalog, session.selected_book_id or "")
        if book is None:
            return _error("No book selected")
        if not 0 <= chapter_index < len(book.chapters):
            return _error(f"Chapter {chapter_index} not found")

        session.selected_chapter_index = chapter_index
        session.editing_video_index = None
        return {
            "status": "success",
            "problem_no": next_problem_no(book.chapters[chapter_index]),
            "title": "",
            "url": "",
            "count": 1,
            "message": "new video",
        }
    except Exception as e:
        return _error(f"Failed to start adding video: {str(e)}")


def begin_edit_video(
    session: SessionContext,
    chapter_index: int,
    video_index: int,
    gateway: Optional[CatalogGateway] = None,
) -> dict:
    """Start editing one video; returns its current values (default title blank)."""
    denied = _require_admin(session)
    if denied:
        return denied

    gateway = gateway or default_gateway()
    try:
        catalog = read_catalog(gateway)
        book = resolve_deep_link(catalog, session.selected_book_id or "")
        if book is None:
            return _error("No book selected")
        if not 0 <= chapter_index < len(book.chapters):
            return _error(f"Chapter {chapter_index} not found")
        videos = book.chapters[chapter_index].videos
        if not 0 <= video_index < len(videos):
            return _error(f"Video {video_index} not found")

        video = videos[video_index]
        session.selected_chapter_index = chapter_index
        session.editing_video_index = video_index
        return {
            "status": "success",
            "problem_no": video.problem_no,
            "title": editable_title(video),
            "url": video.url,
            "message": video_label(video),
        }
    except Exception as e:
        return _error(f"Failed to start editing video: {str(e)}")


def save_video(
    session: SessionContext,
    problem_no: int,
    title: str = "",
    url: str = "",
    count: int = 1,
    gateway: Optional[CatalogGateway] = None,
) -> dict:
    """
    Save the video form for the selected chapter.

    Updates the video being edited when session.editing_video_index is set,
    otherwise adds `count` videos starting at problem_no. The edit state is
    cleared afterwards either way.
    """
    denied = _require_admin(session)
    if denied:
        return denied

    gateway = gateway or default_gateway()
    editing_index = session.editing_video_index
    session.editing_video_index = None
    try:
        catalog = read_catalog_for_update(gateway)
        if catalog is None:
            return _error(UNREADABLE_MESSAGE)
        book = resolve_deep_link(catalog, session.selected_book_id or "")
        if book is None:
            return _error("No book selected")
        chapter_index = session.selected_chapter_index
        if chapter_index is None or not 0 <= chapter_index < len(book.chapters):
            return _error("No chapter selected")
        chapter = book.chapters[chapter_index]

        if editing_index is not None:
            video = update_video(chapter, editing_index, problem_no, title, url)
            if video is None:
                return _error(f"Video {editing_index} not found")
            changed = [video]
        else:
            changed = add_video(chapter, problem_no, title, url, count)

        saved = _save(catalog, gateway)
        return {
            "status": "success",
            "problem_nos": [v.problem_no for v in changed],
            "saved": saved,
            "message": f"Saved {len(changed)} video(s)" + ("" if saved else " (not saved)"),
        }
    except Exception as e:
        return _error(f"Failed to save video: {str(e)}")
