"""Tests for mathshelf.actions (using a temp-file gateway)."""
import json
from pathlib import Path

from mathshelf import actions
from mathshelf.models.session import SessionContext
from mathshelf.tools.catalog_io import JsonFileGateway, ReadOnlyGateway, read_catalog


def _admin() -> SessionContext:
    return SessionContext(admin_mode=True)


def test_list_shelf_sorted(gateway: JsonFileGateway) -> None:
    result = actions.list_shelf(gateway)
    assert result["status"] == "success"
    assert [g["name"] for g in result["grades"]] == ["초등 수학", "중학 수학"]
    assert result["total_books"] == 2
    # listing does not reorder the stored document
    assert [g.name for g in read_catalog(gateway).grades] == ["중학 수학", "초등 수학"]


def test_list_shelf_empty(tmp_path: Path) -> None:
    result = actions.list_shelf(JsonFileGateway(tmp_path / "books.json"))
    assert result["status"] == "success"
    assert result["grades"] == []


def test_toggle_admin() -> None:
    session = SessionContext()
    assert actions.toggle_admin(session)["admin_mode"] is True
    assert actions.toggle_admin(session)["admin_mode"] is False


def test_toggle_admin_refused_when_read_only() -> None:
    session = SessionContext(read_only=True)
    result = actions.toggle_admin(session)
    assert result["status"] == "error"
    assert session.admin_mode is False


def test_edits_require_admin(gateway: JsonFileGateway) -> None:
    result = actions.add_book(SessionContext(), "새 책", grade_id="grade_1", gateway=gateway)
    assert result["status"] == "error"
    assert len(read_catalog(gateway).grades[0].books) == 1


def test_add_book_existing_grade(gateway: JsonFileGateway) -> None:
    result = actions.add_book(_admin(), " 쎈 ", grade_id="grade_1", gateway=gateway)
    assert result["status"] == "success"
    assert result["saved"] is True
    books = read_catalog(gateway).grades[0].books
    assert [b.title for b in books] == ["개념원리", "쎈"]


def test_add_book_new_grade(gateway: JsonFileGateway) -> None:
    result = actions.add_book(_admin(), "수학(상)", grade_id=actions.NEW_GRADE, new_grade_name="고등 1", gateway=gateway)
    assert result["status"] == "success"
    grade = read_catalog(gateway).grades[-1]
    assert grade.id == result["grade_id"]
    assert grade.name == "고등 1"
    assert grade.books[0].title == "수학(상)"


def test_add_book_validation(gateway: JsonFileGateway) -> None:
    assert actions.add_book(_admin(), "", grade_id="grade_1", gateway=gateway)["message"] == "제목을 입력해주세요"
    assert actions.add_book(_admin(), "책", new_grade_name=" ", gateway=gateway)["message"] == "새 학년 이름을 입력해주세요"
    assert actions.add_book(_admin(), "책", grade_id="grade_x", gateway=gateway)["status"] == "error"


def test_add_book_read_only_deployment(gateway: JsonFileGateway) -> None:
    session = SessionContext(admin_mode=True, read_only=True)
    result = actions.add_book(session, "책", grade_id="grade_1", gateway=ReadOnlyGateway(gateway.path))
    assert result["status"] == "error"


def test_add_book_reports_unsaved(gateway: JsonFileGateway) -> None:
    result = actions.add_book(_admin(), "책", grade_id="grade_1", gateway=ReadOnlyGateway(gateway.path))
    assert result["status"] == "success"
    assert result["saved"] is False
    assert len(read_catalog(gateway).grades[0].books) == 1


def test_delete_book(gateway: JsonFileGateway) -> None:
    session = _admin()
    session.selected_book_id = "book_123"
    result = actions.delete_book(session, "grade_1", 0, gateway)
    assert result["status"] == "success"
    assert read_catalog(gateway).grades[0].books == []
    assert session.selected_book_id is None


def test_delete_book_out_of_range(gateway: JsonFileGateway) -> None:
    result = actions.delete_book(_admin(), "grade_1", 3, gateway)
    assert result["status"] == "error"
    assert len(read_catalog(gateway).grades[0].books) == 1


def test_add_chapter_to_selected_book(gateway: JsonFileGateway) -> None:
    session = _admin()
    assert actions.open_book(session, "book_123", gateway)["status"] == "success"
    result = actions.add_chapter(session, "3. 일차방정식", gateway)
    assert result["chapter_index"] == 2
    assert read_catalog(gateway).grades[0].books[0].chapters[2].name == "3. 일차방정식"


def test_add_chapter_needs_name_and_book(gateway: JsonFileGateway) -> None:
    session = _admin()
    assert actions.add_chapter(session, "단원", gateway)["status"] == "error"
    actions.open_book(session, "book_123", gateway)
    assert actions.add_chapter(session, "", gateway)["message"] == "단원명을 입력해주세요"


def test_bulk_add_through_form(gateway: JsonFileGateway) -> None:
    session = _admin()
    actions.open_book(session, "book_123", gateway)
    form = actions.begin_add_video(session, 1, gateway)
    assert form["problem_no"] == 1
    assert form["count"] == 1

    result = actions.save_video(session, 5, "ignored", "", 3, gateway)
    assert result["problem_nos"] == [5, 6, 7]
    videos = read_catalog(gateway).grades[0].books[0].chapters[1].videos
    assert [v.title for v in videos] == ["5번 문제", "6번 문제", "7번 문제"]


def test_edit_through_form(gateway: JsonFileGateway) -> None:
    session = _admin()
    actions.open_book(session, "book_123", gateway)
    form = actions.begin_edit_video(session, 0, 1, gateway)
    assert form["problem_no"] == 2
    assert form["title"] == ""
    assert session.editing_video_index == 1

    result = actions.save_video(session, 2, "", "https://youtu.be/xyz", gateway=gateway)
    assert result["status"] == "success"
    assert session.editing_video_index is None
    videos = read_catalog(gateway).grades[0].books[0].chapters[0].videos
    assert len(videos) == 2
    assert videos[1].url == "https://youtu.be/xyz"
    assert videos[1].title == "2번 문제"


def test_save_after_edit_adds(gateway: JsonFileGateway) -> None:
    session = _admin()
    actions.open_book(session, "book_123", gateway)
    actions.begin_edit_video(session, 0, 0, gateway)
    actions.save_video(session, 1, "", "https://youtu.be/abc", gateway=gateway)
    # the next save without begin_edit_video is an add
    actions.save_video(session, 3, "", "", gateway=gateway)
    videos = read_catalog(gateway).grades[0].books[0].chapters[0].videos
    assert [v.problem_no for v in videos] == [1, 2, 3]


def test_open_deep_link(gateway: JsonFileGateway) -> None:
    session = SessionContext(admin_mode=True)
    result = actions.open_deep_link(session, "https://x/?book=book_123&chapter=1", gateway)
    assert result["status"] == "success"
    assert result["book"]["id"] == "book_123"
    assert result["target_chapter"] == 1
    assert session.admin_mode is False
    assert session.selected_chapter_index == 1


def test_open_deep_link_chapter_out_of_range(gateway: JsonFileGateway) -> None:
    result = actions.open_deep_link(SessionContext(), "https://x/?book=book_123&chapter=9", gateway)
    assert result["status"] == "success"
    assert result["target_chapter"] is None


def test_open_deep_link_unknown_book(gateway: JsonFileGateway) -> None:
    result = actions.open_deep_link(SessionContext(), "https://x/?book=nope", gateway)
    assert result["status"] == "error"


def test_share_chapter_link() -> None:
    result = actions.share_chapter_link("b1", 0, base_url="https://x/")
    assert result["url"] == "https://x/?book=b1&chapter=0"


def test_play_video(gateway: JsonFileGateway) -> None:
    session = SessionContext()
    actions.open_book(session, "book_123", gateway)
    result = actions.play_video(session, 0, 0, gateway)
    assert result["embed_url"] == "https://youtube.com/embed/abc"
    assert result["label"] == "1. 1번 문제"

    unlinked = actions.play_video(session, 0, 1, gateway)
    assert unlinked["status"] == "error"
    assert unlinked["message"] == actions.NO_LINK_MESSAGE


def _write_raw(gateway: JsonFileGateway, document: dict) -> bytes:
    raw = json.dumps(document, ensure_ascii=False).encode("utf-8")
    gateway.path.write_bytes(raw)
    return raw


def test_edits_refused_when_catalog_unreadable(gateway: JsonFileGateway) -> None:
    raw = _write_raw(gateway, {"grades": [
        {"id": "grade_1", "name": "중학 수학", "books": [{"id": ["book_1"], "title": "쎈"}]},
        {"id": "grade_2", "name": "고등 수학", "books": []},
    ]})
    session = _admin()
    session.selected_book_id = "book_1"
    session.selected_chapter_index = 0

    results = [
        actions.add_book(session, "새 책", new_grade_name="초등", gateway=gateway),
        actions.delete_book(session, "grade_2", 0, gateway),
        actions.add_chapter(session, "1단원", gateway),
        actions.save_video(session, 1, gateway=gateway),
    ]
    for result in results:
        assert result["status"] == "error"
        assert result["message"] == actions.UNREADABLE_MESSAGE
    assert gateway.path.read_bytes() == raw


def test_null_url_does_not_lose_catalog(gateway: JsonFileGateway) -> None:
    _write_raw(gateway, {"grades": [
        {"id": "grade_1", "name": "중학 수학", "books": [
            {"id": "book_1", "title": "쎈", "cover_color": None, "cover_image": None, "chapters": [
                {"name": "1단원", "videos": [{"problem_no": 1, "title": "1번 문제", "type": "youtube", "url": None}]},
            ]},
            {"id": "book_2", "title": "RPM", "chapters": []},
        ]},
        {"id": "grade_2", "name": "고등 수학", "books": [{"id": "book_3", "title": "수학(상)", "chapters": []}]},
    ]})

    result = actions.add_book(_admin(), "새 책", new_grade_name="초등", gateway=gateway)
    assert result["status"] == "success"
    assert result["saved"] is True

    grades = read_catalog(gateway).grades
    assert len(grades) == 3
    assert [b.id for b in grades[0].books] == ["book_1", "book_2"]
    assert grades[0].books[0].chapters[0].videos[0].url == ""
    assert grades[2].books[0].title == "새 책"
