"""Shared fixtures: a small catalog and a gateway in a temp directory."""
from pathlib import Path

import pytest

from mathshelf.models.catalog import Book, Catalog, Chapter, Grade, Video
from mathshelf.tools.catalog_io import JsonFileGateway, write_catalog


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(grades=[
        Grade(id="grade_1", name="중학 수학", books=[
            Book(id="book_123", title="개념원리", cover_color="#3498db", chapters=[
                Chapter(name="1. 소인수분해", videos=[
                    Video(problem_no=1, title="1번 문제", url="https://youtu.be/abc"),
                    Video(problem_no=2, title="2번 문제"),
                ]),
                Chapter(name="2. 정수와 유리수"),
            ]),
        ]),
        Grade(id="grade_2", name="초등 수학", books=[
            Book(id="book_456", title="쎈 초등", cover_image="/covers/ssen.png"),
        ]),
    ])


@pytest.fixture
def gateway(tmp_path: Path, catalog: Catalog) -> JsonFileGateway:
    gw = JsonFileGateway(tmp_path / "data" / "books.json")
    assert write_catalog(catalog, gw)
    return gw
