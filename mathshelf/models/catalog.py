"""Catalog of grades, books, chapters and problem videos (persisted as books.json)."""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Literal


def default_title(problem_no: int) -> str:
    """Title shown for a problem video that was saved without one."""
    return f"{problem_no}번 문제"


class Video(BaseModel):
    """Single problem's video reference."""
    problem_no: int
    title: str
    type: Literal["youtube", "file"] = "youtube"
    url: str = ""  # empty means not linked yet

    @model_validator(mode="before")
    @classmethod
    def fill_default_title(cls, data: Any) -> Any:
        """Documents written by hand may omit the title."""
        if isinstance(data, dict) and not data.get("title") and "problem_no" in data:
            data = {**data, "title": default_title(data["problem_no"])}
        return data

    @field_validator("url", mode="before")
    @classmethod
    def null_url_is_unlinked(cls, v: Any) -> Any:
        """null in older files means the same as an empty url."""
        return "" if v is None else v

    @property
    def has_link(self) -> bool:
        return bool(self.url)


class Chapter(BaseModel):
    """Named unit inside a book; identified by its position."""
    name: str
    videos: list[Video] = Field(default_factory=list)


class Book(BaseModel):
    """Problem-set book shown as a card on the shelf."""
    id: str
    title: str
    cover_color: str | None = None  # "#rrggbb"
    cover_image: str | None = None  # path or URL of the cover image
    chapters: list[Chapter] = Field(default_factory=list)


class Grade(BaseModel):
    """Shelf section (school level) holding books."""
    id: str
    name: str
    books: list[Book] = Field(default_factory=list)


class Catalog(BaseModel):
    """Root document."""
    grades: list[Grade] = Field(default_factory=list)
