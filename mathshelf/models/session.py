"""Per-session presentation state passed to the action layer."""
from pydantic import BaseModel


class SessionContext(BaseModel):
    """What the operator is currently looking at and allowed to do."""
    admin_mode: bool = False
    read_only: bool = False  # hosted copy: browsing only, never saves
    selected_book_id: str | None = None
    selected_chapter_index: int | None = None
    editing_video_index: int | None = None  # None while adding new videos
