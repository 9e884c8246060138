"""Page metadata, bookmark payload, and save result models."""

from datetime import datetime

from pydantic import BaseModel


class PageMetadata(BaseModel):
    """Title and description of a fetched page. Empty strings when absent."""

    url: str
    title: str = ""
    description: str = ""


class BookmarkPayload(BaseModel):
    """Body of ``POST /api/bookmarks/`` on the linkding API."""

    url: str  # Normalized
    title: str = ""
    description: str = ""
    notes: str = ""
    is_archived: bool = False
    unread: bool = True
    shared: bool = False
    tag_names: list[str] = []


class StepTiming(BaseModel):
    """Wall-clock span of one LinkService.save step."""

    step: str  # "normalize", "fetch_metadata", "persist"
    started_at: datetime
    finished_at: datetime

    @property
    def duration_ms(self) -> float:
        return (self.finished_at - self.started_at).total_seconds() * 1000


class SavedLink(BaseModel):
    """Returned after a bookmark was created."""

    url: str
    title: str
    description: str
    timings: list[StepTiming] = []
