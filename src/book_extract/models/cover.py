"""Data models for cover resolution."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class CoverStatus(str, Enum):
    """Outcome of a cover strategy."""

    FOUND = "found"
    NO_COVER = "no_cover"
    FAILED = "failed"


class CoverResult(BaseModel):
    """Result of resolving a document's cover image."""

    status: CoverStatus
    path: Path | None = None
    strategy: str | None = None
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.status == CoverStatus.FOUND
