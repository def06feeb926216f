"""Pydantic models for conflict snapshots."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ConflictStatus(str, Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


# --- Snapshot models (read-only, supplied by the analytics service) ---


class Page(BaseModel):
    """One page competing for a conflict's query."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    title: str = ""
    position: float = Field(ge=0)
    clicks: int = Field(default=0, ge=0)
    impressions: int = Field(default=0, ge=0)
    ctr: float = 0.0  # percent
    click_share: float = Field(default=0.0, alias="clickShare")
    trend: list[float] = Field(default_factory=list)  # position samples, oldest first


class Conflict(BaseModel):
    """A group of pages competing for one search query.

    Page order matters: index 0 is the primary candidate.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int | str
    query: str
    severity: Severity = Severity.LOW
    volatility: float = Field(default=0.0, ge=0)
    pages: list[Page] = Field(min_length=1)
    recommendation: str | None = None
    winner_url: str | None = Field(default=None, alias="winnerUrl")
    status: ConflictStatus = ConflictStatus.ACTIVE

    @property
    def primary(self) -> Page:
        return self.pages[0]

    @property
    def total_clicks(self) -> int:
        return sum(p.clicks for p in self.pages)

    @property
    def total_impressions(self) -> int:
        return sum(p.impressions for p in self.pages)
