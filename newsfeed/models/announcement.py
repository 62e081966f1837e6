"""Announcement domain models."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator


def _scalar_as_text(value: object) -> object:
    # JSON spelling, not Python's True/False
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class AnnouncementItem(BaseModel):
    """One corporate announcement as reported by the news service.

    Every field is optional on the wire. Numbers are taken as their text and
    a null text field reads as empty. Only structured values (lists, objects)
    are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = None
    source: str = ""
    symbol: str = ""
    company: str = ""
    headline: str = ""
    impact: str | None = None
    timestamp: str | None = None

    @field_validator("id", "impact", "timestamp", mode="before")
    @classmethod
    def optional_as_text(cls, value: object) -> object:
        return _scalar_as_text(value)

    @field_validator("source", "symbol", "company", "headline", mode="before")
    @classmethod
    def text_or_empty(cls, value: object) -> object:
        if value is None:
            return ""
        return _scalar_as_text(value)

    @property
    def has_impact(self) -> bool:
        """Whether the item carries an impact classification."""
        return bool(self.impact)

    def __str__(self) -> str:
        return f"{self.symbol}: {self.headline}"


Snapshot = tuple[AnnouncementItem, ...]

snapshot_adapter: TypeAdapter[list[AnnouncementItem]] = TypeAdapter(list[AnnouncementItem])


@dataclass(frozen=True)
class Identified:
    """Item keyed by its own identifier."""

    id: str


@dataclass(frozen=True)
class Positional:
    """Item keyed by its position in the snapshot it came from."""

    index: int


ItemKey = Identified | Positional


def item_key(item: AnnouncementItem, index: int) -> ItemKey:
    """Identify an item for rendering.

    Positional keys are only meaningful within the snapshot that produced them.

    Args:
        item: Announcement item
        index: Position of the item in its snapshot

    Returns:
        Identified key when the item has an id, Positional otherwise
    """
    if item.id:
        return Identified(item.id)
    return Positional(index)
