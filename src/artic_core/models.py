"""Data model for catalog records and fetched pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class Artwork:
    """One catalog record. Only `id` is guaranteed; ids are unique but not sequential."""

    id: int
    title: str | None = None
    place_of_origin: str | None = None
    artist_display: str | None = None
    inscriptions: str | None = None
    date_start: int | None = None
    date_end: int | None = None

    @classmethod
    def from_api(cls, record: dict[str, Any]) -> Artwork:
        """Build an Artwork from one `data[]` entry of the API response.

        Raises:
            ValueError: if the record has no integer `id`.
        """
        if not isinstance(record, dict):
            raise ValueError(f"Artwork record must be an object, got {type(record).__name__}")
        raw_id = record.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"Artwork record without integer id: {raw_id!r}")
        return cls(
            id=raw_id,
            title=_optional_text(record.get("title")),
            place_of_origin=_optional_text(record.get("place_of_origin")),
            artist_display=_optional_text(record.get("artist_display")),
            inscriptions=_optional_text(record.get("inscriptions")),
            date_start=_optional_int(record.get("date_start")),
            date_end=_optional_int(record.get("date_end")),
        )


@dataclass(frozen=True)
class ArtworkPage:
    """One fetched batch of artworks plus the dataset's total record count."""

    page: int
    artworks: tuple[Artwork, ...] = field(default_factory=tuple)
    total: int = 0

    @property
    def ids(self) -> list[int]:
        return [a.id for a in self.artworks]
