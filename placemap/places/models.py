from __future__ import annotations

import math

from pydantic import BaseModel, Field, model_validator

SOURCE_SEPARATOR = " · "

_TEXT_FIELDS = ("place_id", "name", "category", "description", "url")


def parse_visitors(raw: str | None) -> list[str]:
    """Split a comma-joined visitor string into distinct, trimmed ids."""
    if not raw:
        return []
    ids = (v.strip() for v in raw.split(","))
    return list(dict.fromkeys(v for v in ids if v))


def _parse_coordinate(value: float | str | None) -> float | None:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number == 0:
        return None
    return number


class Place(BaseModel):
    place_id: str = ""
    name: str = ""
    category: str = ""
    description: str = ""
    url: str = ""
    lat: float | str | None = None
    lng: float | str | None = None
    county: str | None = None
    city: str | None = None
    recent_visitors: str | None = None
    popular_product: str | None = None
    permanently_closed: bool | None = None
    source: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _null_text_is_absent(cls, data):
        # null text fields behave like missing keys, so a merge keeps old values
        if isinstance(data, dict):
            return {
                k: v for k, v in data.items()
                if not (v is None and k in _TEXT_FIELDS)
            }
        return data

    def coordinates(self) -> tuple[float, float] | None:
        """Return ``(lat, lng)`` when both are finite and non-zero."""
        lat = _parse_coordinate(self.lat)
        lng = _parse_coordinate(self.lng)
        if lat is None or lng is None:
            return None
        return lat, lng

    def source_titles(self) -> list[str]:
        return self.source.split(SOURCE_SEPARATOR) if self.source else []


class PlaceData(BaseModel):
    """A parsed source document: a titled list of places."""

    title: str
    places: list[Place] = Field(default_factory=list)
    count: int | None = None
    extracted_at: str | None = None
