from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..places.models import SOURCE_SEPARATOR, Place, PlaceData

logger = logging.getLogger(__name__)

COORD_PRECISION = 4  # ~11 m
_COORD_QUANTUM = Decimal(1).scaleb(-COORD_PRECISION)


def _format_coordinate(value: float) -> str:
    """Round the exact binary value of *value*, ties away from zero."""
    return format(Decimal(value).quantize(_COORD_QUANTUM, rounding=ROUND_HALF_UP), "f")


def coordinate_bucket(place: Place) -> str | None:
    """Return the rounded ``"lat,lng"`` bucket, or ``None`` without coordinates."""
    coords = place.coordinates()
    if coords is None:
        return None
    lat, lng = coords
    return f"{_format_coordinate(lat)},{_format_coordinate(lng)}"


def overlay_fields(incoming: Place) -> dict:
    """Fields of *incoming* that override an existing record on merge.

    Every field the incoming record explicitly carries wins, falsy values
    included. Fields it never set, or set to ``None``, keep the existing value.
    """
    return {
        name: getattr(incoming, name)
        for name in incoming.model_fields_set
        if getattr(incoming, name) is not None
    }


class MergeEngine:
    """Fold per-source batches of places into one canonical collection.

    Identity is resolved through two channels: the base key (``place_id``,
    falling back to ``name``) and a coordinate bucket. The first key to claim
    a bucket owns it, so later records at the same rounded location merge
    into that entry whatever their own key.
    """

    def __init__(self) -> None:
        self._places: dict[str, Place] = {}
        self._coord_index: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._places)

    def _resolve_key(self, place: Place) -> str:
        key = place.place_id or place.name
        bucket = coordinate_bucket(place)
        if bucket is None:
            return key
        if bucket in self._coord_index:
            owner = self._coord_index[bucket]
            if owner != key:
                logger.debug("Place %r matched %r by coordinates %s", key, owner, bucket)
            return owner
        self._coord_index[bucket] = key
        return key

    def add_places(self, places: Iterable[Place], source_title: str) -> None:
        added = merged = 0
        for place in places:
            key = self._resolve_key(place)
            existing = self._places.get(key)
            if existing is None:
                self._places[key] = place.model_copy(update={"source": source_title})
                added += 1
                continue

            titles = existing.source_titles()
            if source_title not in titles:
                titles.append(source_title)
            update = overlay_fields(place)
            update["source"] = SOURCE_SEPARATOR.join(titles)
            self._places[key] = existing.model_copy(update=update)
            merged += 1

        logger.debug(
            "Source %r: %d new places, %d merged, %d canonical",
            source_title, added, merged, len(self._places),
        )

    def add_document(self, document: PlaceData) -> None:
        self.add_places(document.places, document.title)

    def get_result(self) -> list[Place]:
        """Return copies of the canonical places in first-insertion order."""
        return [place.model_copy(deep=True) for place in self._places.values()]
