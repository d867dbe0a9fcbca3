from __future__ import annotations

from typing import Any, Iterable

import pandas as pd

from ..places.models import Place
from .cleaning import PLACEHOLDER_CATEGORIES

FRAME_COLUMNS = list(Place.model_fields)


def places_frame(places: Iterable[Place]) -> pd.DataFrame:
    """Return one row per place with every schema column present."""
    rows = [p.model_dump() for p in places]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def _pct(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def quality_report(places: Iterable[Place]) -> dict[str, Any]:
    """Count places with missing or placeholder fields."""
    df = places_frame(places)
    total = len(df)

    lat = pd.to_numeric(df["lat"], errors="coerce")
    lng = pd.to_numeric(df["lng"], errors="coerce")
    city = df["city"].fillna("")
    counts = {
        "zero_lat": int((lat.fillna(0) == 0).sum()),
        "zero_lng": int((lng.fillna(0) == 0).sum()),
        "empty_city": int(city.isin(["", "Unknown City"]).sum()),
        "default_category": int(df["category"].fillna("").isin(PLACEHOLDER_CATEGORIES).sum()),
        "empty_description": int((df["description"].fillna("") == "").sum()),
    }

    report: dict[str, Any] = {"total": total}
    for name, count in counts.items():
        report[name] = {"count": count, "pct": _pct(count, total)}
    return report


def find_duplicates(places: Iterable[Place]) -> list[dict[str, Any]]:
    """List entries repeating an earlier ``place_id`` or ``name``.

    A repeated name is only reported when the same entry was not already
    reported for its ``place_id``.
    """
    seen_ids: dict[str, int] = {}
    seen_names: dict[str, int] = {}
    duplicates: list[dict[str, Any]] = []

    for index, place in enumerate(places):
        id_dup = False
        if place.place_id:
            if place.place_id in seen_ids:
                id_dup = True
                duplicates.append({
                    "type": "place_id",
                    "value": place.place_id,
                    "index": index,
                    "original_index": seen_ids[place.place_id],
                    "name": place.name,
                })
            else:
                seen_ids[place.place_id] = index

        if place.name:
            if place.name in seen_names:
                if not id_dup:
                    duplicates.append({
                        "type": "name",
                        "value": place.name,
                        "index": index,
                        "original_index": seen_names[place.name],
                        "name": place.name,
                    })
            else:
                seen_names[place.name] = index

    return duplicates
