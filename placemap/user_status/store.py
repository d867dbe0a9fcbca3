from __future__ import annotations

from typing import Iterable, MutableMapping

from .models import PlaceStatus, StatusMap


def get_status(status_map: MutableMapping[str, str], place_id: str) -> PlaceStatus | None:
    raw = status_map.get(place_id)
    return PlaceStatus(raw) if raw else None


def set_status(
    status_map: MutableMapping[str, str],
    place_id: str,
    status: PlaceStatus | str | None,
) -> None:
    """Set or clear (``status=None``) the status of one place."""
    if not status:
        status_map.pop(place_id, None)
        return
    status_map[place_id] = PlaceStatus(status).value


def reset_statuses(status_map: MutableMapping[str, str]) -> None:
    status_map.clear()


def load_status_map(raw: dict | None) -> StatusMap:
    """Parse a stored status dict, dropping entries with unknown statuses."""
    result: StatusMap = {}
    for place_id, status in (raw or {}).items():
        try:
            result[place_id] = PlaceStatus(status)
        except ValueError:
            continue
    return result


def migrate_legacy(
    visited: Iterable[str],
    favorites: Iterable[str],
    disliked: Iterable[str],
) -> StatusMap:
    """Build a status map from the old per-status id lists.

    Priority is like > dislike > visited; lower priorities are written first
    so higher ones overwrite them.
    """
    status_map: StatusMap = {}
    for place_id in visited:
        status_map[place_id] = PlaceStatus.visited
    for place_id in disliked:
        status_map[place_id] = PlaceStatus.dislike
    for place_id in favorites:
        status_map[place_id] = PlaceStatus.like
    return status_map
