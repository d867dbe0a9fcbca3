from __future__ import annotations

import uuid

# session id -> {place_id: status}
_status_maps: dict[str, dict[str, str]] = {}


def new_session_id() -> str:
    return uuid.uuid4().hex


def get_status_map(session_id: str) -> dict[str, str]:
    """Return the mutable status map of a session, creating it if needed."""
    return _status_maps.setdefault(session_id, {})


def replace_status_map(session_id: str, statuses: dict[str, str]) -> dict[str, str]:
    _status_maps[session_id] = dict(statuses)
    return _status_maps[session_id]


def clear_status_maps() -> None:
    _status_maps.clear()
