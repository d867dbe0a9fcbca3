from __future__ import annotations

import logging
from pathlib import Path

from ..data_ingestion.config import DEFAULT_INGESTION_CONFIG
from ..places.models import Place, PlaceData

logger = logging.getLogger(__name__)

_CATALOG_PATH = DEFAULT_INGESTION_CONFIG.processed_path

_places: list[Place] | None = None


def _load(path: Path) -> list[Place]:
    if not path.exists():
        logger.warning("Catalog %s not found, serving an empty catalog", path)
        return []
    catalog = PlaceData.model_validate_json(path.read_text(encoding="utf-8"))
    return catalog.places


def get_places() -> list[Place]:
    """Return the canonical catalog, loading it on first call."""
    global _places
    if _places is None:
        _places = _load(_CATALOG_PATH)
    return _places


def set_places(places: list[Place] | None) -> None:
    """Replace the in-memory catalog; ``None`` forces a reload from disk."""
    global _places
    _places = places
