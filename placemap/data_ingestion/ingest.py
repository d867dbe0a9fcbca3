from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List

from pydantic import ValidationError

from ..merging.engine import MergeEngine
from ..places.models import Place, PlaceData
from .cleaning import fill_categories, restrict_to_divisions
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig
from .quality import places_frame

logger = logging.getLogger(__name__)


class SourceLoadError(Exception):
    """Raised when a required source document cannot be read or parsed."""

    def __init__(self, path: Path, original_error: Exception):
        super().__init__(f"Failed to load source document {path}: {original_error}")
        self.path = path
        self.original_error = original_error


def load_source(path: Path) -> PlaceData:
    """Read and validate one ``{title, places}`` source document."""
    try:
        raw = path.read_text(encoding="utf-8")
        return PlaceData.model_validate_json(raw)
    except (OSError, ValidationError) as exc:
        raise SourceLoadError(path, exc) from exc


def load_sources(paths: Iterable[Path]) -> List[PlaceData]:
    """Load source documents in order.

    The first source is required. Later sources that fail to load are
    logged and replaced by an empty document titled after the file.
    """
    documents: List[PlaceData] = []
    for i, path in enumerate(paths):
        try:
            documents.append(load_source(path))
        except SourceLoadError:
            if i == 0:
                raise
            logger.warning("Skipping unreadable source %s", path, exc_info=True)
            documents.append(PlaceData(title=path.stem, places=[]))
    return documents


def merge_documents(documents: Iterable[PlaceData]) -> List[Place]:
    engine = MergeEngine()
    for document in documents:
        engine.add_document(document)
        logger.info("Merged %d places from %r", len(document.places), document.title)
    return engine.get_result()


def build_catalog(
    documents: Iterable[PlaceData],
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
) -> PlaceData:
    """Merge source documents and apply the configured cleaning steps."""
    places = merge_documents(documents)
    if config.infer_categories:
        places = fill_categories(places)
    if config.restrict_to_divisions:
        places = restrict_to_divisions(places)
    return PlaceData(
        title=config.catalog_title,
        places=places,
        count=len(places),
        extracted_at=datetime.now(timezone.utc).isoformat(),
    )


def write_catalog(catalog: PlaceData, config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    config.processed_data_dir.mkdir(parents=True, exist_ok=True)
    output_path = config.processed_path
    payload = catalog.model_dump(exclude_none=True)
    output_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    places_frame(catalog.places).to_csv(config.csv_path, index=False)
    return output_path


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the catalog ingestion pipeline.

    Steps:
    - Load every configured source document, in order.
    - Merge them into one deduplicated catalog.
    - Infer placeholder categories and optionally restrict to known divisions.
    - Persist the catalog as JSON (plus a CSV export) for the API.
    """
    if not config.source_paths:
        raise ValueError("No source documents configured (set PLACEMAP_SOURCES)")

    documents = load_sources(config.source_paths)
    catalog = build_catalog(documents, config)
    output_path = write_catalog(catalog, config)
    logger.info("Wrote %d places to %s", catalog.count, output_path)
    return output_path


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    path = run_ingestion()
    print(f"Ingestion complete. Catalog saved to: {path}")
