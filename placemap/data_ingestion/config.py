from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data" / "processed"


def _source_paths_from_env() -> tuple[Path, ...]:
    raw = os.getenv("PLACEMAP_SOURCES", "")
    return tuple(Path(p) for p in raw.split(os.pathsep) if p.strip())


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the catalog ingestion pipeline.

    ``source_paths`` is ordered: the first source is required and is the
    first-seen title for every place it contains.
    """

    source_paths: tuple[Path, ...] = field(default_factory=_source_paths_from_env)
    processed_data_dir: Path = Path(os.getenv("PLACEMAP_DATA_DIR", str(_DEFAULT_DATA_DIR)))
    processed_filename: str = "places.json"
    catalog_title: str = os.getenv("PLACEMAP_CATALOG_TITLE", "Merged places")
    infer_categories: bool = True
    restrict_to_divisions: bool = False

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename

    @property
    def csv_path(self) -> Path:
        return self.processed_path.with_suffix(".csv")


DEFAULT_INGESTION_CONFIG = IngestionConfig()
