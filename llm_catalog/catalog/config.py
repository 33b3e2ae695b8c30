from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class CatalogConfig:
    """
    Locations and format of the model catalog.
    """

    raw_data_dir: Path = _DATA_DIR / "raw"
    raw_filename: str = "models.json"
    processed_data_dir: Path = _DATA_DIR / "processed"
    processed_filename: str = "models.csv"
    list_separator: str = "|"
    csv_path_override: str = os.getenv("CATALOG_CSV_PATH", "")

    @property
    def raw_path(self) -> Path:
        return self.raw_data_dir / self.raw_filename

    @property
    def processed_path(self) -> Path:
        if self.csv_path_override:
            return Path(self.csv_path_override)
        return self.processed_data_dir / self.processed_filename


DEFAULT_CATALOG_CONFIG = CatalogConfig()
