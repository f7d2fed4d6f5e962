"""Load the raw server list from JSON, CSV or Excel files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from ..cost.exceptions import InvalidInputShape

logger = logging.getLogger(__name__)


class ServerListLoader:
    """Read server records from a data file.

    JSON documents may be a bare array or an object with a ``servers``
    array. Tabular files are read with pandas, one row per server.
    """

    TABULAR_SUFFIXES = [".csv", ".xlsx", ".xls"]

    def __init__(self, file_path: Union[str, Path]):
        """Initialize the loader.

        Args:
            file_path: Path to JSON, CSV or Excel file
        """
        self.file_path = Path(file_path)

        if not self.file_path.exists():
            raise FileNotFoundError(f"Server data file not found: {self.file_path}")

    def load(self, strict: bool = False, sheet_name: Optional[str] = None) -> List[Dict[str, Any]]:
        """Load raw server records.

        Args:
            strict: Raise InvalidInputShape instead of returning an empty
                    list when the document is not a list
            sheet_name: Sheet name for Excel files (default: first sheet)

        Returns:
            List of raw server dictionaries
        """
        suffix = self.file_path.suffix.lower()

        if suffix == ".json":
            servers = self._load_json(strict)
        elif suffix in self.TABULAR_SUFFIXES:
            servers = self._load_table(suffix, sheet_name)
        else:
            raise ValueError(f"Unsupported file format: {suffix}")

        logger.info(f"Loaded {len(servers)} servers from {self.file_path.name}")
        return servers

    def _load_json(self, strict: bool) -> List[Dict[str, Any]]:
        with open(self.file_path, "r", encoding="utf-8") as f:
            document = json.load(f)

        if isinstance(document, dict) and "servers" in document:
            document = document["servers"]

        if not isinstance(document, list):
            if strict:
                raise InvalidInputShape(document)
            logger.warning(f"Server data in {self.file_path.name} is not a list: {type(document).__name__}")
            return []

        return document

    def _load_table(self, suffix: str, sheet_name: Optional[str]) -> List[Dict[str, Any]]:
        if suffix == ".csv":
            df = pd.read_csv(self.file_path, dtype=str, keep_default_na=False)
        else:
            df = pd.read_excel(self.file_path, sheet_name=sheet_name or 0)

        df.columns = [str(c).strip() for c in df.columns]

        return [
            {column: self._cell_value(value) for column, value in row.items()}
            for row in df.to_dict(orient="records")
        ]

    @staticmethod
    def _cell_value(value: Any) -> Any:
        """Normalize a spreadsheet cell.

        Empty cells become None; date cells without a time of day become
        plain ``YYYY-MM-DD`` strings so they keep end-of-day semantics.
        """
        if isinstance(value, str):
            value = value.strip()
            return value or None

        if value is None or pd.isna(value):
            return None

        if isinstance(value, pd.Timestamp):
            if value == value.normalize():
                return value.date().isoformat()
            return value.isoformat()

        return value
