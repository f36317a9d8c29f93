"""
JSON-file bond repository.

The fallback data source used when no document store is reachable.  The
file is loaded and validated eagerly at construction time so that a
missing or corrupted catalogue surfaces immediately rather than on the
first request.

Accepted file layouts::

    [ {"id": "1", "name": "National Highway Infrastructure Bond", ...}, ... ]

or the REST envelope returned by ``GET /api/bonds``::

    {"success": true, "count": 5, "data": [ {...}, ... ]}
"""
import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from mudra.catalog.schemas import BondRecord
from mudra.data.base import BondRepository


class JsonBondRepository(BondRepository):
    """Serves validated bonds from a JSON file held in memory."""

    def __init__(
        self,
        data_file: str = "data/bonds.json",
        include_inactive: bool = False,
    ):
        """
        Args:
            data_file: Path to the bond file.  Relative paths are resolved
                       against the current working directory.
            include_inactive: Also serve bonds flagged ``isActive: false``.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid JSON or has no bond list.
        """
        self.file_path = Path(os.getcwd()) / data_file
        self.include_inactive = include_inactive
        self._bonds: List[BondRecord] = []
        self._index: Dict[str, BondRecord] = {}
        self._legacy_index: Dict[str, BondRecord] = {}
        self._load()

    def _load(self) -> None:
        if not self.file_path.exists():
            logger.critical(f"Bond data file not found at: {self.file_path}")
            raise FileNotFoundError(f"Missing bond data file: {self.file_path}")

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            logger.critical(f"Invalid JSON in bond data file: {e}")
            raise ValueError("Corrupted bond data file") from e

        if isinstance(payload, dict):
            payload = payload.get("data")
        if not isinstance(payload, list):
            logger.critical(
                f"Bond data file {self.file_path.name} holds no bond list."
            )
            raise ValueError("Bond data file must contain a list of bonds")

        records = self.parse_documents(payload)
        if not self.include_inactive:
            hidden = sum(1 for b in records if not b.is_active)
            if hidden:
                logger.info(f"Hiding {hidden} inactive bond(s).")
            records = [b for b in records if b.is_active]

        self._bonds = records
        self._index = {b.id: b for b in records}
        # First bond wins when several share a legacy id.
        self._legacy_index = {}
        for b in records:
            if b.legacy_id is not None:
                self._legacy_index.setdefault(b.legacy_id, b)
        logger.info(
            f"Loaded {len(records)} bonds from {self.file_path.name} "
            f"({len(payload) - len(records)} skipped or hidden)"
        )

    def fetch_all(self) -> List[BondRecord]:
        return list(self._bonds)

    def fetch_by_id(self, bond_id: str) -> Optional[BondRecord]:
        bond = self._index.get(bond_id) or self._legacy_index.get(bond_id)
        if bond is None:
            logger.debug(f"Bond '{bond_id}' not found in {self.file_path.name}")
        return bond
