"""
Abstract base class for bond data sources.

Every concrete repository (JSON fallback file, document store, remote
REST endpoint) must implement ``fetch_all`` and may override
``fetch_by_id``.  The base class also provides ``parse_documents``, the
shared boundary where raw documents become validated ``BondRecord``
objects before reaching the catalog engine.
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping, Optional

from loguru import logger
from pydantic import ValidationError

from mudra.catalog.schemas import BondRecord


class BondRepository(ABC):
    """Contract that all bond data sources must satisfy."""

    @abstractmethod
    def fetch_all(self) -> List[BondRecord]:
        """Return every bond visible through this repository.

        Returns:
            Validated ``BondRecord`` objects in source order.
        """

    def fetch_by_id(self, bond_id: str) -> Optional[BondRecord]:
        """Return a single bond by id, or ``None`` if absent.

        Canonical ids win; a bond's legacy native id is only consulted when
        no canonical id matches.  The default implementation scans
        ``fetch_all``; stores with an index should override it.
        """
        bonds = self.fetch_all()
        for bond in bonds:
            if bond.id == bond_id:
                return bond
        for bond in bonds:
            if bond.legacy_id == bond_id:
                return bond
        return None

    def parse_documents(
        self, documents: Iterable[Mapping[str, Any]]
    ) -> List[BondRecord]:
        """Validate raw bond documents, skipping the ones that fail.

        Inconsistent ``riskLevel``/``riskScore`` pairs are trusted as given
        and only reported, so a mislabeled bond stays browsable.

        Args:
            documents: Raw camelCase bond documents.

        Returns:
            The documents that passed validation, as ``BondRecord`` objects.
        """
        records: List[BondRecord] = []
        seen_ids = set()

        for index, doc in enumerate(documents):
            try:
                bond = BondRecord.model_validate(doc)
            except ValidationError as e:
                label = doc.get("name") if isinstance(doc, Mapping) else None
                logger.error(
                    f"Skipping invalid bond document #{index} ({label}): "
                    f"{e.error_count()} error(s)"
                )
                logger.debug(f"Validation detail: {e}")
                continue

            if bond.id in seen_ids:
                logger.warning(f"Duplicate bond id '{bond.id}' at #{index}; skipped.")
                continue
            seen_ids.add(bond.id)

            if not bond.risk_is_consistent:
                logger.warning(
                    f"Bond '{bond.id}' is labelled {bond.risk_level.value} "
                    f"but scores {bond.risk_score}. Trusting source label."
                )

            records.append(bond)

        return records
