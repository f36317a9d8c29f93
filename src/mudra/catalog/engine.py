"""
Bond catalog engine.

Single entry point shared by every presentation surface (listing page,
detail page, CLI).  Composes the three stages of the catalog:

  1. **Normalise** raw filter inputs into ``FilterCriteria``.
  2. **Filter and sort** the repository's bonds.
  3. **Value** a selected bond with a compound-growth projection.

The engine holds no state beyond its repository reference, so one instance
can serve overlapping requests.
"""
from typing import Any, List, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from mudra.catalog.normalizer import normalize
from mudra.catalog.pipeline import SortKeyLike, query, resolve_sort_key, sectors
from mudra.catalog.schemas import BondRecord, FilterCriteria, Projection, SortKey
from mudra.data.base import BondRepository
from mudra.valuation.calculator import project_investment


class CatalogPage(BaseModel):
    """Filtered, ordered view of the catalogue plus listing metadata."""

    model_config = ConfigDict(frozen=True)

    bonds: List[BondRecord]
    total: int = Field(..., description="Bonds in the catalogue before filtering")
    sectors: List[str] = Field(..., description="Sector facet over the full catalogue")
    criteria: FilterCriteria
    sort_key: SortKey

    @property
    def matched(self) -> int:
        return len(self.bonds)


class BondQuote(BaseModel):
    """A single bond together with a paper-trading valuation."""

    model_config = ConfigDict(frozen=True)

    bond: BondRecord
    units: int
    cost: float
    projection: Projection


class BondCatalogEngine:
    """Browse and value bonds served by a ``BondRepository``."""

    def __init__(
        self,
        repository: BondRepository,
        default_sort: SortKeyLike = SortKey.RETURN_RATE_DESC,
    ):
        """
        Args:
            repository: Source of ``BondRecord`` objects.
            default_sort: Ordering used when ``browse`` gets no sort key.

        Raises:
            InvalidArgument: If *default_sort* is not a supported ordering.
        """
        self.repository = repository
        self.default_sort = resolve_sort_key(default_sort)

    def browse(
        self,
        raw_criteria: Optional[Mapping[str, Any]] = None,
        sort_key: Optional[SortKeyLike] = None,
    ) -> CatalogPage:
        """Return the bonds matching *raw_criteria*, ordered by *sort_key*.

        Raises:
            InvalidArgument: If *sort_key* is not a supported ordering.
        """
        key = resolve_sort_key(sort_key) if sort_key is not None else self.default_sort
        criteria = normalize(raw_criteria)

        catalogue = self.repository.fetch_all()
        matched = query(catalogue, criteria, key)

        logger.info(
            f"Catalogue query matched {len(matched)} of {len(catalogue)} bonds "
            f"(sort={key.value})"
        )
        if criteria.is_identity:
            logger.debug("No active filters; returning full catalogue.")

        return CatalogPage(
            bonds=matched,
            total=len(catalogue),
            sectors=sectors(catalogue),
            criteria=criteria,
            sort_key=key,
        )

    def quote(self, bond_id: str, units: int = 1) -> BondQuote:
        """Value a paper-trading purchase of *units* units of a bond.

        Raises:
            KeyError: If no bond has id *bond_id*.
            InvalidArgument: If *units* is invalid for the bond.
        """
        bond = self.repository.fetch_by_id(bond_id)
        if bond is None:
            logger.error(f"Bond '{bond_id}' not found.")
            raise KeyError(f"Unknown bond: {bond_id}")

        projection = project_investment(bond, units)
        return BondQuote(
            bond=bond,
            units=units,
            cost=units * bond.price,
            projection=projection,
        )
