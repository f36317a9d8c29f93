"""
Filter/sort pipeline for bond listings.

A single shared implementation of the listing logic: every predicate is
AND-combined, and ordering is always stable so bonds that compare equal
keep the order the repository returned them in.
"""
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from mudra.catalog.errors import InvalidArgument
from mudra.catalog.schemas import BondRecord, FilterCriteria, SortKey

SortKeyLike = Union[SortKey, str]


def _name_key(bond: BondRecord) -> Tuple[str, str]:
    # Case-folded primary key approximates a locale collation; the raw name
    # breaks ties so the order is total.
    return bond.name.casefold(), bond.name


# sort key -> (key function, descending)
_ORDERINGS: Dict[SortKey, Tuple[Callable[[BondRecord], object], bool]] = {
    SortKey.RETURN_RATE_DESC: (lambda b: b.return_rate, True),
    SortKey.RETURN_RATE_ASC: (lambda b: b.return_rate, False),
    SortKey.PRICE_DESC: (lambda b: b.price, True),
    SortKey.PRICE_ASC: (lambda b: b.price, False),
    SortKey.NAME_ASC: (_name_key, False),
    SortKey.NAME_DESC: (_name_key, True),
}


def resolve_sort_key(sort_key: SortKeyLike) -> SortKey:
    """Coerce a ``SortKey`` or its string value into a ``SortKey``.

    Raises:
        InvalidArgument: If *sort_key* is not one of the supported orderings.
    """
    if isinstance(sort_key, SortKey):
        return sort_key
    try:
        return SortKey(sort_key)
    except ValueError:
        valid = [k.value for k in SortKey]
        raise InvalidArgument(
            f"Unknown sort key {sort_key!r}. Expected one of {valid}"
        ) from None


def matches(bond: BondRecord, criteria: FilterCriteria) -> bool:
    """Return ``True`` if *bond* satisfies every active predicate."""
    if criteria.search_text is not None:
        needle = criteria.search_text.lower()
        if needle not in bond.name.lower() and needle not in bond.issuer.lower():
            return False

    if criteria.risk_level is not None and bond.risk_level != criteria.risk_level:
        return False

    if criteria.sector is not None and criteria.sector.lower() != "all":
        if criteria.sector.lower() not in bond.sector.lower():
            return False

    if (
        criteria.min_return_rate is not None
        and bond.return_rate < criteria.min_return_rate
    ):
        return False

    if (
        criteria.max_return_rate is not None
        and bond.return_rate > criteria.max_return_rate
    ):
        return False

    return True


def query(
    bonds: Iterable[BondRecord],
    criteria: FilterCriteria,
    sort_key: SortKeyLike,
) -> List[BondRecord]:
    """Filter *bonds* by *criteria* and order the survivors by *sort_key*.

    Args:
        bonds: Source collection; never modified.
        criteria: Normalised predicate set.
        sort_key: Ordering to apply.

    Returns:
        A new list.  Empty when nothing matches (or the input is empty).

    Raises:
        InvalidArgument: If *sort_key* is not a supported ordering.
    """
    key_func, descending = _ORDERINGS[resolve_sort_key(sort_key)]

    survivors = [bond for bond in bonds if matches(bond, criteria)]

    # sorted() stays stable with reverse=True.
    return sorted(survivors, key=key_func, reverse=descending)


def sectors(bonds: Iterable[BondRecord]) -> List[str]:
    """Unique sectors in first-seen order, for the sector filter facet."""
    seen: Dict[str, None] = {}
    for bond in bonds:
        seen.setdefault(bond.sector, None)
    return list(seen)


def find_by_id(bonds: Iterable[BondRecord], bond_id: str) -> Optional[BondRecord]:
    """Return the bond with canonical id *bond_id*, else with that legacy id."""
    fallback = None
    for bond in bonds:
        if bond.id == bond_id:
            return bond
        if fallback is None and bond.legacy_id == bond_id:
            fallback = bond
    return fallback
