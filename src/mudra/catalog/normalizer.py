"""
Query normaliser.

Turns the loosely-typed filter inputs of the bond listing (query-string
values, form fields, CLI flags) into a canonical ``FilterCriteria``.

Discovery is best-effort: a malformed field never fails the whole query,
it simply stops constraining the result.  The one policy decision made
here is for inverted return-rate bounds: when ``min > max`` the bounds are
swapped rather than producing an impossible, always-empty range.
"""
import math
from typing import Any, Mapping, Optional

from loguru import logger

from mudra.catalog.schemas import FilterCriteria, RiskLevel

# Each canonical field accepts its camelCase name and the short name used
# by the REST query string (``/api/bonds?risk=Low&minReturn=7``).
_FIELD_ALIASES = {
    "search_text": ("searchText", "search_text", "search"),
    "risk_level": ("riskLevel", "risk_level", "risk"),
    "sector": ("sector",),
    "min_return_rate": ("minReturnRate", "min_return_rate", "minReturn"),
    "max_return_rate": ("maxReturnRate", "max_return_rate", "maxReturn"),
}

_RISK_LEVELS = {level.value: level for level in RiskLevel}


def _pick(raw: Mapping[str, Any], field: str) -> Any:
    for key in _FIELD_ALIASES[field]:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _normalise_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


def _normalise_risk(value: Any) -> Optional[RiskLevel]:
    if isinstance(value, RiskLevel):
        return value
    # Exact, case-sensitive match only; anything else means "all".
    if isinstance(value, str):
        return _RISK_LEVELS.get(value)
    return None


def _normalise_sector(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() == "all":
        return None
    return text


def _parse_bound(field: str, value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug(f"Dropping unparseable {field}: {value!r}")
        return None

    if not math.isfinite(number):
        logger.debug(f"Dropping non-finite {field}: {value!r}")
        return None
    return number


def normalize(raw_criteria: Optional[Mapping[str, Any]] = None) -> FilterCriteria:
    """Build canonical filter criteria from raw user input.

    Args:
        raw_criteria: Mapping of filter inputs.  Keys may be camelCase
                      (``searchText``, ``minReturnRate``), snake_case, or the
                      REST query names (``search``, ``risk``, ``minReturn``).
                      ``None`` or an empty mapping yields the identity filter.

    Returns:
        A frozen ``FilterCriteria``.  Never raises on malformed field values.
    """
    raw = raw_criteria or {}

    min_rate = _parse_bound("min_return_rate", _pick(raw, "min_return_rate"))
    max_rate = _parse_bound("max_return_rate", _pick(raw, "max_return_rate"))

    if min_rate is not None and max_rate is not None and min_rate > max_rate:
        logger.debug(
            f"Inverted return-rate bounds ({min_rate} > {max_rate}); swapping."
        )
        min_rate, max_rate = max_rate, min_rate

    return FilterCriteria(
        search_text=_normalise_text(_pick(raw, "search_text")),
        risk_level=_normalise_risk(_pick(raw, "risk_level")),
        sector=_normalise_sector(_pick(raw, "sector")),
        min_return_rate=min_rate,
        max_return_rate=max_rate,
    )
