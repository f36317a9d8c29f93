"""
Compound-growth valuation for bond holdings.

Projects what an investment is worth at maturity under fixed annual
compounding::

    maturity_value = principal * (1 + rate / 100) ** years
    total_return   = maturity_value - principal

There is no partial-year proration and no rounding: formatting for
display belongs to the presentation layer.  Inputs may be ``int``,
``float`` or ``Decimal``; the arithmetic runs in double precision.
Domain-invalid inputs (negative price or rate, terms shorter than one
year) raise ``InvalidArgument``; they are never clamped, since a clamped
projection would silently misstate what the investor gets back.  A
projection too large to represent as a finite float also raises
``InvalidArgument`` instead of returning infinity.
"""
import math
from decimal import Decimal
from numbers import Integral, Real
from typing import Any

from loguru import logger

from mudra.catalog.errors import InvalidArgument
from mudra.catalog.schemas import BondRecord, Projection


def _require_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidArgument(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (ValueError, OverflowError):
        # Signalling Decimal NaNs and ints beyond float range.
        raise InvalidArgument(f"{name} is not representable, got {value!r}") from None
    if not math.isfinite(number):
        raise InvalidArgument(f"{name} must be finite, got {value!r}")
    return number


def _require_whole(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    # Accept integral floats such as 5.0 coming out of JSON documents.
    if isinstance(value, Real) and math.isfinite(value) and float(value).is_integer():
        return int(value)
    raise InvalidArgument(f"{name} must be an integer, got {value!r}")


def project(price: float, return_rate_percent: float, years: int) -> Projection:
    """Project maturity value and total return for a single holding.

    Args:
        price: Amount invested (>= 0).
        return_rate_percent: Annual return in percent, e.g. ``7.5`` (>= 0).
        years: Whole years to maturity (>= 1).

    Returns:
        An unrounded ``Projection``.

    Raises:
        InvalidArgument: If any input is non-numeric, non-finite or outside
                         its domain, or the result overflows a float.
    """
    principal = _require_number("price", price)
    rate = _require_number("return_rate_percent", return_rate_percent)
    term = _require_whole("years", years)

    if principal < 0:
        raise InvalidArgument(f"price cannot be negative, got {principal}")
    if rate < 0:
        raise InvalidArgument(f"return_rate_percent cannot be negative, got {rate}")
    if term < 1:
        raise InvalidArgument(f"years must be at least 1, got {term}")

    try:
        growth = (1.0 + rate / 100.0) ** term
    except OverflowError:
        growth = math.inf
    maturity_value = 0.0 if principal == 0 else principal * growth
    if not math.isfinite(maturity_value):
        raise InvalidArgument(
            f"Projection overflows: {principal} at {rate}% for {term} years"
        )

    return Projection(
        maturity_value=maturity_value,
        total_return=maturity_value - principal,
    )


def project_bond(bond: BondRecord) -> Projection:
    """Projection for one unit of *bond* held to maturity."""
    return project(bond.price, bond.return_rate, bond.maturity_years)


def project_investment(bond: BondRecord, units: int) -> Projection:
    """Projection for a paper-trading purchase of *units* units of *bond*.

    Raises:
        InvalidArgument: If *units* is not a whole number >= 1, or exceeds a
                         positive ``available_units`` figure.
    """
    count = _require_whole("units", units)
    if count < 1:
        raise InvalidArgument(f"units must be at least 1, got {count}")

    # The document store defaults availableUnits to 0 when unset, so only a
    # positive figure is treated as a real cap.
    if bond.available_units and count > bond.available_units:
        raise InvalidArgument(
            f"Requested {count} units of '{bond.id}' but only "
            f"{bond.available_units:g} are available"
        )

    cost = count * bond.price
    logger.debug(f"Projecting {count} x {bond.id} (cost {cost:.2f})")
    return project(cost, bond.return_rate, bond.maturity_years)
