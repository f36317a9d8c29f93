"""
Data contracts for the bond catalog.

Bond documents arrive from a document store, a JSON fallback file or the
REST envelope, all of which use camelCase keys and may carry either a
native ``id`` or a database-generated ``_id``.  The models below accept
those shapes through aliases, resolve the identifier once at the
boundary, and expose immutable snake_case attributes to the rest of the
engine.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

NEUTRAL_RISK_SCORE = 50


class RiskLevel(str, Enum):
    """Risk tier shown on every bond card."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class SortKey(str, Enum):
    """Orderings offered by the bond listing."""

    RETURN_RATE_DESC = "returnRate-desc"
    RETURN_RATE_ASC = "returnRate-asc"
    PRICE_DESC = "price-desc"
    PRICE_ASC = "price-asc"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"


def risk_level_for_score(score: int) -> RiskLevel:
    """Map a 0-100 risk score onto its conventional tier.

    ``<= 33`` is Low, ``34..66`` is Medium and anything above is High.
    """
    if score <= 33:
        return RiskLevel.LOW
    if score <= 66:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def _resolve_identifier(raw: Any) -> Optional[str]:
    # Mongo extended JSON exports ObjectIds as {"$oid": "..."}.
    if isinstance(raw, dict):
        raw = raw.get("$oid")
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


class BondRecord(BaseModel):
    """Validated, read-only description of one investable bond."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Canonical bond identifier")
    legacy_id: Optional[str] = Field(
        None, alias="legacyId",
        description="Native id kept when a database id took precedence",
    )
    name: str = Field(..., description="Display name")
    issuer: str = Field(..., description="Issuing entity (e.g. NHAI)")
    sector: str = Field(..., description="Infrastructure sector")
    description: str = Field("", description="Marketing description")

    risk_level: RiskLevel = Field(..., alias="riskLevel")
    risk_score: Optional[int] = Field(
        None, ge=0, le=100, alias="riskScore",
        description="AI-generated risk score; absent means neutral",
    )

    return_rate: float = Field(
        ..., ge=0, le=100, alias="returnRate",
        description="Annualised return in percent",
    )
    price: float = Field(..., ge=0, description="Minimum investment unit price")
    maturity_years: int = Field(..., ge=1, alias="maturityYears")

    # Informational only; never used in calculations.
    total_value: Optional[float] = Field(None, ge=0, alias="totalValue")
    available_units: Optional[float] = Field(None, ge=0, alias="availableUnits")

    is_active: bool = Field(True, alias="isActive")
    launch_date: Optional[datetime] = Field(None, alias="launchDate")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @model_validator(mode="before")
    @classmethod
    def canonicalise_identifier(cls, data: Any) -> Any:
        """Collapse ``_id``/``id`` into a single ``id``, preferring ``_id``.

        A native ``id`` overridden by ``_id`` is kept as ``legacy_id`` so
        lookups by the old numeric ids still resolve.
        """
        if not isinstance(data, dict):
            return data

        db_id = _resolve_identifier(data.get("_id"))
        native_id = _resolve_identifier(data.get("id"))

        resolved = dict(data)
        resolved.pop("_id", None)
        resolved["id"] = db_id or native_id
        if db_id and native_id and native_id != db_id:
            resolved["legacyId"] = native_id
        return resolved

    @property
    def effective_risk_score(self) -> int:
        """Risk score with the neutral default applied when absent."""
        if self.risk_score is None:
            return NEUTRAL_RISK_SCORE
        return self.risk_score

    @property
    def risk_is_consistent(self) -> bool:
        """Whether ``risk_level`` agrees with the tier of the risk score.

        Records without an explicit score are always considered consistent.
        """
        if self.risk_score is None:
            return True
        return risk_level_for_score(self.risk_score) == self.risk_level


class FilterCriteria(BaseModel):
    """Canonical predicate set produced by the query normaliser."""

    model_config = ConfigDict(frozen=True)

    search_text: Optional[str] = None
    risk_level: Optional[RiskLevel] = None
    sector: Optional[str] = None
    min_return_rate: Optional[float] = None
    max_return_rate: Optional[float] = None

    @property
    def is_identity(self) -> bool:
        """True when no predicate is active."""
        return all(
            value is None
            for value in (
                self.search_text,
                self.risk_level,
                self.sector,
                self.min_return_rate,
                self.max_return_rate,
            )
        )


class Projection(BaseModel):
    """Compound-growth projection of an investment held to maturity."""

    model_config = ConfigDict(frozen=True)

    maturity_value: float = Field(..., description="Value at the end of the term")
    total_return: float = Field(..., description="Maturity value minus principal")
