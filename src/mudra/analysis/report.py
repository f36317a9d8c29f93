"""
Tabular catalogue reports.

Flattens bonds and their single-unit projections into a pandas DataFrame
for terminal display and CSV/JSON export.  Values are left unrounded;
formatting is up to whoever renders the frame.
"""
from typing import Iterable, List

import pandas as pd

from mudra.catalog.schemas import BondRecord
from mudra.valuation.calculator import project_bond

REPORT_COLUMNS: List[str] = [
    "id",
    "name",
    "issuer",
    "sector",
    "risk_level",
    "risk_score",
    "return_rate",
    "price",
    "maturity_years",
    "maturity_value",
    "total_return",
]


def catalog_frame(bonds: Iterable[BondRecord]) -> pd.DataFrame:
    """Build one row per bond, preserving the input order.

    Args:
        bonds: Bonds as returned by the filter/sort pipeline.

    Returns:
        DataFrame with ``REPORT_COLUMNS``.  An empty input gives an empty
        frame with the same columns.
    """
    rows = []
    for bond in bonds:
        projection = project_bond(bond)
        rows.append(
            {
                "id": bond.id,
                "name": bond.name,
                "issuer": bond.issuer,
                "sector": bond.sector,
                "risk_level": bond.risk_level.value,
                "risk_score": bond.effective_risk_score,
                "return_rate": bond.return_rate,
                "price": bond.price,
                "maturity_years": bond.maturity_years,
                "maturity_value": projection.maturity_value,
                "total_return": projection.total_return,
            }
        )

    return pd.DataFrame(rows, columns=REPORT_COLUMNS)
