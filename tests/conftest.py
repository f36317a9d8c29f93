"""
Pytest fixtures for the bond catalog tests.

Fixtures provide:
- Raw bond documents shaped like the REST/JSON source
- Validated ``BondRecord`` collections
- Temporary bond files for repository tests
"""
import json

import pytest

from mudra.catalog.schemas import BondRecord


@pytest.fixture
def sample_documents():
    """Raw camelCase bond documents, as served by ``GET /api/bonds``."""
    return [
        {
            "id": "1",
            "name": "National Highway Infrastructure Bond",
            "issuer": "NHAI",
            "returnRate": 7.5,
            "riskLevel": "Low",
            "riskScore": 22,
            "price": 10000,
            "maturityYears": 5,
            "description": "Highway development",
            "sector": "Transportation",
        },
        {
            "id": "2",
            "name": "Metro Rail Development Bond",
            "issuer": "DMRC",
            "returnRate": 8.2,
            "riskLevel": "Low",
            "price": 25000,
            "maturityYears": 7,
            "description": "Metro expansion",
            "sector": "Urban Transit",
        },
        {
            "id": "3",
            "name": "Green Energy Infrastructure Bond",
            "issuer": "IREDA",
            "returnRate": 9.0,
            "riskLevel": "Medium",
            "riskScore": 45,
            "price": 15000,
            "maturityYears": 10,
            "description": "Renewables",
            "sector": "Energy",
        },
        {
            "id": "4",
            "name": "Smart City Development Bond",
            "issuer": "Smart City SPV",
            "returnRate": 8.2,
            "riskLevel": "Medium",
            "price": 20000,
            "maturityYears": 8,
            "description": "Smart cities",
            "sector": "Urban Development",
        },
        {
            "id": "5",
            "name": "Port & Logistics Bond",
            "issuer": "Sagarmala SPV",
            "returnRate": 9.5,
            "riskLevel": "High",
            "riskScore": 71,
            "price": 50000,
            "maturityYears": 12,
            "description": "Ports",
            "sector": "Maritime",
            "availableUnits": 10,
        },
    ]


@pytest.fixture
def sample_bonds(sample_documents):
    """Validated ``BondRecord`` objects in source order."""
    return [BondRecord.model_validate(doc) for doc in sample_documents]


@pytest.fixture
def write_bonds_file(tmp_path):
    """Factory writing a JSON payload to a temporary bond file."""

    def _write(payload, name="bonds.json"):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
