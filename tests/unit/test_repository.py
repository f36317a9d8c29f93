"""
File: tests/unit/test_repository.py
Description: JSON bond repository loading and lookups.
"""
import pytest

from mudra.catalog.schemas import BondRecord
from mudra.data.adapters.json_repository import JsonBondRepository
from mudra.data.base import BondRepository


def test_loads_bond_list(write_bonds_file, sample_documents):
    repo = JsonBondRepository(data_file=str(write_bonds_file(sample_documents)))
    bonds = repo.fetch_all()
    assert [b.id for b in bonds] == ["1", "2", "3", "4", "5"]


def test_loads_rest_envelope(write_bonds_file, sample_documents):
    envelope = {"success": True, "count": 5, "source": "json", "data": sample_documents}
    repo = JsonBondRepository(data_file=str(write_bonds_file(envelope)))
    assert len(repo.fetch_all()) == 5


def test_fetch_by_id(write_bonds_file, sample_documents):
    repo = JsonBondRepository(data_file=str(write_bonds_file(sample_documents)))
    assert repo.fetch_by_id("2").issuer == "DMRC"
    assert repo.fetch_by_id("missing") is None


def test_database_ids_resolved(write_bonds_file, sample_documents):
    docs = [dict(sample_documents[0], _id="65a1b2c3d4e5f60718293a4b")]
    repo = JsonBondRepository(data_file=str(write_bonds_file(docs)))
    bond = repo.fetch_by_id("65a1b2c3d4e5f60718293a4b")
    assert bond.id == "65a1b2c3d4e5f60718293a4b"
    assert bond.legacy_id == "1"
    # The native id still resolves, as the REST route falls back to it.
    assert repo.fetch_by_id("1") is bond


def test_canonical_id_beats_legacy_id(write_bonds_file, sample_documents):
    docs = [
        dict(sample_documents[0], _id="65a1b2c3d4e5f60718293a4b", id="2"),
        sample_documents[1],
    ]
    repo = JsonBondRepository(data_file=str(write_bonds_file(docs)))
    assert repo.fetch_by_id("2").name == "Metro Rail Development Bond"


def test_invalid_documents_skipped(write_bonds_file, sample_documents):
    docs = sample_documents + [
        {"id": "bad", "name": "Broken Bond"},
        dict(sample_documents[0], id="neg", price=-10),
        "not a document",
    ]
    repo = JsonBondRepository(data_file=str(write_bonds_file(docs)))
    assert len(repo.fetch_all()) == 5


def test_duplicate_ids_keep_first(write_bonds_file, sample_documents):
    docs = sample_documents + [dict(sample_documents[1], name="Shadow Copy")]
    repo = JsonBondRepository(data_file=str(write_bonds_file(docs)))
    assert repo.fetch_by_id("2").name == "Metro Rail Development Bond"
    assert len(repo.fetch_all()) == 5


def test_inconsistent_risk_trusted(write_bonds_file, sample_documents):
    docs = [dict(sample_documents[0], riskLevel="Low", riskScore=95)]
    repo = JsonBondRepository(data_file=str(write_bonds_file(docs)))
    assert repo.fetch_by_id("1").risk_level.value == "Low"


def test_inactive_hidden_by_default(write_bonds_file, sample_documents):
    docs = sample_documents + [dict(sample_documents[0], id="old", isActive=False)]
    path = str(write_bonds_file(docs))

    assert JsonBondRepository(data_file=path).fetch_by_id("old") is None
    shown = JsonBondRepository(data_file=path, include_inactive=True)
    assert shown.fetch_by_id("old") is not None


def test_fetch_all_returns_copy(write_bonds_file, sample_documents):
    repo = JsonBondRepository(data_file=str(write_bonds_file(sample_documents)))
    repo.fetch_all().clear()
    assert len(repo.fetch_all()) == 5


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        JsonBondRepository(data_file=str(tmp_path / "nope.json"))


def test_corrupted_file_raises(tmp_path):
    path = tmp_path / "bonds.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        JsonBondRepository(data_file=str(path))


def test_payload_without_list_raises(write_bonds_file):
    with pytest.raises(ValueError):
        JsonBondRepository(data_file=str(write_bonds_file({"success": False})))


def test_default_fetch_by_id_scans_fetch_all(sample_bonds):
    class InMemoryRepository(BondRepository):
        def fetch_all(self):
            return list(sample_bonds)

    repo = InMemoryRepository()
    assert repo.fetch_by_id("5").name == "Port & Logistics Bond"
    assert repo.fetch_by_id("nope") is None


def test_default_fetch_by_id_falls_back_to_legacy_id(sample_documents):
    migrated = BondRecord.model_validate(dict(sample_documents[0], _id="abc"))

    class InMemoryRepository(BondRepository):
        def fetch_all(self):
            return [migrated]

    assert InMemoryRepository().fetch_by_id("1") is migrated
