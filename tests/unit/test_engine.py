"""
File: tests/unit/test_engine.py
Description: BondCatalogEngine browse and quote.
"""
import pytest

from mudra.catalog.engine import BondCatalogEngine
from mudra.catalog.errors import InvalidArgument
from mudra.catalog.schemas import SortKey
from mudra.data.adapters.json_repository import JsonBondRepository
from mudra.valuation.calculator import project


@pytest.fixture
def engine(write_bonds_file, sample_documents):
    repo = JsonBondRepository(data_file=str(write_bonds_file(sample_documents)))
    return BondCatalogEngine(repo)


def test_browse_defaults_to_highest_return_first(engine):
    page = engine.browse()
    assert page.sort_key is SortKey.RETURN_RATE_DESC
    assert [b.id for b in page.bonds] == ["5", "3", "2", "4", "1"]
    assert page.total == page.matched == 5


def test_browse_reports_counts_and_full_sector_facet(engine):
    page = engine.browse({"risk": "Low"}, sort_key="price-asc")
    assert [b.id for b in page.bonds] == ["1", "2"]
    assert page.matched == 2
    assert page.total == 5
    assert len(page.sectors) == 5


def test_browse_with_no_matches(engine):
    page = engine.browse({"searchText": "zzz"})
    assert page.bonds == []
    assert page.matched == 0


def test_browse_rejects_unknown_sort(engine):
    with pytest.raises(InvalidArgument):
        engine.browse(sort_key="yield-desc")


def test_custom_default_sort(write_bonds_file, sample_documents):
    repo = JsonBondRepository(data_file=str(write_bonds_file(sample_documents)))
    engine = BondCatalogEngine(repo, default_sort="name-asc")
    assert engine.browse().bonds[0].name == "Green Energy Infrastructure Bond"


def test_invalid_default_sort_rejected(write_bonds_file, sample_documents):
    repo = JsonBondRepository(data_file=str(write_bonds_file(sample_documents)))
    with pytest.raises(InvalidArgument):
        BondCatalogEngine(repo, default_sort="newest")


def test_quote(engine):
    quote = engine.quote("1", units=2)
    assert quote.cost == 20000
    assert quote.projection == project(20000, 7.5, 5)


def test_quote_unknown_bond(engine):
    with pytest.raises(KeyError):
        engine.quote("404")


def test_quote_invalid_units(engine):
    with pytest.raises(InvalidArgument):
        engine.quote("1", units=0)
