"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from typing import Generator

from models.perfume import Perfume
from services.catalog_service import CatalogService, reset_catalog_service
from services.note_service import reset_note_service

from tests.factories import PerfumeFactory, NoteFactory


TEST_PALETTE = ["red", "orange", "yellow"]


# ===================
# SAMPLE DATA
# ===================

@pytest.fixture
def sample_perfume_data() -> dict:
    """A complete, defect-free catalog row."""
    return {
        "slug": "sauvage-edp",
        "title": "Sauvage Eau de Parfum",
        "image": "/images/sauvage.jpg",
        "image_alt": "Sauvage bottle",
        "gender": "Men",
        "price_15ml": "45",
        "price_30ml": "80",
        "price_50ml": "120",
        "brand": "Dior",
        "top_notes": "Bergamot, Pepper",
        "heart_notes": "Lavender, Sichuan Pepper",
        "base_notes": "Ambroxan, Vanilla",
        "link": "https://example.com/sauvage",
        "stock_status": "instock",
    }


@pytest.fixture
def sample_perfume(sample_perfume_data) -> Perfume:
    return Perfume(**sample_perfume_data)


@pytest.fixture
def sample_catalog() -> list[Perfume]:
    """
    Five records:
        0, 1: same slug "a" (slug cluster)
        2: unique
        3, 4: same title "Twin" (title cluster), different slugs
    """
    PerfumeFactory.reset_counter()
    return [
        PerfumeFactory.create(slug="a", title="X"),
        PerfumeFactory.create(slug="a", title="Y"),
        PerfumeFactory.create(slug="b", title="Z"),
        PerfumeFactory.create(slug="c", title="Twin"),
        PerfumeFactory.create(slug="d", title="twin"),
    ]


@pytest.fixture
def sample_csv(sample_perfume_data) -> str:
    """Catalog CSV text with three rows, the last two identical."""
    header = ",".join(sample_perfume_data.keys())
    row = ",".join(f'"{v}"' for v in sample_perfume_data.values())
    other = dict(sample_perfume_data, slug="bleu", title="Bleu de Chanel", brand="Chanel")
    other_row = ",".join(f'"{v}"' for v in other.values())
    return "\n".join([header, row, other_row, other_row]) + "\n"


# ===================
# SERVICES
# ===================

@pytest.fixture
def catalog_service(sample_catalog) -> CatalogService:
    """Fresh catalog service loaded with sample_catalog."""
    service = CatalogService(palette=TEST_PALETTE)
    service.load(sample_catalog, source="test")
    return service


@pytest.fixture
def fresh_singletons() -> Generator:
    """Reset the module-level services around a test."""
    reset_catalog_service()
    reset_note_service()
    yield
    reset_catalog_service()
    reset_note_service()


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(fresh_singletons):
    """
    Create FastAPI test client with empty in-memory catalogs.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/catalog")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def loaded_client(test_client, sample_catalog):
    """Test client whose catalog holds sample_catalog and two notes."""
    from services.catalog_service import get_catalog_service
    from services.note_service import get_note_service

    get_catalog_service().load(sample_catalog, source="test")
    get_note_service().load([
        NoteFactory.create(title="Bergamot"),
        NoteFactory.create(title="Pink Pepper"),
    ])
    return test_client
