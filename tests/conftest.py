"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides isolated settings, a catalog store, a matcher and an API client,
all backed by a temporary directory.

==============================================================================
"""

import pytest
from pathlib import Path
from typing import Dict, Generator
from fastapi.testclient import TestClient

from storefront.catalog.store import CatalogStore
from storefront.config import Settings
from storefront.main import create_app
from storefront.search.matcher import SearchMatcher


ADMIN_CODE = "1234"


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================

@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every file path into the test's temp directory."""
    return Settings(
        _env_file=None,
        debug=False,
        products_file=str(tmp_path / "data" / "products.json"),
        uploads_directory=str(tmp_path / "uploads"),
        admin_code=ADMIN_CODE,
        upload_max_bytes=64 * 1024,
    )


@pytest.fixture
def products_path(settings: Settings) -> Path:
    return settings.products_path


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def store(settings: Settings) -> Generator[CatalogStore, None, None]:
    """Fresh store seeded with the default catalog."""
    catalog = CatalogStore(settings.products_path, settings.categories_list)
    yield catalog
    catalog.close()


@pytest.fixture
def matcher(store: CatalogStore) -> SearchMatcher:
    """Matcher over the default searchable category."""
    return SearchMatcher(store, ["other"])


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """Test client around a freshly built application."""
    app = create_app(settings)

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_payload() -> Dict[str, str]:
    return {"password": ADMIN_CODE}
