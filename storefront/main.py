"""
==============================================================================
Appliance Storefront - Application Entry Point
==============================================================================

FastAPI application with:
- Category catalog backed by a JSON file
- Typo-tolerant product search
- Admin add/remove and image upload gated by a shared code
- WhatsApp hand-off links for product selection

Usage:
------
    # Development
    uvicorn storefront.main:app --reload

    # Production
    uvicorn storefront.main:app --host 0.0.0.0 --port 5000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from storefront.config import Settings, get_settings
from storefront.core.exceptions import PersistenceError, register_exception_handlers
from storefront.core.security import AdminGate
from storefront.api.router import api_router
from storefront.catalog.models import CatalogChange
from storefront.catalog.store import CatalogStore
from storefront.search.matcher import SearchMatcher
from storefront.services.order_service import OrderLinkBuilder
from storefront.services.upload_service import UPLOADS_URL_PREFIX, UploadService


logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Opening the catalog store and search matcher on startup
    - Closing the store on shutdown
    - Middleware, exception handler and router registration
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the application."""
        self._settings = settings or get_settings()
        self._settings.ensure_directories()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="Appliance catalog with fuzzy search and admin management",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )
        app.state.settings = self._settings

        self._configure_middleware(app)
        register_exception_handlers(app)
        app.include_router(api_router)

        # Uploaded product images
        app.mount(
            UPLOADS_URL_PREFIX,
            StaticFiles(directory=str(self._settings.uploads_path)),
            name="uploads"
        )

        self._register_root(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup(app)
        yield
        self._shutdown(app)

    def _startup(self, app: FastAPI) -> None:
        """Application startup tasks."""
        settings = self._settings

        logger.info("=" * 60)
        logger.info(f"🚀 Starting {settings.app_name}")
        logger.info("=" * 60)

        app.state.admin_gate = AdminGate(settings.admin_code)
        app.state.upload_service = UploadService(settings.uploads_path, settings.upload_max_bytes)
        app.state.order_links = OrderLinkBuilder(settings.whatsapp_phone)

        try:
            store = CatalogStore(settings.products_path, settings.categories_list)
        except PersistenceError as e:
            logger.error(f"❌ Failed to load catalog: {e}")
            app.state.catalog_store = None
            app.state.matcher = None
            return

        store.subscribe(self._log_change)

        app.state.catalog_store = store
        app.state.matcher = SearchMatcher(
            store,
            settings.searchable_categories_list,
            threshold=settings.search_threshold,
            min_query_length=settings.search_min_query_length,
        )

        logger.info(f"✅ Catalog ready: {store.count()} products in {len(store.categories())} categories")
        logger.info(f"🔎 Searchable categories: {', '.join(settings.searchable_categories_list)}")
        logger.info(f"📍 Running on http://{settings.host}:{settings.port}")
        logger.info(f"📖 API Docs: http://{settings.host}:{settings.port}/docs")
        logger.info("=" * 60)

    def _shutdown(self, app: FastAPI) -> None:
        """Application shutdown tasks."""
        logger.info("🛑 Shutting down...")
        store = getattr(app.state, "catalog_store", None)
        if store is not None:
            store.close()
            app.state.catalog_store = None
            app.state.matcher = None
        logger.info("✅ Shutdown complete")

    @staticmethod
    def _log_change(change: CatalogChange) -> None:
        logger.info(
            f"📦 Catalog {change.kind.value}: {change.category}/{change.product.id} "
            f"'{change.product.name}'"
        )

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_root(self, app: FastAPI) -> None:
        """Register root endpoint."""

        @app.get("/", include_in_schema=False)
        async def root():
            """Redirect to the API docs."""
            return RedirectResponse(url="/docs")

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a new application instance."""
    return Application(settings).app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

settings = get_settings()
configure_logging(settings)

app = create_app(settings)


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
