"""
==============================================================================
Catalog Store Module
==============================================================================

Authoritative in-memory catalog backed by a single JSON file.

Features:
---------
- Category -> ordered product list (insertion order = display order)
- Add / remove / list with per-category id uniqueness
- Whole-file atomic persistence on every mutation
- Change feed for derived structures (search, audit logging)

JSON Structure:
--------------
{
  "fridges": [
    {"name": "Premium Refrigerator", "id": "1001", "description": "", "imageUrl": null}
  ],
  "other": [
    {"name": "High-Speed Blender", "id": "4152", "description": "", "imageUrl": null}
  ]
}

Concurrency:
-----------
All mutations run under one lock covering validate -> apply -> persist ->
publish. A mutation whose persist step fails is rolled back before the lock
is released, so readers never observe uncommitted state.

==============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import random
import tempfile
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from storefront.core import exceptions
from .models import CatalogChange, ChangeKind, Product


# Module logger
logger = logging.getLogger(__name__)


ChangeListener = Callable[[CatalogChange], None]

MAX_NAME_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000
MAX_IMAGE_URL_LENGTH = 500


# Written when the catalog file does not exist yet: one seed product per category.
DEFAULT_CATALOG: Dict[str, List[dict]] = {
    "fridges": [{"name": "Premium Refrigerator", "id": "1001"}],
    "cloth-washers": [{"name": "Front Load Washer", "id": "2001"}],
    "acs": [{"name": "Split AC Unit", "id": "3001"}],
    "fans": [{"name": "Ceiling Fan", "id": "4001"}],
    "dish-washers": [{"name": "Built-in Dishwasher", "id": "5001"}],
    "other": [{"name": "High-Speed Blender", "id": "4152"}],
}

ID_MIN = 1000
ID_MAX = 9999
ID_ATTEMPTS = 100


class CatalogStore:
    """
    Catalog manager owning the category -> products mapping.

    Attributes:
        products_file: Path of the backing JSON file

    Example:
        >>> store = CatalogStore(Path("data/products.json"), ["fridges", "other"])
        >>> product = store.add("other", name="Stand Mixer")
        >>> store.remove("other", product.id)
    """

    def __init__(
        self,
        products_file: Path,
        categories: Sequence[str],
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        """
        Open the catalog, creating the backing file with defaults if absent.

        Args:
            products_file: Path to products.json
            categories: Known categories, in display order
            id_factory: Generator for candidate product ids
        """
        self._products_file = Path(products_file)
        self._configured = list(categories)
        self._id_factory = id_factory or _random_id
        self._data: Dict[str, List[Product]] = {}
        self._listeners: List[ChangeListener] = []
        self._lock = threading.RLock()

        self._load()

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def products_file(self) -> Path:
        return self._products_file

    # =========================================================================
    # LOADING
    # =========================================================================

    def _load(self) -> None:
        """Load products from the JSON file, seeding it first if needed."""
        if not self._products_file.exists():
            logger.info(f"Catalog file not found, creating defaults at {self._products_file}")
            seed = {
                category: [Product(**item) for item in DEFAULT_CATALOG.get(category, [])]
                for category in self._configured
            }
            self._write_snapshot(seed)

        try:
            with self._products_file.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"❌ Cannot read catalog {self._products_file}: {e}")
            raise exceptions.PersistenceError(
                f"Failed to read catalog: {e}",
                {"path": str(self._products_file)}
            ) from e

        if not isinstance(raw, dict):
            raise exceptions.PersistenceError(
                "Catalog file must contain a JSON object",
                {"path": str(self._products_file)}
            )

        data: Dict[str, List[Product]] = {category: [] for category in self._configured}

        for category, items in raw.items():
            if not isinstance(items, list):
                logger.warning(f"Skipping invalid category: {category}")
                continue

            if category not in data:
                logger.warning(f"Category '{category}' is not configured, keeping it as loaded")
                data[category] = []

            seen_ids = set()
            for item in items:
                product = self._parse_record(category, item)
                if product is None:
                    continue
                if product.id in seen_ids:
                    logger.warning(f"Skipping duplicate id {product.id} in {category}")
                    continue
                seen_ids.add(product.id)
                data[category].append(product)

        with self._lock:
            self._data = data

        total = sum(len(products) for products in data.values())
        logger.info(f"✅ Loaded {total} products from {len(data)} categories")

    @staticmethod
    def _parse_record(category: str, item: object) -> Optional[Product]:
        if not isinstance(item, dict) or "name" not in item or "id" not in item:
            logger.warning(f"Skipping malformed product in {category}: {item!r}")
            return None

        try:
            return Product(
                name=item["name"],
                id=str(item["id"]),
                description=item.get("description") or "",
                image_url=item.get("imageUrl"),
            )
        except PydanticValidationError as e:
            logger.warning(f"Skipping invalid product in {category}: {e}")
            return None

    def reload(self) -> None:
        """Reload catalog from file."""
        logger.info("Reloading product catalog...")
        with self._lock:
            self._load()

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def _write_snapshot(self, data: Dict[str, List[Product]]) -> None:
        """
        Atomically replace the backing file with the given mapping.

        Writes to a temp file in the same directory, fsyncs it, then renames
        it over the target.
        """
        payload = {
            category: [product.to_record() for product in products]
            for category, products in data.items()
        }
        directory = self._products_file.parent
        tmp_path = None

        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=".products-",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = tmp.name
                json.dump(payload, tmp, indent=2, ensure_ascii=False)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, self._products_file)
        except OSError as e:
            logger.error(f"❌ Failed to write catalog {self._products_file}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise exceptions.persistence_failed(str(self._products_file), str(e)) from e

    def _persist(self) -> None:
        self._write_snapshot(self._data)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add(
        self,
        category: Optional[str],
        name: Optional[str],
        description: Optional[str] = None,
        image_url: Optional[str] = None,
        product_id: Optional[str] = None,
    ) -> Product:
        """
        Append a product to a category and persist.

        Args:
            category: Target category
            name: Product display name
            description: Optional description
            image_url: Optional reference to an already-stored image
            product_id: Explicit id; generated when omitted

        Returns:
            The stored Product

        Raises:
            ValidationError: Missing name/category, over-long field, unknown category, or duplicate id
            PersistenceError: Backing file could not be written (nothing committed)
        """
        name = (name or "").strip()
        category = (category or "").strip()

        if not name:
            raise exceptions.missing_field("name")
        if not category:
            raise exceptions.missing_field("category")

        for field, value, limit in (
            ("name", name, MAX_NAME_LENGTH),
            ("description", description, MAX_DESCRIPTION_LENGTH),
            ("imageUrl", image_url, MAX_IMAGE_URL_LENGTH),
        ):
            if value is not None and len(value) > limit:
                raise exceptions.field_too_long(field, limit)

        with self._lock:
            if category not in self._data:
                raise exceptions.unknown_category(category)

            products = self._data[category]
            taken = {p.id for p in products}

            if product_id is not None:
                product_id = str(product_id).strip()
                if not product_id:
                    raise exceptions.missing_field("id")
                if product_id in taken:
                    raise exceptions.duplicate_product_id(category, product_id)
            else:
                product_id = self._generate_id(taken)

            product = Product(
                name=name,
                id=product_id,
                description=description or "",
                image_url=image_url or None,
            )

            products.append(product)
            try:
                self._persist()
            except exceptions.PersistenceError:
                products.pop()
                raise

            logger.info(f"➕ Added '{product.name}' ({product.id}) to {category}")
            self._publish(CatalogChange(kind=ChangeKind.ADDED, category=category, product=product))

        return product

    def remove(self, category: Optional[str], product_id: Optional[str]) -> Product:
        """
        Remove the first product with a matching id and persist.

        Raises:
            ValidationError: Missing category or id
            NotFoundError: Unknown category or id
            PersistenceError: Backing file could not be written (nothing committed)
        """
        category = (category or "").strip()
        product_id = str(product_id).strip() if product_id is not None else ""

        if not category:
            raise exceptions.missing_field("category")
        if not product_id:
            raise exceptions.missing_field("id")

        with self._lock:
            products = self._data.get(category)
            if products is None:
                raise exceptions.category_not_found(category)

            index = next((i for i, p in enumerate(products) if p.id == product_id), None)
            if index is None:
                raise exceptions.product_not_found(category, product_id)

            removed = products.pop(index)
            try:
                self._persist()
            except exceptions.PersistenceError:
                products.insert(index, removed)
                raise

            logger.info(f"➖ Removed '{removed.name}' ({removed.id}) from {category}")
            self._publish(CatalogChange(kind=ChangeKind.REMOVED, category=category, product=removed))

        return removed

    def _generate_id(self, taken: set) -> str:
        for _ in range(ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in taken:
                return candidate

        # Random range exhausted or factory keeps colliding
        candidate = max((int(i) for i in taken if i.isdigit()), default=ID_MAX) + 1
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    # =========================================================================
    # READS
    # =========================================================================

    def list(self, category: str) -> List[Product]:
        """
        Snapshot of one category's products in display order.

        Raises:
            NotFoundError: Unknown category
        """
        with self._lock:
            products = self._data.get(category)
            if products is None:
                raise exceptions.category_not_found(category)
            return list(products)

    def get(self, category: str, product_id: str) -> Product:
        """Find one product by id."""
        for product in self.list(category):
            if product.id == product_id:
                return product
        raise exceptions.product_not_found(category, product_id)

    def snapshot(self) -> Dict[str, List[Product]]:
        """Copy of the full category -> products mapping."""
        with self._lock:
            return {category: list(products) for category, products in self._data.items()}

    def categories(self) -> List[str]:
        with self._lock:
            return list(self._data.keys())

    def has_category(self, category: str) -> bool:
        with self._lock:
            return category in self._data

    def count(self) -> int:
        with self._lock:
            return sum(len(products) for products in self._data.values())

    # =========================================================================
    # CHANGE FEED
    # =========================================================================

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback invoked after each committed add/remove."""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _publish(self, change: CatalogChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                # The mutation is already committed; a faulty listener must not undo it.
                logger.exception(f"Catalog change listener failed for {change.kind.value} in {change.category}")

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def close(self) -> None:
        """Detach all listeners. The backing file is always up to date."""
        with self._lock:
            self._listeners.clear()
        logger.debug("Catalog store closed")


def _random_id() -> str:
    return str(random.randint(ID_MIN, ID_MAX))
