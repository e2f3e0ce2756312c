"""
==============================================================================
Search Matcher Module
==============================================================================

Fuzzy product search over the searchable categories of a CatalogStore.

Algorithm:
----------
1. Normalize the query (strip, lowercase); short queries match nothing
2. Score the query against every keyword of every searchable product
3. Keep pairs scoring strictly above the threshold
4. Sort by score, best first (stable, so ties keep catalog order)
5. Keep only the best match per product name

The keyword entries are derived from the store on every query and thrown
away afterwards, so results always reflect the last committed mutation.

==============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from storefront.catalog.models import Product
from storefront.catalog.store import CatalogStore
from .keywords import keyword_list
from .similarity import similarity


# Module logger
logger = logging.getLogger(__name__)


DEFAULT_THRESHOLD = 0.6
DEFAULT_MIN_QUERY_LENGTH = 2


@dataclass(frozen=True)
class SearchableEntry:
    """Derived search record for one product. Never persisted."""

    name: str
    id: str
    category: str
    keywords: Tuple[str, ...]
    product: Product

    @classmethod
    def from_product(cls, category: str, product: Product) -> "SearchableEntry":
        return cls(
            name=product.name,
            id=product.id,
            category=category,
            keywords=tuple(keyword_list(product.name)),
            product=product,
        )


@dataclass(frozen=True)
class SearchMatch:
    """One ranked search result."""

    product: Product
    category: str
    matched_keyword: str
    similarity: float


class SearchMatcher:
    """
    Ranks catalog products against a free-text query, tolerating typos.

    Attributes:
        _store: Catalog providing the current products
        _categories: Categories included in search

    Example:
        >>> matcher = SearchMatcher(store, ["other"])
        >>> [m.product.name for m in matcher.search("blendr")]
        ['High-Speed Blender']
    """

    def __init__(
        self,
        store: CatalogStore,
        categories: Sequence[str],
        threshold: float = DEFAULT_THRESHOLD,
        min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
    ) -> None:
        self._store = store
        self._categories = list(categories)
        self._threshold = threshold
        self._min_query_length = min_query_length

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    @property
    def threshold(self) -> float:
        return self._threshold

    def entries(self) -> List[SearchableEntry]:
        """Derive searchable entries from the current catalog state."""
        entries = []
        snapshot = self._store.snapshot()

        for category in self._categories:
            for product in snapshot.get(category, []):
                entries.append(SearchableEntry.from_product(category, product))

        return entries

    def normalize(self, query: Optional[str]) -> str:
        return (query or "").strip().lower()

    def search(self, query: Optional[str], limit: Optional[int] = None) -> List[SearchMatch]:
        """
        Find products whose keywords resemble the query.

        Args:
            query: Raw user input
            limit: Truncate the ranked list (None keeps all matches)

        Returns:
            Matches ordered by similarity, one per product name
        """
        normalized = self.normalize(query)
        if len(normalized) < self._min_query_length:
            return []

        scored: List[SearchMatch] = []
        for entry in self.entries():
            for keyword in entry.keywords:
                score = similarity(normalized, keyword)
                if score > self._threshold:
                    scored.append(SearchMatch(
                        product=entry.product,
                        category=entry.category,
                        matched_keyword=keyword,
                        similarity=score,
                    ))

        scored.sort(key=lambda match: match.similarity, reverse=True)

        results: List[SearchMatch] = []
        seen_names = set()
        for match in scored:
            if match.product.name in seen_names:
                continue
            seen_names.add(match.product.name)
            results.append(match)

        logger.debug(f"Search '{normalized}': {len(results)} matches from {len(scored)} keyword hits")

        if limit is not None:
            return results[:limit]
        return results
