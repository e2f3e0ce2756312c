"""
==============================================================================
Product Search Endpoints
==============================================================================

Typo-tolerant search over the searchable categories.

==============================================================================
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.config import Settings
from storefront.core.dependencies import get_app_settings, get_matcher
from storefront.schemas.product import ProductResponse, SearchResponse, SearchResultResponse
from storefront.search.matcher import SearchMatcher


router = APIRouter(prefix="/search", tags=["Search"])


class SearchController:
    """Controller for search operations."""

    def __init__(self, matcher: SearchMatcher, settings: Settings):
        self._matcher = matcher
        self._settings = settings

    def search(self, query: str, limit: Optional[int]) -> SearchResponse:
        """Ranked matches, truncated to the display limit."""
        limit = limit or self._settings.search_display_limit
        matches = self._matcher.search(query, limit=limit)

        return SearchResponse(
            query=self._matcher.normalize(query),
            total=len(matches),
            results=[
                SearchResultResponse(
                    product=ProductResponse.from_product(m.product),
                    category=m.category,
                    matched_keyword=m.matched_keyword,
                    similarity=m.similarity,
                )
                for m in matches
            ]
        )


@router.get("", response_model=SearchResponse)
def search_products(
    q: str = Query("", max_length=200),
    limit: Optional[int] = Query(None, ge=1, le=100),
    matcher: SearchMatcher = Depends(get_matcher),
    settings: Settings = Depends(get_app_settings)
):
    """Search products by approximate name."""
    controller = SearchController(matcher, settings)
    return controller.search(q, limit)
