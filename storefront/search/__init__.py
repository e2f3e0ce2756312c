"""
==============================================================================
Search Package - Fuzzy Product Search
==============================================================================

Typo-tolerant search over a small in-memory catalog.

Modules:
--------
- keywords: product name -> keyword set
- similarity: Levenshtein distance and normalized similarity
- matcher: ranking and deduplication against the catalog store

==============================================================================
"""

from .keywords import generate_keywords, keyword_list
from .similarity import levenshtein_distance, similarity
from .matcher import SearchableEntry, SearchMatch, SearchMatcher

__all__ = [
    "generate_keywords",
    "keyword_list",
    "levenshtein_distance",
    "similarity",
    "SearchableEntry",
    "SearchMatch",
    "SearchMatcher",
]
