"""
==============================================================================
Keyword Generation Module
==============================================================================

Turns a product name into the set of strings a search query is scored
against.

Rules:
------
- The whole lowercased name is always a keyword
- Every whitespace-separated word is a keyword
- Words longer than 3 characters also yield two typo variants:
  the word minus its last character, and the word plus a trailing "r"

Example:
--------
    >>> sorted(generate_keywords("Cooker"))
    ['cooke', 'cooker', 'cookerr']

==============================================================================
"""

from __future__ import annotations

from typing import List, Set


TYPO_MIN_WORD_LENGTH = 4
TYPO_SUFFIX = "r"


def keyword_list(name: str) -> List[str]:
    """
    Keywords for a product name in generation order, without duplicates.

    Args:
        name: Product display name

    Returns:
        Ordered list starting with the full lowercased name
    """
    lowered = name.lower()
    keywords = [lowered]

    for word in lowered.split():
        keywords.append(word)
        if len(word) >= TYPO_MIN_WORD_LENGTH:
            keywords.append(word[:-1])
            keywords.append(word + TYPO_SUFFIX)

    return list(dict.fromkeys(keywords))


def generate_keywords(name: str) -> Set[str]:
    """Keyword set for a product name. Case-insensitive and deterministic."""
    return set(keyword_list(name))
