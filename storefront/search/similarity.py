"""
==============================================================================
Similarity Scoring Module
==============================================================================

Edit-distance based closeness of two strings.

    similarity = (len(longer) - levenshtein(longer, shorter)) / len(longer)

Two empty strings are identical (1.0). The score is always within [0, 1]
since the distance never exceeds the longer length.

==============================================================================
"""

from __future__ import annotations

from typing import List


def levenshtein_distance(a: str, b: str) -> int:
    """
    Minimum number of single-character insertions, deletions and
    substitutions turning ``a`` into ``b``.

    Classic dynamic programming over a (len(a) + 1) x (len(b) + 1) table,
    kept as two rows.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous: List[int] = list(range(len(b) + 1))

    for i, char_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current[j] = previous[j - 1]
            else:
                current[j] = 1 + min(
                    previous[j - 1],  # substitution
                    current[j - 1],   # insertion
                    previous[j],      # deletion
                )
        previous = current

    return previous[-1]


def similarity(a: str, b: str) -> float:
    """
    Normalized similarity in [0, 1], 1.0 meaning identical.

    Args:
        a: First string (typically the query)
        b: Second string (typically a keyword)
    """
    longer, shorter = (a, b) if len(a) > len(b) else (b, a)

    if not longer:
        return 1.0

    distance = levenshtein_distance(longer, shorter)
    return (len(longer) - distance) / len(longer)
