"""Length-normalized string similarity."""

from __future__ import annotations

from contact_search.scoring.distance import levenshtein_distance


def similarity(a: str, b: str) -> float:
    """Case-insensitive similarity in `[0, 1]`; `1.0` means identical.

    The edit distance is divided by the longer string's length, which makes
    scores comparable against one threshold across fields of very different
    typical lengths. Two empty strings are a perfect match.
    """

    a = a.lower()
    b = b.lower()
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - levenshtein_distance(a, b)) / max_len
