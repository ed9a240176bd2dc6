"""Levenshtein edit distance."""

from __future__ import annotations


def levenshtein_distance(a: str, b: str) -> int:
    """Return the minimum number of single-character edits turning `a` into `b`.

    Insertions, deletions and substitutions each cost 1. Comparison is
    case-sensitive; callers normalize case first.

    The classic dynamic-programming table has `len(b) + 1` rows and
    `len(a) + 1` columns, with `d[0][j] = j` and `d[i][0] = i`. Row `i` only
    depends on row `i - 1`, so only two rows are kept in memory.
    """

    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(a) + 1))
    for i, b_char in enumerate(b, start=1):
        current = [i] + [0] * len(a)
        for j, a_char in enumerate(a, start=1):
            if a_char == b_char:
                current[j] = previous[j - 1]
            else:
                current[j] = 1 + min(previous[j], current[j - 1], previous[j - 1])
        previous = current
    return previous[-1]
