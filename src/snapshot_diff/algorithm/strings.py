"""String similarity metrics used by attribute matching and tie-breaking.

- ``jaro_winkler_similarity``: similarity in [0, 1] used by ``StringAttribute``
  and by the strong-similar identification strategy.
- ``levenshtein_distance``: edit distance used by the matcher to break ties
  between equally scored candidates (smaller path distance wins).

Both are pure functions with no dependency beyond the standard library.
"""

from __future__ import annotations

__all__ = ["jaro_winkler_similarity", "levenshtein_distance"]

# Winkler's prefix scale and the longest common prefix that earns a bonus.
_PREFIX_SCALE = 0.1
_MAX_PREFIX = 4
# Jaro scores below this threshold receive no prefix bonus.
_BOOST_THRESHOLD = 0.7


def levenshtein_distance(a: str, b: str) -> int:
    """Compute the Levenshtein (edit) distance between two strings.

    Uses a space-optimized rolling-row dynamic-programming implementation.
    The shorter string is always placed on the inner loop to minimise
    the allocation size.

    Args:
        a: First string.
        b: Second string.

    Returns:
        The minimum number of single-character edits (insertions, deletions,
        or substitutions) required to transform ``a`` into ``b``.
    """
    if a == b:
        return 0

    # Swap so that `b` is the shorter string (inner loop / row allocation)
    if len(a) < len(b):
        a, b = b, a

    if len(b) == 0:
        return len(a)

    prev_row = list(range(len(b) + 1))

    for i, ch_a in enumerate(a):
        curr_row = [i + 1] + [0] * len(b)
        for j, ch_b in enumerate(b):
            insert_cost = curr_row[j] + 1
            delete_cost = prev_row[j + 1] + 1
            replace_cost = prev_row[j] + (0 if ch_a == ch_b else 1)
            curr_row[j + 1] = min(insert_cost, delete_cost, replace_cost)
        prev_row = curr_row

    return prev_row[len(b)]


def _jaro_matches(longer: str, shorter: str) -> tuple[int, int, int]:
    """Return ``(matches, transpositions, common_prefix)`` for two strings.

    ``longer`` must be at least as long as ``shorter``.  Characters match when
    they are equal and no further apart than the Jaro match window.
    """
    window = max(len(longer) // 2 - 1, 0)
    matched_in_longer = [False] * len(longer)
    shorter_matches: list[str] = []

    for i, ch in enumerate(shorter):
        lo = max(i - window, 0)
        hi = min(i + window + 1, len(longer))
        for j in range(lo, hi):
            if not matched_in_longer[j] and longer[j] == ch:
                matched_in_longer[j] = True
                shorter_matches.append(ch)
                break

    longer_matches = [ch for ch, hit in zip(longer, matched_in_longer) if hit]
    half_transpositions = sum(
        1 for x, y in zip(shorter_matches, longer_matches) if x != y
    )

    prefix = 0
    for x, y in zip(shorter, longer):
        if x != y or prefix == _MAX_PREFIX:
            break
        prefix += 1

    return len(shorter_matches), half_transpositions // 2, prefix


def jaro_winkler_similarity(a: str, b: str) -> float:
    """Compute the Jaro–Winkler similarity between two strings.

    Identical strings (including two empty strings) score 1.0; strings with
    no matching characters score 0.0.  The Winkler prefix bonus is only
    applied when the plain Jaro score reaches 0.7.

    Args:
        a: First string.
        b: Second string.

    Returns:
        Float in [0.0, 1.0].
    """
    if a == b:
        return 1.0

    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
    matches, transpositions, prefix = _jaro_matches(longer, shorter)
    if matches == 0:
        return 0.0

    m = float(matches)
    jaro = (m / len(a) + m / len(b) + (m - transpositions) / m) / 3.0
    if jaro < _BOOST_THRESHOLD:
        return jaro
    return min(1.0, jaro + _PREFIX_SCALE * prefix * (1.0 - jaro))
