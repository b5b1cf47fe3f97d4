"""Edit distance and similarity scoring.

Both the privacy-impact score (original vs redacted) and the accuracy
score (redacted vs a reference output) are Levenshtein similarities on a
0–100 scale.
"""

from __future__ import annotations

from .types import ProcessingStats


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``.

    Works on code points.  Memory is two rows of ``len(b) + 1``.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        cur = [i]
        for j, cb in enumerate(b, 1):
            cost = 0 if ca == cb else 1
            cur.append(min(
                prev[j] + 1,          # deletion
                cur[j - 1] + 1,       # insertion
                prev[j - 1] + cost,   # substitution
            ))
        prev = cur
    return prev[-1]


def similarity(a: str, b: str, distance: int) -> float:
    """Similarity percentage for a precomputed distance between ``a`` and ``b``."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100.0
    return max(0.0, (max_len - distance) / max_len * 100)


def compute_stats(
    original: str,
    redacted: str,
    entity_count: int,
    expected: str | None = None,
) -> ProcessingStats:
    """Build the stats block for one redaction cycle.

    ``accuracy_score`` is only filled in when ``expected`` has content.
    """
    distance = levenshtein_distance(original, redacted)
    accuracy: float | None = None
    if expected is not None and expected.strip():
        acc_distance = levenshtein_distance(expected, redacted)
        accuracy = similarity(expected, redacted, acc_distance)

    return ProcessingStats(
        original_length=len(original),
        redacted_length=len(redacted),
        edit_distance=distance,
        similarity_score=similarity(original, redacted, distance),
        entity_count=entity_count,
        accuracy_score=accuracy,
    )
