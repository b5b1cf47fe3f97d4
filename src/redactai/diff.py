"""Token-level alignment of two texts for side-by-side comparison.

Tokens are words, runs of horizontal whitespace, and single punctuation
marks.  The alignment is a plain LCS over the token streams; the table
is O(m*n) so callers should bound input size.
"""

from __future__ import annotations
import re

from .types import Alignment, DiffChunk, DiffKind

_TOKENIZER = re.compile(r"([^\S\r\n]+|[.,!?;:]|\b)")


def tokenize(text: str) -> list[str]:
    """Split text keeping delimiters; joining the tokens gives back ``text``."""
    return [t for t in _TOKENIZER.split(text) if t]


def align_tokens(actual: str, expected: str) -> Alignment:
    """LCS alignment of ``actual`` against ``expected``.

    Ties while backtracking charge the mismatch to the expected side.
    """
    a = tokenize(actual)
    e = tokenize(expected)
    m, n = len(a), len(e)

    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == e[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    actual_chunks: list[DiffChunk] = []
    expected_chunks: list[DiffChunk] = []
    i, j = m, n
    while i > 0 or j > 0:
        if i > 0 and j > 0 and a[i - 1] == e[j - 1]:
            actual_chunks.append(DiffChunk(a[i - 1], DiffKind.MATCH))
            expected_chunks.append(DiffChunk(e[j - 1], DiffKind.MATCH))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            expected_chunks.append(DiffChunk(e[j - 1], DiffKind.MISMATCH_EXPECTED))
            j -= 1
        else:
            actual_chunks.append(DiffChunk(a[i - 1], DiffKind.MISMATCH_ACTUAL))
            i -= 1

    actual_chunks.reverse()
    expected_chunks.reverse()
    return Alignment(actual_chunks=actual_chunks, expected_chunks=expected_chunks)
