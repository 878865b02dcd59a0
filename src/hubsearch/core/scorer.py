"""Relevance scorer — Deterministic text-match scoring.

Scoring is tiered, then additive:

  - exact match (whole text equals the term)      → 100
  - text starts with the term                     →  50
  - text contains the term                        →  25
  - otherwise                                     →   0

On top of the prefix/substring/no-match tiers, every whitespace-separated
word of the term that occurs in the text adds 5, so word-level matches alone
can yield a non-zero score. An exact match is already the strongest signal
and is returned as-is.

Matching is case-insensitive via ``str.lower`` only; no locale rules, no
stemming, no tokenization of the text.
"""

from __future__ import annotations

EXACT_MATCH_SCORE = 100
PREFIX_MATCH_SCORE = 50
SUBSTRING_MATCH_SCORE = 25
WORD_MATCH_BONUS = 5


def score(term: str, text: str) -> int:
    """Score how well ``text`` matches ``term``.

    Args:
        term: The (already trimmed) search term.
        text: The candidate's concatenated searchable text.

    Returns:
        A non-negative integer; 0 means "no match".
    """
    needle = term.lower()
    haystack = (text or "").lower()

    if not needle:
        return 0

    if haystack == needle:
        return EXACT_MATCH_SCORE

    if haystack.startswith(needle):
        base = PREFIX_MATCH_SCORE
    elif needle in haystack:
        base = SUBSTRING_MATCH_SCORE
    else:
        base = 0

    bonus = sum(WORD_MATCH_BONUS for word in needle.split() if word in haystack)
    return base + bonus


class RelevanceScorer:
    """Object wrapper around :func:`score` so adapters can take a scorer."""

    def score(self, term: str, text: str) -> int:
        return score(term, text)

    def score_fields(self, term: str, *fields: str | None) -> int:
        """Score the space-joined concatenation of the non-empty ``fields``."""
        return score(term, join_fields(*fields))


def join_fields(*fields: str | None) -> str:
    return " ".join(f.strip() for f in fields if f and f.strip())
