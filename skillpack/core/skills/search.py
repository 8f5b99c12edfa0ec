"""
Intent matching for skill lookup.

A query matches a skill when it is a case-insensitive substring of the
skill's name or description, or when the light stem of every query word equals, or is a prefix of, the
stem of some word of that field ("cache" and "caching" both reduce to "cach").
A shorter field word never matches a longer query word ("and" vs "android").
"""

from __future__ import annotations

import re
from enum import IntEnum

_WORD_PATTERN = re.compile(r"[a-z0-9]+")
# Longest first so "ing" wins over "s" etc.
_SUFFIXES = ("ations", "ation", "ings", "ing", "ers", "ies", "ied", "es", "ed", "er", "s", "e", "y")
_MIN_STEM_LENGTH = 3


class MatchTier(IntEnum):
    """Relevance tiers, best first."""

    EXACT_NAME = 0
    NAME_SUBSTRING = 1
    NAME_STEM = 2
    DESCRIPTION_SUBSTRING = 3
    DESCRIPTION_STEM = 4


def normalize(text: str) -> str:
    return " ".join(text.lower().split())


def stem(word: str) -> str:
    for suffix in _SUFFIXES:
        if word.endswith(suffix) and len(word) - len(suffix) >= _MIN_STEM_LENGTH:
            return word[: -len(suffix)]
    return word


def stems(text: str) -> set[str]:
    return {stem(word) for word in _WORD_PATTERN.findall(text.lower())}


def _term_matches(term: str, field_stems: set[str]) -> bool:
    if term in field_stems:
        return True
    if len(term) < _MIN_STEM_LENGTH:
        return False
    # A field word may extend a query word ("auth" -> "authentication"), never the reverse.
    return any(candidate.startswith(term) for candidate in field_stems)


def _stem_match(query_stems: set[str], field_stems: set[str]) -> bool:
    if not query_stems:
        return False
    return all(_term_matches(term, field_stems) for term in query_stems)


def match_tier(query: str, name: str, description: str) -> MatchTier | None:
    """Return the best tier at which ``query`` matches, or None.

    ``query`` must already be normalized.
    """
    norm_name = normalize(name)
    norm_description = normalize(description)
    query_stems = stems(query)

    if query == norm_name:
        return MatchTier.EXACT_NAME
    if query in norm_name:
        return MatchTier.NAME_SUBSTRING
    if _stem_match(query_stems, stems(name)):
        return MatchTier.NAME_STEM
    if query in norm_description:
        return MatchTier.DESCRIPTION_SUBSTRING
    if _stem_match(query_stems, stems(description)):
        return MatchTier.DESCRIPTION_STEM
    return None


__all__ = ["MatchTier", "match_tier", "normalize", "stem", "stems"]
