"""
Cause matching over lowercased content text.

The default mode is plain substring containment, so short keywords also
hit inside longer words ("art" in "heart", "gun" in "begun"). Word-boundary
matching is available as an opt-in for callers that want fewer false
positives.
"""

import re
from enum import Enum
from functools import lru_cache
from typing import Iterable, List, Optional, Set, Union

from advocacy_match.matching.taxonomy import (
    DEFAULT_TAXONOMY,
    CauseId,
    KeywordTaxonomy,
    cause_key,
)


class MatchMode(str, Enum):
    """How a keyword phrase is located in text."""
    SUBSTRING = "substring"
    WORD_BOUNDARY = "word_boundary"


@lru_cache(maxsize=1024)
def _boundary_pattern(keyword: str) -> "re.Pattern[str]":
    return re.compile(r"(?<!\w)" + re.escape(keyword) + r"(?!\w)")


def keyword_in_text(
    keyword: str,
    text: str,
    mode: MatchMode = MatchMode.SUBSTRING,
) -> bool:
    """Whether a keyword occurs in already-lowercased text."""
    keyword = keyword.lower()
    if not keyword:
        return False
    if mode == MatchMode.WORD_BOUNDARY:
        return _boundary_pattern(keyword).search(text) is not None
    return keyword in text


def cause_in_text(
    cause: Union[CauseId, str],
    text: str,
    mode: MatchMode = MatchMode.SUBSTRING,
    taxonomy: Optional[KeywordTaxonomy] = None,
) -> bool:
    if taxonomy is None:
        taxonomy = DEFAULT_TAXONOMY
    return any(keyword_in_text(kw, text, mode) for kw in taxonomy.keywords_for(cause))


def matched_causes(
    text: str,
    candidate_causes: Iterable[Union[CauseId, str]],
    mode: MatchMode = MatchMode.SUBSTRING,
    taxonomy: Optional[KeywordTaxonomy] = None,
) -> Set[str]:
    """
    Subset of candidate causes with at least one keyword present in text.

    Args:
        text: Content blob (lowercased here if it is not already)
        candidate_causes: Causes to test; unknown identifiers never match
        mode: Keyword location strategy
        taxonomy: Keyword table, defaults to the built-in one

    Returns:
        Set of matched cause identifiers
    """
    text = (text or "").lower()
    return {
        cause_key(cause)
        for cause in candidate_causes
        if cause_in_text(cause, text, mode, taxonomy)
    }


def discover_causes(
    text: str,
    mode: MatchMode = MatchMode.SUBSTRING,
    taxonomy: Optional[KeywordTaxonomy] = None,
) -> List[str]:
    """Full taxonomy scan, returned in taxonomy order."""
    if taxonomy is None:
        taxonomy = DEFAULT_TAXONOMY
    text = (text or "").lower()
    return [
        cause for cause in taxonomy.all_causes()
        if cause_in_text(cause, text, mode, taxonomy)
    ]


def matches_any_keyword(
    text: str,
    causes: Iterable[Union[CauseId, str]],
    mode: MatchMode = MatchMode.SUBSTRING,
    taxonomy: Optional[KeywordTaxonomy] = None,
) -> bool:
    """True if any keyword of any of the given causes occurs in text."""
    text = (text or "").lower()
    return any(cause_in_text(cause, text, mode, taxonomy) for cause in causes)
