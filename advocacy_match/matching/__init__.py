"""
Advocacy matching engine: cause taxonomy, keyword matching and ranking.
"""

from advocacy_match.matching.content import VideoContent, aggregate_text, extract
from advocacy_match.matching.engine import (
    MAX_MATCHES,
    MatchResponse,
    MatchResult,
    OrganizationMatch,
    SpeakerAggregate,
    SpeakerMatch,
    find_organizations,
    find_speakers,
    match_for,
    rank_matches,
)
from advocacy_match.matching.errors import CandidateFetchError, MatchingError, UnknownRoleError
from advocacy_match.matching.matcher import MatchMode, discover_causes, matched_causes
from advocacy_match.matching.pools import select_candidate_organizers, select_candidate_videos
from advocacy_match.matching.roles import (
    AccountRole,
    GuestQuery,
    OrganizerProfile,
    OrganizerQuery,
    SpeakerQuery,
    query_for_user,
)
from advocacy_match.matching.taxonomy import (
    CauseId,
    KeywordTaxonomy,
    all_causes,
    decode_causes,
    keywords_for,
    parse_causes,
)

__all__ = [
    # Taxonomy
    "CauseId",
    "KeywordTaxonomy",
    "all_causes",
    "decode_causes",
    "keywords_for",
    "parse_causes",
    # Content and matching
    "VideoContent",
    "extract",
    "aggregate_text",
    "MatchMode",
    "matched_causes",
    "discover_causes",
    # Roles
    "AccountRole",
    "OrganizerProfile",
    "OrganizerQuery",
    "SpeakerQuery",
    "GuestQuery",
    "query_for_user",
    # Engine
    "MAX_MATCHES",
    "MatchResult",
    "SpeakerMatch",
    "OrganizationMatch",
    "SpeakerAggregate",
    "MatchResponse",
    "find_speakers",
    "find_organizations",
    "match_for",
    "rank_matches",
    # Pools
    "select_candidate_videos",
    "select_candidate_organizers",
    # Errors
    "MatchingError",
    "UnknownRoleError",
    "CandidateFetchError",
]
