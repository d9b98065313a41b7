"""
In-memory candidate pool selection.

Mirrors the storage-side prefilter for hosts that already hold videos and
users in memory (demos, tests, small deployments).
"""

from typing import Any, Iterable, List, Mapping, Optional, Union

from advocacy_match.matching.content import VideoContent, extract
from advocacy_match.matching.matcher import MatchMode, matches_any_keyword
from advocacy_match.matching.roles import AccountRole, OrganizerProfile
from advocacy_match.matching.taxonomy import KeywordTaxonomy, cause_key, decode_causes

CANDIDATE_POOL_LIMIT = 50


def select_candidate_videos(
    videos: Iterable[Union[VideoContent, Mapping[str, Any]]],
    causes: Iterable[str],
    limit: int = CANDIDATE_POOL_LIMIT,
    mode: MatchMode = MatchMode.SUBSTRING,
    taxonomy: Optional[KeywordTaxonomy] = None,
) -> List[VideoContent]:
    """
    Public videos mentioning any keyword of any cause, most viewed first.

    Ties on views keep input order. The pool is capped at ``limit``.
    """
    causes = [cause_key(c) for c in decode_causes(causes)]
    if not causes:
        return []
    pool = []
    for raw in videos:
        video = raw if isinstance(raw, VideoContent) else VideoContent.from_dict(raw)
        if not video.is_public:
            continue
        if matches_any_keyword(extract(video), causes, mode=mode, taxonomy=taxonomy):
            pool.append(video)
    pool.sort(key=lambda v: -v.views)
    return pool[:max(limit, 0)]


def select_candidate_organizers(
    users: Iterable[Union[OrganizerProfile, Mapping[str, Any]]],
    discovered_causes: Iterable[str],
) -> List[OrganizerProfile]:
    """Organizer accounts whose declared causes intersect the discovered set."""
    wanted = {cause_key(c) for c in discovered_causes}
    selected = []
    for raw in users:
        org = raw if isinstance(raw, OrganizerProfile) else OrganizerProfile.from_dict(raw)
        if org.role != AccountRole.ORGANIZER:
            continue
        if wanted.intersection(org.causes):
            selected.append(org)
    return selected
