"""
Advocacy Matching Engine

Pairs organizers with speakers (and speakers with organizers) through
keyword overlap between declared causes and speech content:
- Organizer-facing: group matching videos by speaker, score by matched causes
- Speaker-facing: detect causes in the speaker's content, score organizers
- Deterministic ranking with a hard cap on results

The engine is pure: callers fetch candidate pools beforehand and pass them
in as in-memory collections.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Union

import structlog

from advocacy_match.matching.content import VideoContent, aggregate_text, extract
from advocacy_match.matching.errors import UnknownRoleError
from advocacy_match.matching.matcher import MatchMode, discover_causes, matched_causes
from advocacy_match.matching.roles import (
    AccountRole,
    GuestQuery,
    MatchQuery,
    OrganizerProfile,
    OrganizerQuery,
    SpeakerQuery,
    is_role,
)
from advocacy_match.matching.taxonomy import KeywordTaxonomy, cause_key, decode_causes

logger = structlog.get_logger()

MAX_MATCHES = 20

NO_CAUSES_MESSAGE = "Set your advocacy focus to see matched speakers"
NO_VIDEOS_MESSAGE = "Upload speeches to see matched organizations"
NO_TOPICS_MESSAGE = "No advocacy topics detected in your speeches yet"
ROLE_UNAVAILABLE_MESSAGE = "Matching is only available for speakers and organizers"

VideoLike = Union[VideoContent, Mapping[str, Any]]
OrganizerLike = Union[OrganizerProfile, Mapping[str, Any]]


@dataclass
class MatchResult:
    """A ranked candidate. The score is always the number of matched causes."""
    subject_user_id: str
    matched_causes: List[str] = field(default_factory=list)

    @property
    def match_score(self) -> int:
        return len(self.matched_causes)

    @property
    def secondary_key(self) -> int:
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.subject_user_id,
            "matched_causes": list(self.matched_causes),
            "match_score": self.match_score,
        }


@dataclass
class SpeakerMatch(MatchResult):
    """A speaker matched to an organizer's causes."""
    user: Dict[str, Any] = field(default_factory=dict)
    matching_videos: List[Dict[str, Any]] = field(default_factory=list)
    total_views: int = 0

    @property
    def secondary_key(self) -> int:
        return self.total_views

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "user": self.user or {"id": self.subject_user_id},
            "matching_videos": list(self.matching_videos),
            "total_views": self.total_views,
        })
        return data


@dataclass
class OrganizationMatch(MatchResult):
    """An organizer matched to causes found in a speaker's content."""
    username: str = ""
    avatar: Optional[str] = None
    organization: str = ""
    bio: str = ""
    location: str = ""
    website: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["user"] = {
            "id": self.subject_user_id,
            "username": self.username,
            "avatar": self.avatar,
            "organization": self.organization,
            "bio": self.bio,
            "location": self.location,
            "website": self.website,
        }
        return data


@dataclass
class SpeakerAggregate:
    """Per-uploader accumulator, alive for a single matching run."""
    uploader_id: str
    matched_causes: Set[str] = field(default_factory=set)
    matching_videos: List[VideoContent] = field(default_factory=list)
    total_views: int = 0

    def add(self, video: VideoContent, causes: Set[str]) -> None:
        self.matched_causes |= causes
        self.matching_videos.append(video)
        self.total_views += video.views

    @property
    def match_score(self) -> int:
        return len(self.matched_causes)

    def to_result(
        self,
        cause_order: Sequence[str],
        user: Optional[Dict[str, Any]] = None,
        preview_limit: Optional[int] = None,
    ) -> SpeakerMatch:
        videos = self.matching_videos
        if preview_limit is not None:
            videos = videos[:preview_limit]
        return SpeakerMatch(
            subject_user_id=self.uploader_id,
            matched_causes=[c for c in cause_order if c in self.matched_causes],
            user=dict(user) if user else {"id": self.uploader_id},
            matching_videos=[v.preview() for v in videos],
            total_views=self.total_views,
        )


@dataclass
class MatchResponse:
    """Outcome of one matching run, in the shape the web client expects."""
    matches: List[MatchResult] = field(default_factory=list)
    type: Optional[str] = None
    message: Optional[str] = None
    your_causes: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"matches": [m.to_dict() for m in self.matches]}
        if self.type is not None:
            data["type"] = self.type
        if self.message is not None:
            data["message"] = self.message
        if self.your_causes is not None:
            data["your_causes"] = list(self.your_causes)
        return data


def rank_matches(matches: Iterable[MatchResult], limit: int = MAX_MATCHES) -> List[MatchResult]:
    """
    Order by match score, then the secondary metric, both descending.

    The sort is stable, so equal keys keep their input order.
    """
    ranked = sorted(matches, key=lambda m: (-m.match_score, -m.secondary_key))
    return ranked[:max(limit, 0)]


def _as_video(video: VideoLike) -> VideoContent:
    if isinstance(video, VideoContent):
        return video
    return VideoContent.from_dict(video)


def _as_organizer(candidate: OrganizerLike) -> OrganizerProfile:
    if isinstance(candidate, OrganizerProfile):
        return candidate
    return OrganizerProfile.from_dict(candidate)


def _dedupe(causes: Iterable[str]) -> List[str]:
    ordered: List[str] = []
    for cause in decode_causes(causes):
        key = cause_key(cause)
        if key and key not in ordered:
            ordered.append(key)
    return ordered


def find_speakers(
    organizer_causes: Iterable[str],
    candidate_videos: Iterable[VideoLike],
    *,
    mode: MatchMode = MatchMode.SUBSTRING,
    taxonomy: Optional[KeywordTaxonomy] = None,
    limit: int = MAX_MATCHES,
    preview_limit: Optional[int] = None,
    uploader_profiles: Optional[Mapping[str, Dict[str, Any]]] = None,
) -> MatchResponse:
    """
    Rank speakers whose videos talk about an organizer's causes.

    Args:
        organizer_causes: The organizer's selected causes
        candidate_videos: Pre-fetched pool, view-ranked by the caller
        mode: Keyword location strategy
        taxonomy: Keyword table, defaults to the built-in one
        limit: Maximum number of matches returned
        preview_limit: Cap on video cards per speaker (None keeps all)
        uploader_profiles: Optional user summaries keyed by uploader id

    Returns:
        MatchResponse of SpeakerMatch entries, type "speakers"
    """
    causes = _dedupe(organizer_causes)
    if not causes:
        return MatchResponse(matches=[], message=NO_CAUSES_MESSAGE)

    profiles = uploader_profiles or {}
    groups: Dict[str, SpeakerAggregate] = {}
    seen = skipped_role = 0

    for raw in candidate_videos:
        video = _as_video(raw)
        seen += 1
        if not is_role(video.uploader_role, AccountRole.COMPETITOR):
            skipped_role += 1
            continue
        found = matched_causes(extract(video), causes, mode=mode, taxonomy=taxonomy)
        if not found:
            continue
        aggregate = groups.get(video.uploader_id)
        if aggregate is None:
            aggregate = groups[video.uploader_id] = SpeakerAggregate(uploader_id=video.uploader_id)
        aggregate.add(video, found)

    results = [
        aggregate.to_result(causes, profiles.get(uploader_id), preview_limit)
        for uploader_id, aggregate in groups.items()
    ]
    ranked = rank_matches(results, limit)

    logger.info(
        "speaker_matching_complete",
        causes=causes,
        candidates=seen,
        skipped_non_speakers=skipped_role,
        speakers=len(groups),
        returned=len(ranked),
    )
    return MatchResponse(matches=ranked, type="speakers")


def find_organizations(
    speaker_videos: Iterable[VideoLike],
    candidate_organizers: Iterable[OrganizerLike],
    *,
    mode: MatchMode = MatchMode.SUBSTRING,
    taxonomy: Optional[KeywordTaxonomy] = None,
    limit: int = MAX_MATCHES,
) -> MatchResponse:
    """
    Rank organizers whose causes show up in a speaker's own videos.

    Causes are discovered by scanning the whole taxonomy against the
    speaker's combined content; each organizer scores by how many of its
    declared causes are among them.
    """
    videos = [_as_video(v) for v in speaker_videos]
    if not videos:
        return MatchResponse(matches=[], message=NO_VIDEOS_MESSAGE)

    discovered = discover_causes(aggregate_text(videos), mode=mode, taxonomy=taxonomy)
    if not discovered:
        return MatchResponse(matches=[], message=NO_TOPICS_MESSAGE)

    logger.debug("speaker_causes_discovered", causes=discovered, videos=len(videos))

    results: List[MatchResult] = []
    for candidate in candidate_organizers:
        org = _as_organizer(candidate)
        if org.role != AccountRole.ORGANIZER:
            continue
        common = [c for c in _dedupe(org.causes) if c in discovered]
        if not common:
            continue
        results.append(OrganizationMatch(
            subject_user_id=org.user_id,
            matched_causes=common,
            username=org.username,
            avatar=org.avatar,
            organization=org.organization,
            bio=org.bio,
            location=org.location,
            website=org.website,
        ))

    ranked = rank_matches(results, limit)
    logger.info(
        "organization_matching_complete",
        discovered=discovered,
        scored=len(results),
        returned=len(ranked),
    )
    return MatchResponse(matches=ranked, type="organizations", your_causes=discovered)


def match_for(
    query: MatchQuery,
    *,
    candidate_videos: Iterable[VideoLike] = (),
    candidate_organizers: Iterable[OrganizerLike] = (),
    mode: MatchMode = MatchMode.SUBSTRING,
    taxonomy: Optional[KeywordTaxonomy] = None,
    limit: int = MAX_MATCHES,
    preview_limit: Optional[int] = None,
    uploader_profiles: Optional[Mapping[str, Dict[str, Any]]] = None,
) -> MatchResponse:
    """
    Run the matching flow for the querying user's role.

    Guests get an empty response with a guidance message.

    Raises:
        UnknownRoleError: If the query is not one of the known variants
    """
    if isinstance(query, OrganizerQuery):
        return find_speakers(
            query.causes,
            candidate_videos,
            mode=mode,
            taxonomy=taxonomy,
            limit=limit,
            preview_limit=preview_limit,
            uploader_profiles=uploader_profiles,
        )
    if isinstance(query, SpeakerQuery):
        return find_organizations(
            query.videos,
            candidate_organizers,
            mode=mode,
            taxonomy=taxonomy,
            limit=limit,
        )
    if isinstance(query, GuestQuery):
        return MatchResponse(matches=[], message=ROLE_UNAVAILABLE_MESSAGE)
    raise UnknownRoleError(f"Unsupported match query: {type(query).__name__}")
