"""
Advocacy Matching Agent

Message-driven wrapper around the matching engine. Hosts send a payload
with the querying user's data and a pre-fetched candidate pool; the agent
runs the engine and replies with the ranked matches.

Actions:
- match_speakers: organizer causes + candidate videos
- match_organizations: speaker videos + candidate organizers
- match_for_user: role-dispatched, for any account type
- detect_causes: causes found in a set of videos
- get_taxonomy: the cause table
"""

from typing import Any, Dict, List, Optional

from advocacy_match.config import Settings, get_settings
from advocacy_match.core.base_agent import AgentCapability, AgentMessage, BaseAgent
from advocacy_match.matching.content import VideoContent, aggregate_text
from advocacy_match.matching.engine import find_organizations, find_speakers, match_for
from advocacy_match.matching.matcher import MatchMode, discover_causes
from advocacy_match.matching.roles import query_for_user
from advocacy_match.matching.taxonomy import describe_taxonomy


class AdvocacyMatchingAgent(BaseAgent):
    """Agent that pairs organizers and speakers by cause overlap."""

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(
            agent_id="advocacy_matcher",
            name="Advocacy Matcher",
            description="Matches organizers with speakers through shared advocacy causes",
            capabilities=[
                AgentCapability.SPEAKER_MATCHING,
                AgentCapability.ORGANIZATION_MATCHING,
                AgentCapability.CAUSE_DETECTION,
                AgentCapability.TAXONOMY_LOOKUP,
            ],
        )
        self.settings = settings or get_settings()
        self.mode = MatchMode(self.settings.match_mode)

        self.register_handler("match_speakers", self._handle_match_speakers)
        self.register_handler("match_organizations", self._handle_match_organizations)
        self.register_handler("match_for_user", self._handle_match_for_user)
        self.register_handler("detect_causes", self._handle_detect_causes)
        self.register_handler("get_taxonomy", self._handle_get_taxonomy)

    async def _initialize(self) -> None:
        self._logger.info(
            "matching_settings",
            mode=self.mode.value,
            max_matches=self.settings.max_matches,
        )

    def _limit(self, payload: Dict[str, Any]) -> int:
        limit = payload.get("limit")
        if limit is None:
            return self.settings.max_matches
        return min(int(limit), self.settings.max_matches)

    async def _handle_match_speakers(self, message: AgentMessage) -> Dict[str, Any]:
        payload = message.payload
        response = find_speakers(
            payload.get("causes") or [],
            payload.get("candidate_videos") or [],
            mode=self.mode,
            limit=self._limit(payload),
            preview_limit=payload.get("preview_limit"),
            uploader_profiles=payload.get("uploader_profiles"),
        )
        return {"status": "success", **response.to_dict()}

    async def _handle_match_organizations(self, message: AgentMessage) -> Dict[str, Any]:
        payload = message.payload
        response = find_organizations(
            payload.get("videos") or [],
            payload.get("candidate_organizers") or [],
            mode=self.mode,
            limit=self._limit(payload),
        )
        return {"status": "success", **response.to_dict()}

    async def _handle_match_for_user(self, message: AgentMessage) -> Dict[str, Any]:
        payload = message.payload
        query = query_for_user(payload.get("user") or {}, payload.get("videos"))
        response = match_for(
            query,
            candidate_videos=payload.get("candidate_videos") or [],
            candidate_organizers=payload.get("candidate_organizers") or [],
            mode=self.mode,
            limit=self._limit(payload),
            preview_limit=payload.get("preview_limit"),
            uploader_profiles=payload.get("uploader_profiles"),
        )
        return {"status": "success", **response.to_dict()}

    async def _handle_detect_causes(self, message: AgentMessage) -> Dict[str, Any]:
        videos: List[VideoContent] = [
            v if isinstance(v, VideoContent) else VideoContent.from_dict(v)
            for v in message.payload.get("videos") or []
        ]
        causes = discover_causes(aggregate_text(videos), mode=self.mode)
        return {"status": "success", "causes": causes, "video_count": len(videos)}

    async def _handle_get_taxonomy(self, message: AgentMessage) -> Dict[str, Any]:
        return {"status": "success", "causes": describe_taxonomy()}
