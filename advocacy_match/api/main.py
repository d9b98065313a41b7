"""
FastAPI application for the advocacy matching platform.
Exposes the matching agent over HTTP, both for hosts that post their own
candidate pools and for the database-backed "my matches" flow.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from advocacy_match.agents.advocacy_matcher import AdvocacyMatchingAgent
from advocacy_match.config import Settings, get_settings
from advocacy_match.core.base_agent import AgentMessage
from advocacy_match.data import repository
from advocacy_match.data.models import create_engine, create_tables, get_sessionmaker
from advocacy_match.matching.content import aggregate_text
from advocacy_match.matching.errors import CandidateFetchError
from advocacy_match.matching.matcher import discover_causes
from advocacy_match.matching.roles import AccountRole, is_role
from advocacy_match.matching.taxonomy import parse_causes

logger = structlog.get_logger()


# Request/Response Models
class VideoRecord(BaseModel):
    """A video as supplied by the host."""
    id: str
    title: str = ""
    topic: Optional[str] = ""
    transcript: Optional[str] = ""
    script: Optional[str] = ""
    views: int = 0
    user_id: str = ""
    uploader_role: Optional[str] = None
    thumbnail: Optional[str] = None
    is_public: bool = True


class OrganizerRecord(BaseModel):
    """An organizer account as a match candidate."""
    id: str
    account_type: str = "organizer"
    causes: List[str] = Field(default_factory=list)
    username: str = ""
    avatar: Optional[str] = None
    organization: str = ""
    bio: str = ""
    location: str = ""
    website: str = ""


class UserRecord(BaseModel):
    """The querying user."""
    id: str
    account_type: str = "competitor"
    causes: List[str] = Field(default_factory=list)


def _check_cause_count(causes: List[str]) -> List[str]:
    limit = get_settings().max_selected_causes
    if len(causes) > limit:
        raise ValueError(f"select at most {limit} causes")
    return causes


class SpeakerMatchRequest(BaseModel):
    """Organizer-facing matching request."""
    causes: List[str] = Field(default_factory=list)
    candidate_videos: List[VideoRecord] = Field(default_factory=list)
    limit: Optional[int] = Field(None, ge=1)
    preview_limit: Optional[int] = Field(None, ge=0)

    @field_validator("causes")
    @classmethod
    def limit_causes(cls, v: List[str]) -> List[str]:
        return _check_cause_count(v)


class OrganizationMatchRequest(BaseModel):
    """Speaker-facing matching request."""
    videos: List[VideoRecord] = Field(default_factory=list)
    candidate_organizers: List[OrganizerRecord] = Field(default_factory=list)
    limit: Optional[int] = Field(None, ge=1)


class UserMatchRequest(BaseModel):
    """Role-dispatched matching request with caller-supplied pools."""
    user: UserRecord
    videos: List[VideoRecord] = Field(default_factory=list)
    candidate_videos: List[VideoRecord] = Field(default_factory=list)
    candidate_organizers: List[OrganizerRecord] = Field(default_factory=list)
    limit: Optional[int] = Field(None, ge=1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: Settings = app.state.settings

    agent = AdvocacyMatchingAgent(settings)
    await agent.initialize()
    app.state.agent = agent

    engine = create_engine(settings.database_url)
    await create_tables(engine)
    app.state.sessionmaker = get_sessionmaker(engine)

    yield

    await agent.shutdown()
    await engine.dispose()


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    sessionmaker = getattr(request.app.state, "sessionmaker", None)
    if sessionmaker is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    async with sessionmaker() as session:
        yield session


async def _dispatch(request: Request, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    agent: Optional[AdvocacyMatchingAgent] = getattr(request.app.state, "agent", None)
    if agent is None or not agent.state.is_ready:
        raise HTTPException(status_code=503, detail="Service not initialized")

    response = await agent.process_message(AgentMessage(
        sender="api",
        recipient=agent.agent_id,
        action=action,
        payload=payload,
    ))
    if response.message_type == "error":
        raise HTTPException(status_code=500, detail="Failed to fetch matches")
    return response.payload


router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint."""
    agent = getattr(request.app.state, "agent", None)
    return {"status": "healthy", "agents": [agent.get_agent_card()] if agent else []}


@router.get("/api/v1/taxonomy")
async def get_taxonomy(request: Request):
    """List causes with their labels and keywords."""
    return await _dispatch(request, "get_taxonomy", {})


@router.post("/api/v1/matches/speakers")
async def match_speakers(body: SpeakerMatchRequest, request: Request):
    """Rank speakers for an organizer's causes over a supplied video pool."""
    return await _dispatch(request, "match_speakers", {
        "causes": body.causes,
        "candidate_videos": [v.model_dump() for v in body.candidate_videos],
        "limit": body.limit,
        "preview_limit": body.preview_limit,
    })


@router.post("/api/v1/matches/organizations")
async def match_organizations(body: OrganizationMatchRequest, request: Request):
    """Rank organizers for a speaker's videos over a supplied organizer pool."""
    return await _dispatch(request, "match_organizations", {
        "videos": [v.model_dump() for v in body.videos],
        "candidate_organizers": [o.model_dump() for o in body.candidate_organizers],
        "limit": body.limit,
    })


@router.post("/api/v1/matches")
async def match_for_user(body: UserMatchRequest, request: Request):
    """Run whichever matching flow fits the user's account type."""
    return await _dispatch(request, "match_for_user", {
        "user": body.user.model_dump(),
        "videos": [v.model_dump() for v in body.videos],
        "candidate_videos": [v.model_dump() for v in body.candidate_videos],
        "candidate_organizers": [o.model_dump() for o in body.candidate_organizers],
        "limit": body.limit,
    })


@router.get("/api/v1/users/{user_id}/matches")
async def get_user_matches(
    user_id: str,
    request: Request,
    session: AsyncSession = Depends(get_session),
):
    """
    Matches for a stored user.

    Loads the candidate pool from the database, then runs the matching
    flow for the user's account type. If the pool cannot be loaded the
    request fails without attempting any matching.
    """
    settings: Settings = request.app.state.settings
    agent: Optional[AdvocacyMatchingAgent] = getattr(request.app.state, "agent", None)
    if agent is None:
        raise HTTPException(status_code=503, detail="Service not initialized")

    try:
        user = await repository.get_user(session, user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")

        payload: Dict[str, Any] = {
            "user": {"id": user.id, "account_type": user.account_type, "causes": user.causes or []},
        }

        if is_role(user.account_type, AccountRole.ORGANIZER):
            causes = [c.value for c in parse_causes(user.causes or [])]
            videos = await repository.fetch_candidate_videos(
                session, causes, limit=settings.candidate_pool_limit
            )
            payload["candidate_videos"] = [repository.to_video_content(v) for v in videos]
            payload["uploader_profiles"] = {
                v.user_id: repository.user_summary(v.user) for v in videos if v.user is not None
            }
        elif is_role(user.account_type, AccountRole.COMPETITOR):
            own = [repository.to_video_content(v) for v in await repository.fetch_speaker_videos(session, user.id)]
            payload["videos"] = own
            discovered = discover_causes(aggregate_text(own), mode=agent.mode)
            organizers = await repository.fetch_candidate_organizers(session, discovered)
            payload["candidate_organizers"] = [repository.to_organizer_profile(o) for o in organizers]
    except CandidateFetchError as e:
        logger.error("match_candidates_unavailable", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch matches")

    return await _dispatch(request, "match_for_user", payload)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Matches speech and debate speakers with advocacy organizers",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
