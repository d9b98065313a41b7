"""
Storage queries that load candidate pools for the matching engine.

Every failure to read from the database is raised as CandidateFetchError
so the caller can skip matching entirely.
"""

from typing import Any, Dict, Iterable, List, Optional

import structlog
from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from advocacy_match.data.models import User, Video
from advocacy_match.matching.content import VideoContent
from advocacy_match.matching.errors import CandidateFetchError
from advocacy_match.matching.roles import AccountRole, OrganizerProfile
from advocacy_match.matching.taxonomy import KeywordTaxonomy, DEFAULT_TAXONOMY, cause_key, decode_causes, parse_causes

logger = structlog.get_logger()

TEXT_COLUMNS = (Video.title, Video.topic, Video.transcript, Video.script)


def to_video_content(video: Video) -> VideoContent:
    """Project an ORM video onto the engine's value object."""
    uploader = video.user
    return VideoContent(
        id=video.id,
        title=video.title or "",
        topic=video.topic or "",
        transcript=video.transcript or "",
        script=video.script or "",
        views=video.views or 0,
        uploader_id=video.user_id,
        thumbnail=video.thumbnail,
        uploader_role=uploader.account_type if uploader is not None else None,
        is_public=bool(video.is_public),
    )


def to_organizer_profile(user: User) -> OrganizerProfile:
    return OrganizerProfile(
        user_id=user.id,
        causes=tuple(cause.value for cause in parse_causes(user.causes or [])),
        username=user.username,
        avatar=user.avatar,
        organization=user.organization or "",
        bio=user.bio or "",
        location=user.location or "",
        website=user.website or "",
        role=AccountRole.parse(user.account_type),
    )


def user_summary(user: User) -> Dict[str, Any]:
    """Public card for a speaker shown next to their matching videos."""
    return {
        "id": user.id,
        "username": user.username,
        "avatar": user.avatar,
        "school": user.school,
        "account_type": user.account_type,
        "bio": user.bio,
    }


async def get_user(session: AsyncSession, user_id: str) -> Optional[User]:
    try:
        return await session.get(User, user_id)
    except SQLAlchemyError as e:
        logger.error("user_fetch_failed", user_id=user_id, error=str(e))
        raise CandidateFetchError(f"Failed to load user {user_id}") from e


async def fetch_candidate_videos(
    session: AsyncSession,
    causes: Iterable[str],
    limit: int = 50,
    taxonomy: Optional[KeywordTaxonomy] = None,
) -> List[Video]:
    """
    Public videos whose text mentions any keyword of the given causes.

    Ordered by views, most viewed first, and capped at ``limit``. Each
    video comes with its uploader loaded.
    """
    taxonomy = DEFAULT_TAXONOMY if taxonomy is None else taxonomy
    keywords: List[str] = []
    for cause in decode_causes(causes):
        for kw in taxonomy.keywords_for(cause_key(cause)):
            if kw not in keywords:
                keywords.append(kw)
    if not keywords:
        return []

    conditions = [column.ilike(f"%{kw}%") for kw in keywords for column in TEXT_COLUMNS]
    stmt = (
        select(Video)
        .options(selectinload(Video.user))
        .where(Video.is_public.is_(True), or_(*conditions))
        .order_by(Video.views.desc())
        .limit(limit)
    )
    try:
        result = await session.execute(stmt)
    except SQLAlchemyError as e:
        logger.error("candidate_video_fetch_failed", keyword_count=len(keywords), error=str(e))
        raise CandidateFetchError("Failed to load candidate videos") from e

    videos = list(result.scalars().all())
    logger.debug("candidate_videos_fetched", count=len(videos), keyword_count=len(keywords))
    return videos


async def fetch_speaker_videos(session: AsyncSession, user_id: str) -> List[Video]:
    """All of a speaker's videos, public or not."""
    stmt = (
        select(Video)
        .options(selectinload(Video.user))
        .where(Video.user_id == user_id)
        .order_by(Video.created_at.desc())
    )
    try:
        result = await session.execute(stmt)
    except SQLAlchemyError as e:
        logger.error("speaker_video_fetch_failed", user_id=user_id, error=str(e))
        raise CandidateFetchError(f"Failed to load videos for {user_id}") from e
    return list(result.scalars().all())


async def fetch_candidate_organizers(
    session: AsyncSession,
    causes: Iterable[str],
) -> List[User]:
    """
    Organizer accounts whose stored causes intersect ``causes``.

    Cause lists live in a JSON column, so the intersection is applied after
    loading organizer rows.
    """
    wanted = {cause_key(c) for c in decode_causes(causes)}
    if not wanted:
        return []
    stmt = select(User).where(User.account_type == AccountRole.ORGANIZER.value)
    try:
        result = await session.execute(stmt)
    except SQLAlchemyError as e:
        logger.error("organizer_fetch_failed", error=str(e))
        raise CandidateFetchError("Failed to load organizers") from e

    return [
        user for user in result.scalars().all()
        if wanted.intersection(cause_key(c) for c in decode_causes(user.causes))
    ]
