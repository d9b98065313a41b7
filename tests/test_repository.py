"""
Tests for the storage adapter that loads candidate pools.
"""

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from advocacy_match.data import repository
from advocacy_match.data.models import User, Video, create_engine, create_tables, get_sessionmaker
from advocacy_match.matching import CandidateFetchError, find_speakers


def make_user(user_id, account_type="competitor", causes=None, **fields):
    return User(
        id=user_id,
        username=user_id,
        email=f"{user_id}@example.com",
        account_type=account_type,
        causes=causes or [],
        **fields,
    )


def make_video(video_id, user_id, title, views=0, is_public=True, **fields):
    return Video(id=video_id, user_id=user_id, title=title, views=views, is_public=is_public, **fields)


@pytest_asyncio.fixture
async def session():
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await create_tables(engine)
    async with get_sessionmaker(engine)() as session:
        session.add_all([
            make_user("speaker-1", school="Lincoln High School"),
            make_user("speaker-2"),
            make_user("org-1", "organizer", ["climate", "education"], organization="Green Future"),
            make_user("org-2", "organizer", ["lgbtq"]),
            make_user("org-3", "organizer", []),
            make_user("guest-1", "guest", ["climate"]),
        ])
        session.add_all([
            make_video("v1", "speaker-1", "Carbon pricing now", views=120),
            make_video("v2", "speaker-1", "Debate practice", views=900, transcript="We discuss CLIMATE policy"),
            make_video("v3", "speaker-2", "Bread baking", views=5000),
            make_video("v4", "speaker-2", "Renewable futures", views=40, is_public=False),
            make_video("v5", "org-1", "Our climate mission", views=70),
        ])
        await session.commit()
        yield session
    await engine.dispose()


class TestFetchCandidateVideos:
    """Tests for the keyword prefilter query."""

    @pytest.mark.asyncio
    async def test_public_matching_videos_by_views(self, session):
        videos = await repository.fetch_candidate_videos(session, ["climate"])
        assert [v.id for v in videos] == ["v2", "v1", "v5"]

    @pytest.mark.asyncio
    async def test_keyword_match_is_case_insensitive(self, session):
        videos = await repository.fetch_candidate_videos(session, ["climate"])
        assert "v2" in {v.id for v in videos}

    @pytest.mark.asyncio
    async def test_limit(self, session):
        videos = await repository.fetch_candidate_videos(session, ["climate"], limit=1)
        assert [v.id for v in videos] == ["v2"]

    @pytest.mark.asyncio
    async def test_no_causes(self, session):
        assert await repository.fetch_candidate_videos(session, []) == []
        assert await repository.fetch_candidate_videos(session, ["not-a-cause"]) == []

    @pytest.mark.asyncio
    async def test_pool_feeds_engine(self, session):
        videos = await repository.fetch_candidate_videos(session, ["climate"])
        contents = [repository.to_video_content(v) for v in videos]
        profiles = {v.user_id: repository.user_summary(v.user) for v in videos}

        response = find_speakers(["climate"], contents, uploader_profiles=profiles)

        # org-1's upload is skipped; only speakers are matched
        assert [m.subject_user_id for m in response.matches] == ["speaker-1"]
        match = response.matches[0]
        assert match.total_views == 1020
        assert match.user["school"] == "Lincoln High School"


class TestSpeakerVideosAndOrganizers:
    """Tests for the speaker-facing queries."""

    @pytest.mark.asyncio
    async def test_speaker_videos_include_private(self, session):
        videos = await repository.fetch_speaker_videos(session, "speaker-2")
        assert {v.id for v in videos} == {"v3", "v4"}

    @pytest.mark.asyncio
    async def test_candidate_organizers(self, session):
        organizers = await repository.fetch_candidate_organizers(session, ["climate", "democracy"])
        assert [o.id for o in organizers] == ["org-1"]

        profile = repository.to_organizer_profile(organizers[0])
        assert profile.causes == ("climate", "education")
        assert profile.organization == "Green Future"

    @pytest.mark.asyncio
    async def test_candidate_organizers_without_causes(self, session):
        assert await repository.fetch_candidate_organizers(session, []) == []

    @pytest.mark.asyncio
    async def test_get_user(self, session):
        user = await repository.get_user(session, "org-2")
        assert user.account_type == "organizer"
        assert await repository.get_user(session, "missing") is None


class TestStorageFailures:
    """Storage errors surface as CandidateFetchError."""

    @pytest.mark.asyncio
    async def test_fetch_failure_raises(self):
        engine = create_engine("sqlite+aiosqlite:///:memory:")
        # no tables created, so every query fails
        sessionmaker = get_sessionmaker(engine)
        async with sessionmaker() as session:
            with pytest.raises(CandidateFetchError) as exc_info:
                await repository.fetch_candidate_videos(session, ["climate"])
            assert isinstance(exc_info.value.__cause__, OperationalError)

        async with sessionmaker() as session:
            with pytest.raises(CandidateFetchError):
                await repository.fetch_candidate_organizers(session, ["climate"])
        await engine.dispose()
