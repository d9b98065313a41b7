"""
Tests for the HTTP surface.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine as create_sync_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from advocacy_match.api.main import create_app, get_session
from advocacy_match.config import Settings
from advocacy_match.data.models import Base, User, Video
from advocacy_match.data.synthetic import SyntheticDataGenerator
from advocacy_match.matching import CauseId


@pytest.fixture
def generator():
    return SyntheticDataGenerator(seed=3)


@pytest.fixture
def database_path(tmp_path):
    """File-backed SQLite database seeded with a few accounts and videos."""
    path = tmp_path / "matches.db"
    engine = create_sync_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all([
            User(id="speaker-1", username="speaker1", email="s1@example.com",
                 account_type="competitor", school="Westview Academy"),
            User(id="speaker-2", username="speaker2", email="s2@example.com",
                 account_type="competitor"),
            User(id="org-1", username="greenfuture", email="o1@example.org",
                 account_type="organizer", causes=["climate"], organization="Green Future",
                 location="Denver, CO", website="https://greenfuture.example.org"),
            User(id="org-2", username="votersfirst", email="o2@example.org",
                 account_type="organizer", causes=["democracy"]),
            User(id="guest-1", username="guest1", email="g1@example.com",
                 account_type="guest"),
        ])
        session.add_all([
            Video(id="v1", user_id="speaker-1", title="Carbon pricing now", views=300),
            Video(id="v2", user_id="speaker-1", title="Why fossil fuel subsidies must end", views=100),
            Video(id="v3", user_id="speaker-2", title="My favorite road trip", views=9000),
        ])
        session.commit()
    engine.dispose()
    return path


@pytest.fixture
def client(database_path):
    app = create_app(Settings(database_url=f"sqlite+aiosqlite:///{database_path}"))
    with TestClient(app) as client:
        yield client


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["agents"][0]["agent_id"] == "advocacy_matcher"

    def test_taxonomy(self, client):
        response = client.get("/api/v1/taxonomy")
        assert response.status_code == 200
        causes = response.json()["causes"]
        assert [c["id"] for c in causes][:2] == ["climate", "education"]

    def test_not_initialized_without_lifespan(self):
        # outside the context manager the lifespan never runs
        client = TestClient(create_app(Settings(database_url="sqlite+aiosqlite:///:memory:")))
        assert client.get("/api/v1/taxonomy").status_code == 503
        assert client.get("/api/v1/users/org-1/matches").status_code == 503
        response = client.post("/api/v1/matches/speakers", json={"causes": ["climate"]})
        assert response.status_code == 503
        assert response.json()["detail"] == "Service not initialized"


class TestPooledMatching:
    """Matching over caller-supplied candidate pools."""

    def test_match_speakers(self, client, generator):
        speaker, videos = generator.generate_speaker_with_videos(causes=[CauseId.IMMIGRATION], num_videos=2)

        response = client.post("/api/v1/matches/speakers", json={
            "causes": ["immigration"],
            "candidate_videos": videos,
        })

        assert response.status_code == 200
        body = response.json()
        assert body["type"] == "speakers"
        assert body["matches"][0]["user_id"] == speaker["id"]
        assert body["matches"][0]["match_score"] == 1

    def test_too_many_causes_rejected(self, client):
        response = client.post("/api/v1/matches/speakers", json={
            "causes": ["climate", "education", "poverty", "democracy"],
            "candidate_videos": [],
        })
        assert response.status_code == 422

    def test_empty_causes_guidance(self, client):
        response = client.post("/api/v1/matches/speakers", json={"causes": []})
        assert response.status_code == 200
        assert response.json() == {
            "status": "success",
            "matches": [],
            "message": "Set your advocacy focus to see matched speakers",
        }

    def test_match_organizations(self, client, generator):
        _, videos = generator.generate_speaker_with_videos(causes=[CauseId.DEMOCRACY], num_videos=2)
        organizer = generator.generate_organizer(causes=["democracy", "youth-empowerment"])

        response = client.post("/api/v1/matches/organizations", json={
            "videos": videos,
            "candidate_organizers": [organizer],
        })

        body = response.json()
        assert body["type"] == "organizations"
        assert "democracy" in body["your_causes"]
        assert body["matches"][0]["user"]["website"] == organizer["website"]

    def test_match_for_guest(self, client):
        response = client.post("/api/v1/matches", json={
            "user": {"id": "g1", "account_type": "guest"},
        })
        assert response.status_code == 200
        assert response.json()["message"] == "Matching is only available for speakers and organizers"

    def test_match_for_unknown_role_fails(self, client):
        response = client.post("/api/v1/matches", json={
            "user": {"id": "x", "account_type": "admin"},
        })
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to fetch matches"


class TestStoredUserMatches:
    """The database-backed flow for a stored account."""

    def test_organizer_gets_speakers(self, client):
        response = client.get("/api/v1/users/org-1/matches")

        assert response.status_code == 200
        body = response.json()
        assert body["type"] == "speakers"
        assert [m["user_id"] for m in body["matches"]] == ["speaker-1"]
        match = body["matches"][0]
        assert match["total_views"] == 400
        assert match["user"]["school"] == "Westview Academy"
        assert [v["id"] for v in match["matching_videos"]] == ["v1", "v2"]

    def test_speaker_gets_organizations(self, client):
        response = client.get("/api/v1/users/speaker-1/matches")

        body = response.json()
        assert body["type"] == "organizations"
        assert body["your_causes"] == ["climate"]
        assert [m["user_id"] for m in body["matches"]] == ["org-1"]
        assert body["matches"][0]["user"]["organization"] == "Green Future"

    def test_speaker_without_topics(self, client):
        response = client.get("/api/v1/users/speaker-2/matches")
        assert response.json()["message"] == "No advocacy topics detected in your speeches yet"

    def test_guest(self, client):
        response = client.get("/api/v1/users/guest-1/matches")
        assert response.json()["matches"] == []

    def test_missing_user(self, client):
        response = client.get("/api/v1/users/nobody/matches")
        assert response.status_code == 404

    def test_storage_failure(self, client):
        class BrokenSession:
            async def get(self, *args, **kwargs):
                raise SQLAlchemyError("database is locked")

        async def broken_session():
            yield BrokenSession()

        client.app.dependency_overrides[get_session] = broken_session
        try:
            response = client.get("/api/v1/users/org-1/matches")
        finally:
            client.app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to fetch matches"
