"""
Tests for the agent implementations.
"""

import pytest

import advocacy_match

from advocacy_match.agents import AdvocacyMatchingAgent
from advocacy_match.config import Settings
from advocacy_match.core.base_agent import AgentMessage
from advocacy_match.data.synthetic import SyntheticDataGenerator
from advocacy_match.matching import CauseId
from advocacy_match.matching.engine import ROLE_UNAVAILABLE_MESSAGE


@pytest.fixture
def generator():
    """Create a synthetic data generator."""
    return SyntheticDataGenerator(seed=42)


@pytest.fixture
def climate_speaker(generator):
    """A speaker whose videos are all about the climate."""
    return generator.generate_speaker_with_videos(causes=[CauseId.CLIMATE], num_videos=3)


def request(agent, action, payload=None):
    return AgentMessage(
        sender="test",
        recipient=agent.agent_id,
        action=action,
        payload=payload or {},
    )


class TestAdvocacyMatchingAgent:
    """Tests for the Advocacy Matching agent."""

    @pytest.fixture
    def agent(self):
        return AdvocacyMatchingAgent(Settings())

    @pytest.mark.asyncio
    async def test_initialization(self, agent):
        """Test agent initialization."""
        await agent.initialize()
        assert agent.state.is_ready

    @pytest.mark.asyncio
    async def test_default_handlers(self, agent):
        await agent.initialize()

        ping = await agent.process_message(request(agent, "ping"))
        assert ping.payload == {"status": "alive", "agent_id": "advocacy_matcher"}

        caps = await agent.process_message(request(agent, "capabilities"))
        assert "speaker_matching" in caps.payload["capabilities"]

    @pytest.mark.asyncio
    async def test_reply_envelope(self, agent):
        await agent.initialize()
        message = request(agent, "ping")

        response = await agent.process_message(message)

        assert response.message_type == "response"
        assert response.action == "ping_response"
        assert response.recipient == "test"
        assert response.correlation_id == message.id

    @pytest.mark.asyncio
    async def test_agent_card(self, agent):
        await agent.initialize()
        card = agent.get_agent_card()
        assert card["agent_id"] == "advocacy_matcher"
        assert card["is_ready"] is True
        assert card["version"] == advocacy_match.__version__

    @pytest.mark.asyncio
    async def test_match_speakers(self, agent, generator, climate_speaker):
        """Test ranking speakers for an organizer."""
        await agent.initialize()
        speaker, videos = climate_speaker
        bystander, other_videos = generator.generate_speaker_with_videos(
            causes=[CauseId.CRIMINAL_JUSTICE], num_videos=2
        )

        response = await agent.process_message(request(agent, "match_speakers", {
            "causes": ["climate"],
            "candidate_videos": videos + other_videos,
        }))

        assert response.message_type == "response"
        assert response.payload["status"] == "success"
        assert response.payload["type"] == "speakers"
        matches = response.payload["matches"]
        assert [m["user_id"] for m in matches] == [speaker["id"]]
        assert matches[0]["matched_causes"] == ["climate"]
        assert matches[0]["total_views"] == sum(v["views"] for v in videos)
        assert len(matches[0]["matching_videos"]) == 3

    @pytest.mark.asyncio
    async def test_match_organizations(self, agent, generator, climate_speaker):
        """Test ranking organizers for a speaker."""
        await agent.initialize()
        _, videos = climate_speaker
        green = generator.generate_organizer(causes=["climate", "education"])
        unrelated = generator.generate_organizer(causes=["lgbtq"])

        response = await agent.process_message(request(agent, "match_organizations", {
            "videos": videos,
            "candidate_organizers": [unrelated, green],
        }))

        payload = response.payload
        assert payload["type"] == "organizations"
        assert "climate" in payload["your_causes"]
        assert [m["user_id"] for m in payload["matches"]] == [green["id"]]
        assert payload["matches"][0]["user"]["organization"] == green["organization"]

    @pytest.mark.asyncio
    async def test_match_for_organizer(self, agent, generator, climate_speaker):
        await agent.initialize()
        _, videos = climate_speaker
        organizer = generator.generate_organizer(causes=["climate"])

        response = await agent.process_message(request(agent, "match_for_user", {
            "user": organizer,
            "candidate_videos": videos,
        }))

        assert response.payload["type"] == "speakers"
        assert len(response.payload["matches"]) == 1

    @pytest.mark.asyncio
    async def test_match_for_speaker_without_videos(self, agent, generator):
        await agent.initialize()
        speaker = generator.generate_speaker()

        response = await agent.process_message(request(agent, "match_for_user", {
            "user": speaker,
            "videos": [],
            "candidate_organizers": [generator.generate_organizer()],
        }))

        assert response.payload["matches"] == []
        assert response.payload["message"] == "Upload speeches to see matched organizations"

    @pytest.mark.asyncio
    async def test_guest_gets_guidance(self, agent, generator):
        """A guest is told matching is unavailable, not given an error."""
        await agent.initialize()

        response = await agent.process_message(request(agent, "match_for_user", {
            "user": generator.generate_guest(),
        }))

        assert response.message_type == "response"
        assert response.payload["status"] == "success"
        assert response.payload["matches"] == []
        assert response.payload["message"] == ROLE_UNAVAILABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_unknown_account_type_is_error_envelope(self, agent):
        await agent.initialize()

        response = await agent.process_message(request(agent, "match_for_user", {
            "user": {"id": "u1", "account_type": "admin"},
        }))

        assert response.message_type == "error"
        assert response.payload["error_type"] == "UnknownRoleError"
        assert agent.state.error_count == 1

    @pytest.mark.asyncio
    async def test_unknown_action(self, agent):
        await agent.initialize()
        response = await agent.process_message(request(agent, "rebalance"))
        assert response.message_type == "error"
        assert "Unknown action" in response.payload["error"]

    @pytest.mark.asyncio
    async def test_detect_causes(self, agent, climate_speaker):
        await agent.initialize()
        _, videos = climate_speaker

        response = await agent.process_message(request(agent, "detect_causes", {"videos": videos}))

        assert "climate" in response.payload["causes"]
        assert response.payload["video_count"] == 3

    @pytest.mark.asyncio
    async def test_get_taxonomy(self, agent):
        await agent.initialize()
        response = await agent.process_message(request(agent, "get_taxonomy"))
        causes = response.payload["causes"]
        assert len(causes) == 16
        assert causes[0]["id"] == "climate"
        assert causes[0]["label"] == "Climate & Environment"
        assert "carbon" in causes[0]["keywords"]
        # "other" is selectable but never detected
        assert causes[-1] == {"id": "other", "label": "Other", "keywords": []}

    @pytest.mark.asyncio
    async def test_limit_is_capped_by_settings(self, generator):
        agent = AdvocacyMatchingAgent(Settings(max_matches=2))
        await agent.initialize()
        videos = []
        for _ in range(5):
            _, speaker_videos = generator.generate_speaker_with_videos(causes=[CauseId.EDUCATION], num_videos=1)
            videos.extend(speaker_videos)

        response = await agent.process_message(request(agent, "match_speakers", {
            "causes": ["education"],
            "candidate_videos": videos,
            "limit": 10,
        }))

        assert len(response.payload["matches"]) == 2

    @pytest.mark.asyncio
    async def test_word_boundary_mode_from_settings(self):
        agent = AdvocacyMatchingAgent(Settings(match_mode="word_boundary"))
        await agent.initialize()

        response = await agent.process_message(request(agent, "detect_causes", {
            "videos": [{"id": "v1", "title": "Begun anew"}],
        }))

        # "gun" would match inside "begun" with substring matching
        assert "gun-violence" not in response.payload["causes"]

    @pytest.mark.asyncio
    async def test_shutdown(self, agent):
        await agent.initialize()
        await agent.shutdown()
        assert not agent.state.is_ready
