#!/usr/bin/env python3
"""
Demo script for the advocacy matching engine.
Generates speakers, organizers and speeches, then runs both matching
directions through the matching agent.
"""

import asyncio
import json

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from advocacy_match.agents.advocacy_matcher import AdvocacyMatchingAgent
from advocacy_match.core.base_agent import AgentMessage
from advocacy_match.data.synthetic import SyntheticDataGenerator
from advocacy_match.matching import select_candidate_organizers, select_candidate_videos
from advocacy_match.matching.taxonomy import CAUSE_LABELS, to_cause


def print_section(title: str):
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_subsection(title: str):
    """Print a subsection header."""
    print(f"\n  --- {title} ---")


def print_json(data: dict, indent: int = 2):
    """Pretty print JSON data."""
    print(json.dumps(data, indent=indent, default=str))


def label(cause: str) -> str:
    parsed = to_cause(cause)
    return CAUSE_LABELS.get(parsed, cause) if parsed else cause


async def ask(agent: AdvocacyMatchingAgent, action: str, payload: dict) -> dict:
    response = await agent.process_message(AgentMessage(
        sender="demo",
        recipient=agent.agent_id,
        action=action,
        payload=payload,
    ))
    return response.payload


async def demo_organizer_view(agent, dataset, organizer):
    """Organizer looking for speakers."""
    print_section("ORGANIZER: FIND SPEAKERS")
    print(f"  Organization: {organizer['organization']}")
    print(f"  Causes: {', '.join(label(c) for c in organizer['causes'])}")

    pool = select_candidate_videos(dataset["videos"], organizer["causes"])
    print(f"  Candidate pool: {len(pool)} public videos")

    result = await ask(agent, "match_for_user", {
        "user": organizer,
        "candidate_videos": pool,
        "preview_limit": 2,
    })

    if result.get("message"):
        print(f"  {result['message']}")
    for match in result["matches"][:5]:
        print_subsection(f"Speaker {match['user_id'][:8]}")
        print(f"  Score: {match['match_score']}  Views: {match['total_views']}")
        print(f"  Causes: {', '.join(label(c) for c in match['matched_causes'])}")
        for video in match["matching_videos"]:
            print(f"    - {video['title']}")


async def demo_speaker_view(agent, dataset, speaker):
    """Speaker looking for organizations."""
    print_section("SPEAKER: FIND ORGANIZATIONS")
    videos = [v for v in dataset["videos"] if v["user_id"] == speaker["id"]]
    print(f"  Speaker: {speaker['full_name']} ({speaker['school']})")
    for video in videos:
        print(f"    - {video['title']}")

    detected = await ask(agent, "detect_causes", {"videos": videos})
    organizers = select_candidate_organizers(dataset["organizers"], detected["causes"])

    result = await ask(agent, "match_for_user", {
        "user": speaker,
        "videos": videos,
        "candidate_organizers": organizers,
    })

    print_subsection("Detected causes")
    print(f"  {', '.join(label(c) for c in result.get('your_causes', [])) or 'none'}")
    if result.get("message"):
        print(f"  {result['message']}")
    for match in result["matches"]:
        org = match["user"]
        print(f"  {org['organization']:<28} score={match['match_score']}  {org['location']}")


async def demo_guest(agent, generator):
    print_section("GUEST")
    print_json(await ask(agent, "match_for_user", {"user": generator.generate_guest()}))


async def main():
    generator = SyntheticDataGenerator(seed=42)
    dataset = generator.generate_dataset(num_speakers=12, num_organizers=8)

    agent = AdvocacyMatchingAgent()
    await agent.initialize()

    await demo_organizer_view(agent, dataset, dataset["organizers"][0])
    await demo_speaker_view(agent, dataset, dataset["speakers"][0])
    await demo_guest(agent, generator)

    await agent.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
