"""
Synthetic data generator for testing and demonstration.
Generates realistic speakers, organizers, and speech videos.
"""

import random
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from advocacy_match.matching.taxonomy import CauseId, all_causes

# Sample data for generation
FIRST_NAMES = [
    "Emma", "Liam", "Olivia", "Noah", "Ava", "Ethan", "Sophia", "Mason",
    "Isabella", "William", "Mia", "James", "Charlotte", "Oliver", "Amelia",
    "Benjamin", "Harper", "Elijah", "Evelyn", "Lucas", "Abigail", "Michael",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez",
    "Wilson", "Anderson", "Thomas", "Taylor", "Moore", "Jackson", "Martin",
]

SCHOOLS = [
    "Lincoln High School", "Westview Academy", "Central Magnet School",
    "Riverside Prep", "Northside High", "Harbor City Charter",
]

CITIES = [
    "New York, NY", "Chicago, IL", "Houston, TX", "Phoenix, AZ",
    "Seattle, WA", "Denver, CO", "Boston, MA", "Atlanta, GA",
]

ORGANIZATION_SUFFIXES = ["Coalition", "Alliance", "Project", "Network", "Collective"]

EVENTS = ["ld", "pf", "policy", "congress", "extemp", "oratory", "informative", "persuasive"]

# Speech topics keyed by the cause their wording falls under
TOPICS: Dict[CauseId, List[str]] = {
    CauseId.CLIMATE: [
        "Carbon pricing and the road to net zero",
        "Why renewable energy must replace fossil fuel subsidies",
    ],
    CauseId.EDUCATION: [
        "Rethinking the high school curriculum",
        "Every student deserves a great teacher",
    ],
    CauseId.MENTAL_HEALTH: [
        "Breaking the silence on depression",
        "Counseling access in every district",
    ],
    CauseId.IMMIGRATION: [
        "Asylum seekers at the border",
        "A path to citizenship for Dreamers",
    ],
    CauseId.DEMOCRACY: [
        "Lowering the voting age",
        "Ending partisan gerrymandering",
    ],
    CauseId.CRIMINAL_JUSTICE: [
        "Cash bail punishes poverty",
        "Sentencing reform after mass incarceration",
    ],
}

NEUTRAL_TOPICS = [
    "The joy of baking bread",
    "My favorite road trip",
    "A tribute to a neighbor",
]


class SyntheticDataGenerator:
    """Generates synthetic data for testing."""

    def __init__(self, seed: Optional[int] = None):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)
        self._generated_users: Dict[str, Dict] = {}
        self._generated_videos: Dict[str, Dict] = {}

    def _name(self) -> Tuple[str, str]:
        return self._rng.choice(FIRST_NAMES), self._rng.choice(LAST_NAMES)

    def generate_speaker(self, user_id: Optional[str] = None) -> Dict[str, Any]:
        """Generate a synthetic speaker (competitor) account."""
        user_id = user_id or str(uuid4())
        first, last = self._name()
        speaker = {
            "id": user_id,
            "username": f"{first.lower()}{last.lower()}{self._rng.randint(1, 999)}",
            "email": f"{first.lower()}.{last.lower()}.{user_id[:6]}@example.com",
            "account_type": "competitor",
            "full_name": f"{first} {last}",
            "school": self._rng.choice(SCHOOLS),
            "events": self._rng.sample(EVENTS, k=2),
            "bio": "",
            "causes": [],
        }
        self._generated_users[user_id] = speaker
        return speaker

    def generate_organizer(
        self,
        user_id: Optional[str] = None,
        causes: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """Generate a synthetic organizer with up to three causes."""
        user_id = user_id or str(uuid4())
        if causes is None:
            causes = [c.value for c in self._rng.sample(all_causes(), k=self._rng.randint(1, 3))]
        first, last = self._name()
        organization = f"{last} {self._rng.choice(ORGANIZATION_SUFFIXES)}"
        organizer = {
            "id": user_id,
            "username": f"{last.lower()}_{user_id[:6]}",
            "email": f"contact.{user_id[:6]}@example.org",
            "account_type": "organizer",
            "full_name": f"{first} {last}",
            "organization": organization,
            "bio": f"{organization} works with young advocates.",
            "location": self._rng.choice(CITIES),
            "website": f"https://{last.lower()}.example.org",
            "causes": list(causes),
        }
        self._generated_users[user_id] = organizer
        return organizer

    def generate_guest(self, user_id: Optional[str] = None) -> Dict[str, Any]:
        user_id = user_id or str(uuid4())
        first, last = self._name()
        guest = {
            "id": user_id,
            "username": f"guest_{user_id[:8]}",
            "email": f"{first.lower()}.{user_id[:6]}@example.com",
            "account_type": "guest",
            "causes": [],
        }
        self._generated_users[user_id] = guest
        return guest

    def generate_video(
        self,
        uploader: Dict[str, Any],
        cause: Optional[CauseId] = None,
        views: Optional[int] = None,
        is_public: bool = True,
    ) -> Dict[str, Any]:
        """
        Generate a video for an uploader.

        With a cause, the title comes from that cause's topics; without one
        the video talks about something unrelated to any cause.
        """
        video_id = str(uuid4())
        if cause is not None and cause in TOPICS:
            title = self._rng.choice(TOPICS[cause])
        else:
            title = self._rng.choice(NEUTRAL_TOPICS)
        video = {
            "id": video_id,
            "title": title,
            "topic": "",
            "transcript": "",
            "script": "",
            "views": views if views is not None else self._rng.randint(0, 5000),
            "user_id": uploader["id"],
            "uploader_role": uploader.get("account_type"),
            "thumbnail": f"/uploads/thumbnails/{video_id}.jpg",
            "is_public": is_public,
        }
        self._generated_videos[video_id] = video
        return video

    def generate_speaker_with_videos(
        self,
        causes: Optional[List[CauseId]] = None,
        num_videos: int = 3,
    ) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
        """Generate a speaker whose videos cycle through the given causes."""
        speaker = self.generate_speaker()
        if causes is None:
            causes = self._rng.sample(list(TOPICS.keys()), k=2)
        videos = [
            self.generate_video(speaker, cause=causes[i % len(causes)] if causes else None)
            for i in range(num_videos)
        ]
        return speaker, videos

    def generate_dataset(
        self,
        num_speakers: int = 10,
        num_organizers: int = 5,
        videos_per_speaker: int = 3,
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Generate speakers, organizers and videos for a demo run."""
        speakers: List[Dict[str, Any]] = []
        videos: List[Dict[str, Any]] = []
        for _ in range(num_speakers):
            speaker, speaker_videos = self.generate_speaker_with_videos(num_videos=videos_per_speaker)
            speakers.append(speaker)
            videos.extend(speaker_videos)
        organizers = [self.generate_organizer() for _ in range(num_organizers)]
        return {"speakers": speakers, "organizers": organizers, "videos": videos}
