"""
Data module for database models, storage queries and synthetic data.
"""

from advocacy_match.data.synthetic import SyntheticDataGenerator
from advocacy_match.data.models import Base, User, Video

__all__ = [
    "SyntheticDataGenerator",
    "Base",
    "User",
    "Video",
]
