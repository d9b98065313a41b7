"""
Agents for the advocacy matching platform.
"""

from advocacy_match.agents.advocacy_matcher import AdvocacyMatchingAgent

__all__ = [
    "AdvocacyMatchingAgent",
]
