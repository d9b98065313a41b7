"""
Core module containing the base agent and message types.
"""

from advocacy_match.core.base_agent import AgentCapability, AgentMessage, AgentState, BaseAgent

__all__ = [
    "BaseAgent",
    "AgentCapability",
    "AgentMessage",
    "AgentState",
]
