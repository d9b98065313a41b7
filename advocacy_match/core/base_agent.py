"""
Message-driven agent shell.

An agent owns a table of action handlers. Requests arrive as AgentMessage
envelopes; the reply is either a "response" carrying the handler's payload
or an "error" carrying the exception type and text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional
from uuid import uuid4

import structlog

from advocacy_match import __version__

logger = structlog.get_logger()


class AgentCapability(str, Enum):
    """What an agent advertises on its card."""

    SPEAKER_MATCHING = "speaker_matching"
    ORGANIZATION_MATCHING = "organization_matching"
    CAUSE_DETECTION = "cause_detection"
    TAXONOMY_LOOKUP = "taxonomy_lookup"


@dataclass
class AgentMessage:
    """Request or reply exchanged with an agent."""

    sender: str = ""
    recipient: str = ""
    action: str = ""
    payload: Dict[str, Any] = field(default_factory=dict)
    message_type: str = "request"  # request, response, error
    id: str = field(default_factory=lambda: str(uuid4()))
    correlation_id: Optional[str] = None

    def reply(self, sender: str, payload: Dict[str, Any], message_type: str = "response") -> "AgentMessage":
        suffix = "error" if message_type == "error" else "response"
        return AgentMessage(
            sender=sender,
            recipient=self.sender,
            action=f"{self.action}_{suffix}",
            payload=payload,
            message_type=message_type,
            correlation_id=self.id,
        )


@dataclass
class AgentState:
    is_ready: bool = False
    error_count: int = 0


Handler = Callable[[AgentMessage], Awaitable[Dict[str, Any]]]


class BaseAgent(ABC):
    """
    Base class for agents.

    Subclasses register their actions in ``__init__`` and may override
    ``_initialize`` for setup that has to happen before the first request.
    """

    def __init__(
        self,
        agent_id: str,
        name: str,
        description: str,
        capabilities: List[AgentCapability],
    ):
        self.agent_id = agent_id
        self.name = name
        self.description = description
        self.capabilities = capabilities
        self.state = AgentState()
        self._logger = logger.bind(agent_id=agent_id)
        self._handlers: Dict[str, Handler] = {
            "ping": self._handle_ping,
            "capabilities": self._handle_capabilities,
        }

    async def _handle_ping(self, message: AgentMessage) -> Dict[str, Any]:
        return {"status": "alive", "agent_id": self.agent_id}

    async def _handle_capabilities(self, message: AgentMessage) -> Dict[str, Any]:
        return {
            "agent_id": self.agent_id,
            "capabilities": [cap.value for cap in self.capabilities],
        }

    def register_handler(self, action: str, handler: Handler) -> None:
        self._handlers[action] = handler

    async def initialize(self) -> None:
        await self._initialize()
        self.state.is_ready = True
        self._logger.info("agent_initialized", actions=sorted(self._handlers))

    @abstractmethod
    async def _initialize(self) -> None:
        """Agent-specific setup."""

    async def process_message(self, message: AgentMessage) -> AgentMessage:
        """
        Run the handler for ``message.action`` and wrap its result.

        Handler exceptions do not propagate; they come back as a reply of
        type "error" with ``error`` and ``error_type`` in the payload.
        """
        self._logger.debug("processing_message", action=message.action, sender=message.sender)
        handler = self._handlers.get(message.action)
        try:
            if handler is None:
                raise ValueError(f"Unknown action: {message.action}")
            result = await handler(message)
        except Exception as e:
            self.state.error_count += 1
            self._logger.error(
                "message_processing_failed",
                action=message.action,
                error=str(e),
                error_type=type(e).__name__,
            )
            return message.reply(
                self.agent_id,
                {"error": str(e), "error_type": type(e).__name__},
                message_type="error",
            )
        return message.reply(self.agent_id, result)

    async def shutdown(self) -> None:
        self.state.is_ready = False
        self._logger.info("agent_shutdown_complete")

    def get_agent_card(self) -> Dict[str, Any]:
        """Agent metadata for the health listing."""
        return {
            "agent_id": self.agent_id,
            "name": self.name,
            "description": self.description,
            "capabilities": [cap.value for cap in self.capabilities],
            "is_ready": self.state.is_ready,
            "version": __version__,
        }
