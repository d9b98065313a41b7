"""
Database models for the advocacy matching platform.
Uses SQLAlchemy for ORM with async support.
"""

from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    JSON,
)
from sqlalchemy.ext.asyncio import AsyncAttrs, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.pool import StaticPool
import enum


class Base(AsyncAttrs, DeclarativeBase):
    """Base class for all models."""
    pass


# Enums
class EventType(str, enum.Enum):
    LD = "ld"
    PF = "pf"
    POLICY = "policy"
    CONGRESS = "congress"
    BIG_QUESTIONS = "bigquestions"
    EXTEMP = "extemp"
    ORATORY = "oratory"
    OI = "oi"
    DI = "di"
    HI = "hi"
    DUO = "duo"
    POE = "poe"
    INFORMATIVE = "informative"
    PERSUASIVE = "persuasive"
    IMPROMPTU = "impromptu"
    AFTER_DINNER = "after_dinner"
    LECTURE = "lecture"
    DRILL = "drill"
    OTHER = "other"


class RoundType(str, enum.Enum):
    PRACTICE = "practice"
    PRELIM = "prelim"
    DOUBLE_OCTOS = "double_octos"
    OCTOS = "octos"
    QUARTERS = "quarters"
    SEMIS = "semis"
    FINALS = "finals"
    EXHIBITION = "exhibition"
    LECTURE = "lecture"


class TranscriptStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


# Models
class User(Base):
    """User account: speaker (competitor), organizer or guest."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    username: Mapped[str] = mapped_column(String(30), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    avatar: Mapped[Optional[str]] = mapped_column(String(500))

    account_type: Mapped[str] = mapped_column(String(20), default="competitor", index=True)

    # Profile
    full_name: Mapped[str] = mapped_column(String(255), default="")
    bio: Mapped[str] = mapped_column(Text, default="")
    location: Mapped[str] = mapped_column(String(255), default="")

    # Competitor fields
    school: Mapped[str] = mapped_column(String(255), default="")
    events: Mapped[list] = mapped_column(JSON, default=list)
    achievements: Mapped[list] = mapped_column(JSON, default=list)

    # Organizer fields
    organization: Mapped[str] = mapped_column(String(255), default="")
    organization_type: Mapped[str] = mapped_column(String(50), default="")  # youth-group, nonprofit, activism, community
    website: Mapped[str] = mapped_column(String(500), default="")
    causes: Mapped[list] = mapped_column(JSON, default=list)

    followers: Mapped[int] = mapped_column(Integer, default=0)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    videos: Mapped[List["Video"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.account_type})>"


class Video(Base):
    """Uploaded speech or debate round."""

    __tablename__ = "videos"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True)

    title: Mapped[str] = mapped_column(String(150))
    description: Mapped[str] = mapped_column(Text, default="")
    filename: Mapped[str] = mapped_column(String(255), default="")
    thumbnail: Mapped[Optional[str]] = mapped_column(String(500))
    duration: Mapped[int] = mapped_column(Integer, default=0)

    # Metrics
    views: Mapped[int] = mapped_column(Integer, default=0, index=True)
    likes_count: Mapped[int] = mapped_column(Integer, default=0)

    # Speech and debate details
    event_type: Mapped[str] = mapped_column(String(30), default=EventType.OTHER.value)
    round_type: Mapped[str] = mapped_column(String(30), default=RoundType.PRACTICE.value)
    tournament: Mapped[str] = mapped_column(String(255), default="")
    topic: Mapped[str] = mapped_column(Text, default="")  # resolution or topic
    tags: Mapped[list] = mapped_column(JSON, default=list)
    side: Mapped[str] = mapped_column(String(10), default="")
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # Script (interp events or manual entry)
    script: Mapped[str] = mapped_column(Text, default="")
    script_title: Mapped[str] = mapped_column(String(255), default="")
    script_author: Mapped[str] = mapped_column(String(255), default="")

    # Transcript written by the transcription job
    transcript: Mapped[str] = mapped_column(Text, default="")
    transcript_status: Mapped[str] = mapped_column(String(20), default=TranscriptStatus.PENDING.value)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="videos")

    def __repr__(self) -> str:
        return f"<Video {self.title[:30]} ({self.id})>"


# Database setup functions
def create_engine(database_url: str, echo: bool = False):
    """Create an async engine. In-memory SQLite shares one connection."""
    if ":memory:" in database_url:
        return create_async_engine(database_url, echo=echo, poolclass=StaticPool)
    return create_async_engine(database_url, echo=echo)


async def create_tables(engine):
    """Create all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


def get_sessionmaker(engine):
    """Session factory bound to an engine."""
    return async_sessionmaker(engine, expire_on_commit=False)
