"""
Account roles and the querying-user variants the engine dispatches on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from advocacy_match.matching.content import VideoContent
from advocacy_match.matching.errors import UnknownRoleError
from advocacy_match.matching.taxonomy import parse_causes


class AccountRole(str, Enum):
    """Account types. Speakers are stored as "competitor"."""
    COMPETITOR = "competitor"
    ORGANIZER = "organizer"
    GUEST = "guest"

    @classmethod
    def parse(cls, value: Union["AccountRole", str, None]) -> "AccountRole":
        if isinstance(value, AccountRole):
            return value
        raw = (value or "").strip().lower()
        if raw == "speaker":
            return cls.COMPETITOR
        try:
            return cls(raw)
        except ValueError:
            raise UnknownRoleError(f"Unknown account type: {value!r}")


def is_role(value: Union[AccountRole, str, None], role: AccountRole) -> bool:
    """Lenient role check; unknown or missing roles never qualify."""
    try:
        return AccountRole.parse(value) == role
    except UnknownRoleError:
        return False


def can_upload(role: Union[AccountRole, str]) -> bool:
    return AccountRole.parse(role) in (AccountRole.COMPETITOR, AccountRole.ORGANIZER)


def can_comment(role: Union[AccountRole, str]) -> bool:
    return AccountRole.parse(role) != AccountRole.GUEST


def can_like(role: Union[AccountRole, str]) -> bool:
    return AccountRole.parse(role) != AccountRole.GUEST


@dataclass(frozen=True)
class OrganizerProfile:
    """An organizer account as a candidate for speaker-facing matching."""
    user_id: str
    causes: Tuple[str, ...] = ()
    username: str = ""
    avatar: Optional[str] = None
    organization: str = ""
    bio: str = ""
    location: str = ""
    website: str = ""
    role: AccountRole = AccountRole.ORGANIZER

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrganizerProfile":
        try:
            role = AccountRole.parse(data.get("account_type") or data.get("accountType") or "organizer")
        except UnknownRoleError:
            role = AccountRole.GUEST
        return cls(
            user_id=str(data.get("user_id") or data.get("id") or ""),
            causes=tuple(cause.value for cause in parse_causes(data.get("causes") or [])),
            username=data.get("username") or "",
            avatar=data.get("avatar"),
            organization=data.get("organization") or "",
            bio=data.get("bio") or "",
            location=data.get("location") or "",
            website=data.get("website") or "",
            role=role,
        )


# Querying-user variants

@dataclass(frozen=True)
class OrganizerQuery:
    """An organizer looking for speakers who talk about their causes."""
    user_id: str
    causes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SpeakerQuery:
    """A speaker looking for organizations aligned with their speeches."""
    user_id: str
    videos: Tuple[VideoContent, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class GuestQuery:
    """A guest; matching is not offered."""
    user_id: str


MatchQuery = Union[OrganizerQuery, SpeakerQuery, GuestQuery]


def query_for_user(
    user: Mapping[str, Any],
    videos: Optional[Iterable[Union[VideoContent, Mapping[str, Any]]]] = None,
) -> MatchQuery:
    """
    Build the query variant for a user record.

    Args:
        user: Mapping with id, account type and (for organizers) causes
        videos: The user's own videos, used for speakers

    Returns:
        OrganizerQuery, SpeakerQuery or GuestQuery

    Raises:
        UnknownRoleError: If the account type is not recognised
    """
    user_id = str(user.get("id") or user.get("user_id") or "")
    role = AccountRole.parse(user.get("account_type") or user.get("accountType"))

    if role == AccountRole.ORGANIZER:
        causes = tuple(cause.value for cause in parse_causes(user.get("causes") or []))
        return OrganizerQuery(user_id=user_id, causes=causes)
    if role == AccountRole.COMPETITOR:
        contents: List[VideoContent] = [
            v if isinstance(v, VideoContent) else VideoContent.from_dict(v)
            for v in (videos or [])
        ]
        return SpeakerQuery(user_id=user_id, videos=tuple(contents))
    return GuestQuery(user_id=user_id)
