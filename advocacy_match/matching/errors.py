"""
Exceptions raised around the matching engine.

Empty inputs and ineligible roles are not errors; they come back as empty
responses with a guidance message.
"""


class MatchingError(Exception):
    """Base class for matching failures."""


class UnknownRoleError(MatchingError):
    """A query variant or account type the engine does not know."""


class CandidateFetchError(MatchingError):
    """The host could not load the candidate pool from storage."""
