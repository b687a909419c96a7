"""In-memory voting registry: one vote per identity, owner-gated administration."""

from ballotbox.errors import (
    AlreadyVoted,
    EmptyName,
    InvalidIndex,
    InvalidInput,
    InvariantViolation,
    RegistryError,
    Unauthorized,
    VotingActive,
    VotingInactive,
)
from ballotbox.events import CandidateAdded, Event, EventLog, RegistryCreated, Voted, VotingStatusChanged
from ballotbox.models import Candidate, CandidateView, VoteRecord, VotingStats, Winner
from ballotbox.registry import VotingRegistry

__all__ = [
    "AlreadyVoted",
    "Candidate",
    "CandidateAdded",
    "CandidateView",
    "EmptyName",
    "Event",
    "EventLog",
    "InvalidIndex",
    "InvalidInput",
    "InvariantViolation",
    "RegistryCreated",
    "RegistryError",
    "Unauthorized",
    "VoteRecord",
    "Voted",
    "VotingActive",
    "VotingInactive",
    "VotingRegistry",
    "VotingStats",
    "VotingStatusChanged",
    "Winner",
]
