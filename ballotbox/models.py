"""Core data models for candidates, vote records and registry queries."""

from dataclasses import dataclass
from typing import Any, Hashable, NamedTuple

# Opaque, comparable token identifying a caller (voter or owner).
Identity = Hashable


class CandidateView(NamedTuple):
    """Read-only snapshot of a candidate returned by registry queries."""
    name: str
    vote_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "vote_count": self.vote_count}


@dataclass
class Candidate:
    """A candidate on the ballot.

    Candidates are identified by their index in the registry's ordered
    sequence, not by name: names are neither deduplicated nor trimmed.

    Attributes:
        name: Candidate name as given at creation (non-empty)
        vote_count: Number of votes received so far
    """
    name: str
    vote_count: int = 0

    def view(self) -> CandidateView:
        return CandidateView(self.name, self.vote_count)


class VoteRecord(NamedTuple):
    """Per-identity voting record.

    An identity that never voted reads as the default record
    ``VoteRecord(False, 0)``, so ``candidate_index`` is only meaningful
    when ``has_voted`` is True.
    """
    has_voted: bool = False
    candidate_index: int = 0


class VotingStats(NamedTuple):
    total_votes: int
    candidate_count: int
    voting_active: bool

    def to_dict(self) -> dict[str, Any]:
        return self._asdict()


class Winner(NamedTuple):
    """Leading candidate: (name, vote_count, index).

    Ties resolve to the lowest index, and the first candidate "wins" with
    zero votes when nothing has been cast yet.
    """
    name: str
    vote_count: int
    index: int

    def to_dict(self) -> dict[str, Any]:
        return self._asdict()
