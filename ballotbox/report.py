"""Snapshot of a registry's public state for clients and JSON output."""

from dataclasses import dataclass, field
from typing import Any, Self

from ballotbox.models import CandidateView, Identity, VotingStats, Winner
from ballotbox.registry import VotingRegistry


@dataclass
class RegistryReport:
    """Everything a client would display about a registry at one point in time.

    Attributes:
        owner: Owner identity
        candidates: Candidates in index order with their vote counts
        stats: (total_votes, candidate_count, voting_active)
        winner: Current leader, or None while no votes have been cast
        voters: Vote details for the identities the client asked about
        events: The registry's event log, serialized
    """
    owner: Identity
    candidates: list[CandidateView]
    stats: VotingStats
    winner: Winner | None
    voters: dict[Identity, dict[str, Any]] = field(default_factory=dict)
    events: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_registry(
        cls, registry: VotingRegistry, voters: list[Identity] | None = None
    ) -> Self:
        stats = registry.get_voting_stats()
        # A zero-vote "winner" is not worth announcing.
        winner = registry.get_winner() if stats.total_votes > 0 else None

        voter_details = {}
        for voter in voters or []:
            record = registry.get_vote_details(voter)
            voter_details[voter] = {
                "has_voted": record.has_voted,
                "candidate_index": record.candidate_index if record.has_voted else None,
            }

        return cls(
            owner=registry.owner,
            candidates=registry.get_candidates(),
            stats=stats,
            winner=winner,
            voters=voter_details,
            events=registry.events.to_list(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "owner": str(self.owner),
            "candidates": [
                {"index": i, **c.to_dict()} for i, c in enumerate(self.candidates)
            ],
            "stats": self.stats.to_dict(),
            "winner": self.winner.to_dict() if self.winner else None,
            "voters": {str(k): v for k, v in self.voters.items()},
            "events": self.events,
        }
