"""The voting registry state machine."""

import logging
from typing import Iterable

from ballotbox.errors import (
    AlreadyVoted,
    EmptyName,
    InvalidIndex,
    InvalidInput,
    InvariantViolation,
    Unauthorized,
    VotingActive,
    VotingInactive,
)
from ballotbox.events import (
    CandidateAdded,
    EventLog,
    Listener,
    RegistryCreated,
    Voted,
    VotingStatusChanged,
)
from ballotbox.models import (
    Candidate,
    CandidateView,
    Identity,
    VoteRecord,
    VotingStats,
    Winner,
)

logger = logging.getLogger(__name__)


class VotingRegistry:
    """One-vote-per-identity registry over an append-only candidate list.

    The registry has two phases. While voting is active, any identity may
    cast a single vote; while it is paused, the owner may add candidates.
    Only the owner may switch between the phases.

    Every mutating call takes the caller identity as the keyword argument
    ``caller``. All preconditions are checked before any state is touched,
    so a rejected call leaves the registry exactly as it was.

    Example:
        >>> registry = VotingRegistry(["Alice", "Bob"], caller="0xowner")
        >>> registry.vote(1, caller="0xvoter")
        >>> registry.get_winner()
        Winner(name='Bob', vote_count=1, index=1)
    """

    def __init__(
        self,
        candidate_names: Iterable[str],
        *,
        caller: Identity,
        listeners: list[Listener] | None = None,
    ):
        names = list(candidate_names)
        if not names:
            raise InvalidInput("At least one candidate required")

        self._candidates: list[Candidate] = [Candidate(name) for name in names]
        self._votes: dict[Identity, VoteRecord] = {}
        self._total_votes = 0
        self._voting_active = True
        self._owner = caller
        self.events = EventLog(listeners)

        logger.info("Registry created by %s with %d candidates", caller, len(names))
        self.events.append(RegistryCreated(owner=caller, candidate_names=tuple(names)))

    # --- State getters ---

    @property
    def owner(self) -> Identity:
        return self._owner

    @property
    def voting_active(self) -> bool:
        return self._voting_active

    @property
    def total_votes(self) -> int:
        return self._total_votes

    def is_owner(self, identity: Identity) -> bool:
        return identity == self._owner

    # --- Mutations ---

    def vote(self, candidate_index: int, *, caller: Identity) -> None:
        """Cast the caller's single vote for the candidate at ``candidate_index``.

        Raises:
            VotingInactive: If voting is paused
            InvalidIndex: If the index does not refer to a candidate
            AlreadyVoted: If the caller has voted before
        """
        if not self._voting_active:
            logger.debug("Rejected vote from %s: voting is not active", caller)
            raise VotingInactive("Voting is not active")
        self._check_index(candidate_index)
        if self.has_address_voted(caller):
            logger.debug("Rejected vote from %s: already voted", caller)
            raise AlreadyVoted("You have already voted")

        candidate = self._candidates[candidate_index]
        candidate.vote_count += 1
        self._votes[caller] = VoteRecord(has_voted=True, candidate_index=candidate_index)
        self._total_votes += 1

        logger.debug("%s voted for %s (index %d)", caller, candidate.name, candidate_index)
        self.events.append(Voted(
            voter=caller,
            candidate_index=candidate_index,
            candidate_name=candidate.name,
        ))

    def set_voting_status(self, active: bool, *, caller: Identity) -> None:
        """Open or pause voting. Owner only; setting the current value is allowed."""
        self._require_owner(caller)

        self._voting_active = active
        logger.info("Voting %s by %s", "activated" if active else "paused", caller)
        self.events.append(VotingStatusChanged(active=active))

    def add_candidate(self, name: str, *, caller: Identity) -> int:
        """Append a new candidate while voting is paused. Owner only.

        The name is stored as given; only the empty string is rejected.

        Returns:
            The index assigned to the new candidate.

        Raises:
            Unauthorized: If the caller is not the owner
            VotingActive: If voting is currently active
            EmptyName: If ``name`` is empty
        """
        self._require_owner(caller)
        if self._voting_active:
            raise VotingActive("Cannot add candidates while voting is active")
        if name == "":
            raise EmptyName("Candidate name cannot be empty")

        index = len(self._candidates)
        self._candidates.append(Candidate(name))

        logger.info("Candidate %r added at index %d", name, index)
        self.events.append(CandidateAdded(name=name, index=index))
        return index

    # --- Queries ---

    def get_candidate(self, index: int) -> CandidateView:
        self._check_index(index)
        return self._candidates[index].view()

    def get_candidates(self) -> list[CandidateView]:
        """Snapshot of all candidates, in index order."""
        return [c.view() for c in self._candidates]

    def get_candidate_count(self) -> int:
        return len(self._candidates)

    def has_address_voted(self, identity: Identity) -> bool:
        return self.get_vote_details(identity).has_voted

    def get_vote_details(self, identity: Identity) -> VoteRecord:
        """Return the identity's vote record, or ``VoteRecord(False, 0)`` if it never voted."""
        return self._votes.get(identity, VoteRecord())

    def get_voting_stats(self) -> VotingStats:
        return VotingStats(
            total_votes=self._total_votes,
            candidate_count=len(self._candidates),
            voting_active=self._voting_active,
        )

    def get_winner(self) -> Winner:
        """Return the candidate with the most votes.

        Candidates are scanned in index order and only a strictly greater
        count replaces the current leader, so ties go to the lowest index.
        With no votes cast this is the first candidate with 0 votes; callers
        decide whether that is meaningful.
        """
        winning_index = 0
        winning_count = 0
        for index, candidate in enumerate(self._candidates):
            if candidate.vote_count > winning_count:
                winning_count = candidate.vote_count
                winning_index = index

        return Winner(
            name=self._candidates[winning_index].name,
            vote_count=winning_count,
            index=winning_index,
        )

    def check_invariants(self) -> None:
        """Verify that vote counts, vote records and the total agree.

        Raises:
            InvariantViolation: If the bookkeeping has diverged
        """
        counted = sum(c.vote_count for c in self._candidates)
        recorded = sum(1 for r in self._votes.values() if r.has_voted)
        if not self._total_votes == counted == recorded:
            raise InvariantViolation(
                f"Vote totals disagree: total={self._total_votes}, "
                f"candidate counts={counted}, voters={recorded}"
            )

        per_candidate = [0] * len(self._candidates)
        for record in self._votes.values():
            if not 0 <= record.candidate_index < len(self._candidates):
                raise InvariantViolation(
                    f"Vote record points at missing candidate {record.candidate_index}"
                )
            if record.has_voted:
                per_candidate[record.candidate_index] += 1
        if per_candidate != [c.vote_count for c in self._candidates]:
            raise InvariantViolation("Candidate vote counts disagree with vote records")

    # --- Helpers ---

    def _require_owner(self, caller: Identity) -> None:
        if not self.is_owner(caller):
            logger.debug("Rejected admin call from non-owner %s", caller)
            raise Unauthorized("Only owner can call this function")

    def _check_index(self, index: int) -> None:
        # Only plain ints; negative indices are out of range, not counted from the end.
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidIndex("Invalid candidate index")
        if not 0 <= index < len(self._candidates):
            raise InvalidIndex("Invalid candidate index")

    def __repr__(self) -> str:
        return (
            f"<VotingRegistry candidates={len(self._candidates)} "
            f"total_votes={self._total_votes} active={self._voting_active}>"
        )
