"""Randomized operation sequences, checking bookkeeping after every step."""

import random

import pytest
from tests.conftest import OWNER, make_address

from ballotbox.errors import (
    AlreadyVoted,
    InvalidIndex,
    InvariantViolation,
    RegistryError,
    Unauthorized,
    VotingActive,
    VotingInactive,
)
from ballotbox.registry import VotingRegistry

SEEDS = list(range(25))


def random_step(rng: random.Random, registry: VotingRegistry, identities: list[str]) -> None:
    """Attempt one random operation, swallowing the expected rejection.

    Also checks that the rejection is exactly the one the current state calls for.
    """
    action = rng.choice(["vote", "vote", "vote", "status", "add"])
    caller = rng.choice(identities)
    count = registry.get_candidate_count()

    if action == "vote":
        index = rng.randrange(-1, count + 2)
        if not registry.voting_active:
            expected = VotingInactive
        elif not 0 <= index < count:
            expected = InvalidIndex
        elif registry.has_address_voted(caller):
            expected = AlreadyVoted
        else:
            expected = None
        call = lambda: registry.vote(index, caller=caller)  # noqa: E731
    elif action == "status":
        active = rng.random() < 0.6
        expected = None if caller == OWNER else Unauthorized
        call = lambda: registry.set_voting_status(active, caller=caller)  # noqa: E731
    else:
        if caller != OWNER:
            expected = Unauthorized
        elif registry.voting_active:
            expected = VotingActive
        else:
            expected = None
        call = lambda: registry.add_candidate(f"Candidate {count}", caller=caller)  # noqa: E731

    if expected is None:
        call()
    else:
        with pytest.raises(expected):
            call()


def snapshot(registry: VotingRegistry, identities: list[str]):
    return (
        registry.get_candidates(),
        registry.get_voting_stats(),
        [registry.get_vote_details(i) for i in identities],
    )


class TestRandomSequences:
    @pytest.mark.parametrize("seed", SEEDS)
    def test_bookkeeping_consistent(self, seed):
        rng = random.Random(seed)
        identities = [OWNER] + [make_address(i) for i in range(1, 16)]
        registry = VotingRegistry(["Alice", "Bob", "Charlie"], caller=OWNER)
        assert len(set(identities)) == len(identities)

        for _ in range(200):
            random_step(rng, registry, identities)
            registry.check_invariants()

            candidates, (total, count, _), _ = snapshot(registry, identities)
            voted = [i for i in identities if registry.has_address_voted(i)]
            assert total == len(voted) == sum(c.vote_count for c in candidates)
            assert count == len(candidates)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_votes_never_revert(self, seed):
        rng = random.Random(seed)
        identities = [OWNER] + [make_address(i) for i in range(1, 8)]
        registry = VotingRegistry(["A", "B"], caller=OWNER)
        seen: dict[str, tuple[bool, int]] = {}

        for _ in range(150):
            random_step(rng, registry, identities)
            for identity, record in seen.items():
                assert registry.get_vote_details(identity) == record
            for identity in identities:
                record = registry.get_vote_details(identity)
                if record.has_voted:
                    seen[identity] = record

    @pytest.mark.parametrize("seed", SEEDS)
    def test_rejected_calls_change_nothing(self, seed):
        rng = random.Random(seed)
        identities = [OWNER] + [make_address(i) for i in range(1, 6)]
        registry = VotingRegistry(["A", "B", "C"], caller=OWNER)

        for _ in range(150):
            before = snapshot(registry, identities)
            events_before = len(registry.events)
            random_step(rng, registry, identities)
            if len(registry.events) == events_before:
                assert snapshot(registry, identities) == before

    @pytest.mark.parametrize("seed", SEEDS)
    def test_candidates_only_grow(self, seed):
        rng = random.Random(seed)
        identities = [OWNER, make_address(1)]
        registry = VotingRegistry(["A"], caller=OWNER)
        names = ["A"]

        for _ in range(100):
            random_step(rng, registry, identities)
            current = [c.name for c in registry.get_candidates()]
            assert current[:len(names)] == names
            names = current


class TestCheckInvariants:
    def test_passes_on_fresh_registry(self):
        VotingRegistry(["A"], caller=OWNER).check_invariants()

    def test_detects_tampered_count(self):
        registry = VotingRegistry(["A", "B"], caller=OWNER)
        registry.vote(0, caller=make_address(1))
        registry._candidates[1].vote_count += 1

        with pytest.raises(InvariantViolation):
            registry.check_invariants()

    def test_detects_misattributed_vote(self):
        registry = VotingRegistry(["A", "B"], caller=OWNER)
        registry.vote(0, caller=make_address(1))
        registry._candidates[0].vote_count -= 1
        registry._candidates[1].vote_count += 1

        with pytest.raises(InvariantViolation, match="disagree with vote records"):
            registry.check_invariants()

    def test_is_a_registry_error(self):
        assert issubclass(InvariantViolation, RegistryError)
