"""Shared test helpers."""

import pytest

from ballotbox.registry import VotingRegistry


def make_address(n: int) -> str:
    """Build a distinct address-like identity from an integer."""
    return f"0x{n:040x}"


CANDIDATES = ["Alice", "Bob", "Charlie"]
# Well outside the small integers used for voter addresses
OWNER = make_address(0xA11CE)


def cast_votes(registry: VotingRegistry, choices: list[int], first_voter: int = 100) -> list[str]:
    """Have one fresh identity vote for each index in ``choices``.

    Returns:
        The identities that voted, in order.
    """
    voters = []
    for offset, index in enumerate(choices):
        voter = make_address(first_voter + offset)
        registry.vote(index, caller=voter)
        voters.append(voter)
    return voters


@pytest.fixture
def registry():
    return VotingRegistry(CANDIDATES, caller=OWNER)


@pytest.fixture
def voter1():
    return make_address(101)


@pytest.fixture
def voter2():
    return make_address(102)


@pytest.fixture
def voter3():
    return make_address(103)
