"""Simulate a batch of voters casting votes against a fresh registry.

Generates reproducible voter identities with faker, creates a registry owned
by a generated owner, has every voter cast one vote for a randomly chosen
candidate, and prints the results, winner, statistics and per-voter details.

Defaults come from BALLOTBOX_* environment variables (see ballotbox.config).

Usage:
    python scripts/simulate_votes.py
    python scripts/simulate_votes.py --voters 50 --seed 7
    python scripts/simulate_votes.py --candidates Alice Bob --json
"""

import argparse
import json
import logging
import random
from dataclasses import dataclass

from faker import Faker

from ballotbox.config import get_settings
from ballotbox.errors import RegistryError
from ballotbox.models import Identity
from ballotbox.registry import VotingRegistry
from ballotbox.report import RegistryReport

logger = logging.getLogger(__name__)


@dataclass
class SimulatedVoter:
    name: str
    identity: Identity
    candidate_index: int


def fake_address(fake: Faker) -> str:
    """Generate an address-like identity: 0x followed by 40 hex digits."""
    return fake.hexify(text="0x" + "^" * 40)


def generate_voters(
    count: int, candidate_count: int, seed: int
) -> tuple[Identity, list[SimulatedVoter]]:
    """Generate an owner identity and ``count`` voters with their choices.

    The same seed always produces the same owner, voters and choices.
    """
    if candidate_count < 1:
        raise ValueError("At least one candidate required")

    fake = Faker()
    fake.seed_instance(seed)
    rng = random.Random(seed)

    owner = fake_address(fake)
    voters = []
    used = {owner}
    while len(voters) < count:
        identity = fake_address(fake)
        if identity in used:
            continue
        used.add(identity)
        voters.append(SimulatedVoter(
            name=fake.name(),
            identity=identity,
            candidate_index=rng.randrange(candidate_count),
        ))

    return owner, voters


def cast_votes(registry: VotingRegistry, voters: list[SimulatedVoter]) -> int:
    """Have each voter vote once, skipping those who already voted.

    Rejected votes are reported and the simulation carries on.

    Returns:
        Number of votes successfully cast.
    """
    cast = 0
    for voter in voters:
        if registry.has_address_voted(voter.identity):
            print(f"  {voter.name} ({voter.identity}) has already voted")
            continue

        candidate = registry.get_candidate(voter.candidate_index)
        try:
            registry.vote(voter.candidate_index, caller=voter.identity)
        except RegistryError as e:
            print(f"  Error voting for {voter.name}: {e}")
            continue
        cast += 1
        print(f"  {voter.name} voted for {candidate.name} (index {voter.candidate_index})")

    return cast


def print_results(registry: VotingRegistry, voters: list[SimulatedVoter]) -> None:
    print("\nFinal Results:")
    for index, candidate in enumerate(registry.get_candidates()):
        print(f"  {index}: {candidate.name} - {candidate.vote_count} votes")

    winner = registry.get_winner()
    print(f"\nWinner: {winner.name} (Index: {winner.index}) with {winner.vote_count} votes")

    stats = registry.get_voting_stats()
    print("\nStatistics:")
    print(f"  Total Votes Cast: {stats.total_votes}")
    print(f"  Number of Candidates: {stats.candidate_count}")
    print(f"  Voting Status: {'Active' if stats.voting_active else 'Inactive'}")

    print("\nVote Details:")
    for voter in voters:
        record = registry.get_vote_details(voter.identity)
        if record.has_voted:
            name = registry.get_candidate(record.candidate_index).name
            print(f"  {voter.name} ({voter.identity}): Voted for {name} "
                  f"(Index: {record.candidate_index})")
        else:
            print(f"  {voter.name} ({voter.identity}): Has not voted")


def run(candidates: list[str], voter_count: int, seed: int, as_json: bool = False) -> VotingRegistry:
    """Run a full simulation and print the outcome. Returns the registry."""
    owner, voters = generate_voters(voter_count, len(candidates), seed)
    registry = VotingRegistry(candidates, caller=owner)

    if as_json:
        for voter in voters:
            registry.vote(voter.candidate_index, caller=voter.identity)
        report = RegistryReport.from_registry(registry, [v.identity for v in voters])
        print(json.dumps(report.to_dict(), indent=2))
        return registry

    print(f"Registry owner: {owner}")
    print("\nAvailable Candidates:")
    for index, candidate in enumerate(registry.get_candidates()):
        print(f"  {index}: {candidate.name} - {candidate.vote_count} votes")

    print("\nCasting Votes...")
    cast = cast_votes(registry, voters)
    logger.info("Cast %d of %d votes", cast, len(voters))

    print_results(registry, voters)
    registry.check_invariants()
    return registry


def main(argv: list[str] | None = None):
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Simulate voters casting votes against a registry")
    parser.add_argument("--candidates", nargs="+", default=settings.CANDIDATES,
                        help=f"Candidate names (default: {settings.CANDIDATES})")
    parser.add_argument("--voters", type=int, default=settings.VOTERS,
                        help=f"Number of simulated voters (default: {settings.VOTERS})")
    parser.add_argument("--seed", type=int, default=settings.SEED,
                        help=f"Random seed (default: {settings.SEED})")
    parser.add_argument("--json", action="store_true",
                        help="Print a JSON report instead of the text summary")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        run(args.candidates, args.voters, args.seed, as_json=args.json)
    except (RegistryError, ValueError) as e:
        parser.exit(1, f"Simulation failed: {e}\n")


if __name__ == "__main__":
    main()
