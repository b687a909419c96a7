"""Walk through the registry lifecycle: vote, pause, add a candidate, resume.

Creates a registry with generated owner and voter identities, casts a few
sample votes, then uses the owner's admin functions to add a new candidate
while voting is paused. Prints the state after each step and the event log
at the end.

Usage:
    python scripts/demo_registry.py
    python scripts/demo_registry.py --new-candidate Erin
"""

import argparse
import logging

from faker import Faker

from ballotbox.config import get_settings
from ballotbox.errors import RegistryError
from ballotbox.registry import VotingRegistry

# (voter label, candidate index) for the sample votes
SAMPLE_VOTES = [("Voter1", 0), ("Voter2", 1), ("Voter3", 0)]


def fake_address(fake: Faker) -> str:
    return fake.hexify(text="0x" + "^" * 40)


def print_candidates(registry: VotingRegistry, title: str) -> None:
    print(f"\n{title}:")
    for index, candidate in enumerate(registry.get_candidates()):
        print(f"  {index}: {candidate.name} - {candidate.vote_count} votes")


def run_demo(candidates: list[str], new_candidate: str, seed: int) -> VotingRegistry:
    fake = Faker()
    fake.seed_instance(seed)
    owner = fake_address(fake)
    voters = {label: fake_address(fake) for label, _ in SAMPLE_VOTES}

    registry = VotingRegistry(candidates, caller=owner)
    print(f"Owner: {owner}")
    for label, identity in voters.items():
        print(f"{label}: {identity}")

    print("\nCurrent State:")
    print(f"  Voting Active: {registry.voting_active}")
    print_candidates(registry, "Candidates")

    print("\nCasting Votes...")
    for label, index in SAMPLE_VOTES:
        identity = voters[label]
        if registry.has_address_voted(identity):
            continue
        try:
            registry.vote(index, caller=identity)
        except RegistryError as e:
            print(f"  {label} could not vote: {e}")
            continue
        print(f"  {label} voted for {registry.get_candidate(index).name} (index {index})")

    stats = registry.get_voting_stats()
    print("\nStatistics:")
    print(f"  Total Votes: {stats.total_votes}")
    print(f"  Candidate Count: {stats.candidate_count}")
    print(f"  Voting Active: {stats.voting_active}")

    print("\nVoter Status:")
    for label, identity in voters.items():
        print(f"  {label} has voted: {registry.has_address_voted(identity)}")

    if stats.total_votes > 0:
        winner = registry.get_winner()
        print("\nCurrent Winner:")
        print(f"  {winner.name} (Index: {winner.index}) with {winner.vote_count} votes")

    print("\nAdmin Functions Demo:")
    print("  Pausing voting to add new candidate...")
    registry.set_voting_status(False, caller=owner)
    print(f"  Adding new candidate {new_candidate!r}...")
    index = registry.add_candidate(new_candidate, caller=owner)
    print(f"  Added at index {index}")
    print("  Reactivating voting...")
    registry.set_voting_status(True, caller=owner)

    print_candidates(registry, "Updated Candidates")

    print("\nEvent Log:")
    for event in registry.events:
        print(f"  {event.to_dict()}")

    return registry


def main(argv: list[str] | None = None):
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Demonstrate the registry's voting and admin lifecycle")
    parser.add_argument("--candidates", nargs="+", default=settings.CANDIDATES,
                        help=f"Initial candidate names (default: {settings.CANDIDATES})")
    parser.add_argument("--new-candidate", default="Dave",
                        help="Candidate to add while voting is paused (default: Dave)")
    parser.add_argument("--seed", type=int, default=settings.SEED,
                        help=f"Seed for generated identities (default: {settings.SEED})")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        run_demo(args.candidates, args.new_candidate, args.seed)
    except RegistryError as e:
        parser.exit(1, f"Error interacting with registry: {e}\n")
    print("\nInteraction completed successfully!")


if __name__ == "__main__":
    main()
