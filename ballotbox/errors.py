"""Exceptions raised when a registry call is rejected.

Every failure is a rejected precondition: the call has no effect on the
registry and the caller decides whether to retry or abort.
"""


class RegistryError(Exception):
    """Base class for all rejected registry calls."""
    pass


class InvalidInput(RegistryError, ValueError):
    """Raised when a registry is created without any candidates."""
    pass


class InvalidIndex(RegistryError, IndexError):
    """Raised when a candidate index is outside the candidate list."""
    pass


class AlreadyVoted(RegistryError):
    """Raised when an identity that has already voted tries to vote again."""
    pass


class VotingInactive(RegistryError):
    """Raised when a vote is cast while voting is paused."""
    pass


class VotingActive(RegistryError):
    """Raised when a candidate is added while voting is active.

    Candidates may only be added while voting is paused.
    """
    pass


class Unauthorized(RegistryError, PermissionError):
    """Raised when an admin operation is called by someone other than the owner."""
    pass


class EmptyName(RegistryError, ValueError):
    """Raised when a candidate is added with an empty name."""
    pass


class InvariantViolation(RegistryError):
    """Raised by consistency checks when vote bookkeeping has diverged.

    No public registry operation can lead here; seeing this means the
    registry state was modified behind its back.
    """
    pass
