"""Registry events and the in-memory audit trail they are recorded in."""

from dataclasses import asdict, dataclass
from typing import Any, Callable, Iterator, TypeVar

from ballotbox.models import Identity


@dataclass(frozen=True)
class Event:
    """Base class for events emitted by a registry."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return {"event": self.kind, **asdict(self)}


@dataclass(frozen=True)
class RegistryCreated(Event):
    owner: Identity
    candidate_names: tuple[str, ...]


@dataclass(frozen=True)
class Voted(Event):
    """A vote was cast.

    Attributes:
        voter: Identity that cast the vote
        candidate_index: Index of the chosen candidate
        candidate_name: Name of the chosen candidate at the time of voting
    """
    voter: Identity
    candidate_index: int
    candidate_name: str


@dataclass(frozen=True)
class VotingStatusChanged(Event):
    active: bool


@dataclass(frozen=True)
class CandidateAdded(Event):
    name: str
    index: int


Listener = Callable[[Event], None]
E = TypeVar("E", bound=Event)


class EventLog:
    """Append-only record of every event a registry has emitted.

    Listeners registered with :meth:`subscribe` are called synchronously,
    in subscription order, each time an event is appended.

    Example:
        >>> log = EventLog()
        >>> @log.subscribe
        ... def announce(event):
        ...     print(event.kind)
        >>> log.append(VotingStatusChanged(active=False))
        VotingStatusChanged
    """

    def __init__(self, listeners: list[Listener] | None = None):
        self._events: list[Event] = []
        self._listeners: list[Listener] = list(listeners or [])

    def subscribe(self, listener: Listener) -> Listener:
        """Register a listener. Returns it so this can be used as a decorator."""
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def append(self, event: Event) -> None:
        self._events.append(event)
        for listener in list(self._listeners):
            listener(event)

    def of_type(self, event_class: type[E]) -> list[E]:
        """Return all recorded events of the given type, oldest first."""
        return [e for e in self._events if isinstance(e, event_class)]

    @property
    def last(self) -> Event | None:
        return self._events[-1] if self._events else None

    def to_list(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self._events]

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)
