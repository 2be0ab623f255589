"""Slots - thread-safe cells for asynchronously produced values."""

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class SlotState(Enum):
    """Internal lifecycle of a slot."""

    UNSET = "unset"
    PENDING = "pending"
    DONE = "done"


class Status(Enum):
    """What the presentation layer sees."""

    NOT_CONFIGURED = "not_configured"
    LOADING = "loading"
    FAILED = "failed"
    READY = "ready"


@dataclass(frozen=True)
class SlotSnapshot:
    """Immutable view of a slot at one point in time."""

    status: Status
    value: Any = None
    error: str | None = None

    @property
    def ready(self) -> bool:
        return self.status is Status.READY

    @property
    def terminal(self) -> bool:
        return self.status is not Status.LOADING


NOT_CONFIGURED = SlotSnapshot(Status.NOT_CONFIGURED)


class Slot(Generic[T]):
    """
    A single-writer cell: UNSET -> PENDING -> DONE(value | error).

    claim() is the only way out of UNSET, so whoever wins the claim is the
    one producer allowed to write the terminal value. Each claim gets a new
    ticket; a write carrying an old ticket, or arriving after the claim was
    abandoned, is dropped. Readers take snapshots and never block on the
    producer.
    """

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._state = SlotState.UNSET
        self._value: T | None = None
        self._error: str | None = None
        self._ticket = 0
        self._pending_since: float | None = None
        self._stale = False

    @property
    def state(self) -> SlotState:
        return self._state

    @property
    def ticket(self) -> int:
        """Ticket of the most recent claim."""
        return self._ticket

    def claim(self) -> bool:
        """Move UNSET -> PENDING. Returns False if the slot was not UNSET."""
        with self._lock:
            if self._state is not SlotState.UNSET:
                return False
            self._state = SlotState.PENDING
            self._ticket += 1
            self._pending_since = time.monotonic()
            return True

    def resolve(self, value: T, ticket: int | None = None) -> bool:
        """Store a successful result. Returns False if the write was dropped."""
        return self._finish(value, None, ticket)

    def fail(self, reason: str, ticket: int | None = None) -> bool:
        """Store a failure. Returns False if the write was dropped."""
        return self._finish(None, reason or "unknown error", ticket)

    def _finish(self, value: T | None, error: str | None, ticket: int | None) -> bool:
        with self._lock:
            if ticket is not None and ticket != self._ticket:
                return False
            if self._state is not SlotState.PENDING:
                # Abandoned claims drop their late result
                if ticket is not None:
                    return False
                raise RuntimeError(f"Slot {self.name!r} written while {self._state.value}")
            self._pending_since = None
            if self._stale:
                self._stale = False
                self._state = SlotState.UNSET
                return False
            self._value = value
            self._error = error
            self._state = SlotState.DONE
            return True

    def reset(self) -> bool:
        """Return a finished slot to UNSET so it can be fetched again."""
        with self._lock:
            if self._state is not SlotState.DONE:
                return False
            self._state = SlotState.UNSET
            self._value = None
            self._error = None
            return True

    def invalidate(self) -> None:
        """
        Make the current value unusable.

        A finished slot is reset now; a pending one discards its result when
        the fetch settles and goes back to UNSET.
        """
        with self._lock:
            if self._state is SlotState.PENDING:
                self._stale = True
            elif self._state is SlotState.DONE:
                self._state = SlotState.UNSET
                self._value = None
                self._error = None

    def abandon_if_overdue(self, max_age: float, reason: str, now: float | None = None) -> bool:
        """Fail a claim that has been pending longer than max_age seconds."""
        now = time.monotonic() if now is None else now
        with self._lock:
            if self._state is not SlotState.PENDING or self._pending_since is None:
                return False
            if now - self._pending_since <= max_age:
                return False
            self._pending_since = None
            self._stale = False
            self._value = None
            self._error = reason
            self._state = SlotState.DONE
            return True

    @property
    def failed(self) -> bool:
        with self._lock:
            return self._state is SlotState.DONE and self._error is not None

    def snapshot(self) -> SlotSnapshot:
        with self._lock:
            if self._state is not SlotState.DONE:
                return SlotSnapshot(Status.LOADING)
            if self._error is not None:
                return SlotSnapshot(Status.FAILED, error=self._error)
            return SlotSnapshot(Status.READY, value=self._value)
