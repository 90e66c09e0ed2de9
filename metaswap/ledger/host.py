"""Host execution substrate.

The host supplies the current block timestamp and the transaction boundary.
Every stateful participant (pools, tokens) registers itself with the host;
Host.atomic() snapshots all participants on entry and restores them if the
block raises, so an aborted operation leaves no partial effects anywhere,
including in the base pool and token ledgers it touched.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol, TypeVar

import structlog

logger = structlog.get_logger()


class Journaled(Protocol):
    """A participant whose state can be captured and rolled back."""

    def snapshot(self) -> Any:
        """Return an independent copy of the participant's mutable state."""
        ...

    def restore(self, snapshot: Any) -> None:
        """Replace the participant's mutable state with a snapshot."""
        ...


J = TypeVar("J", bound=Journaled)


class Host:
    """Clock and atomic transaction boundary shared by pools and tokens.

    Attributes:
        timestamp: Current block timestamp in seconds
    """

    def __init__(self, timestamp: int = 0) -> None:
        self._timestamp = timestamp
        self._participants: list[Journaled] = []
        self._depth = 0

    @property
    def timestamp(self) -> int:
        return self._timestamp

    def advance(self, seconds: int) -> int:
        """Move the clock forward and return the new timestamp."""
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards by {seconds}s")
        self._timestamp += seconds
        return self._timestamp

    def set_timestamp(self, timestamp: int) -> None:
        if timestamp < self._timestamp:
            raise ValueError(f"Timestamp {timestamp} is before current {self._timestamp}")
        self._timestamp = timestamp

    def register(self, participant: J) -> J:
        """Include a participant in every future transaction snapshot."""
        self._participants.append(participant)
        return participant

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Run a block as one all-or-nothing transaction.

        Nested calls join the outermost transaction, so a pool calling into
        its base pool is rolled back as a whole.
        """
        if self._depth > 0:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        snapshots = [(participant, participant.snapshot()) for participant in self._participants]
        self._depth = 1
        try:
            yield
        except Exception as e:
            for participant, snapshot in snapshots:
                participant.restore(snapshot)
            logger.debug(
                "transaction_reverted",
                error_type=type(e).__name__,
                error=str(e),
                timestamp=self._timestamp,
            )
            raise
        finally:
            self._depth = 0
