"""Conversation history store shared by the pipeline's generation calls."""
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Tuple

from models.conversation import Role, Turn
from services.errors import EmptyHistoryError

logger = logging.getLogger(__name__)


class ConversationHistory:
    """
    Ordered, append-only log of turns with single-step rollback.

    Outside an in-flight query transformation the log alternates
    user, model, user, model... starting with user. One instance belongs
    to exactly one conversation; never share it across concurrent questions.
    """

    def __init__(self):
        self._turns: List[Turn] = []
        self._lock = threading.Lock()

    def append(self, turn: Turn) -> None:
        """Add a turn to the end of the log."""
        with self._lock:
            self._turns.append(turn)
        logger.debug(f"Appended {turn.role.value} turn (history length {len(self)})")

    def remove_last(self) -> Turn:
        """
        Remove and return the most recently appended turn.

        Raises:
            EmptyHistoryError: If the history has no turns
        """
        with self._lock:
            if not self._turns:
                raise EmptyHistoryError("Cannot remove a turn from an empty history")
            turn = self._turns.pop()
        logger.debug(f"Removed trailing {turn.role.value} turn (history length {len(self)})")
        return turn

    def snapshot(self) -> Tuple[Turn, ...]:
        """Return an immutable, ordered copy of the current turns."""
        with self._lock:
            return tuple(self._turns)

    @contextmanager
    def transient_turn(self, turn: Turn) -> Iterator[Tuple[Turn, ...]]:
        """
        Append ``turn`` for the duration of the block and remove it on exit.

        Yields the snapshot that includes the transient turn. The turn is
        removed on every exit path, including exceptions raised in the block.
        """
        self.append(turn)
        try:
            yield self.snapshot()
        finally:
            self.remove_last()

    def is_alternating(self) -> bool:
        """Check that the log holds only completed user/model exchanges."""
        turns = self.snapshot()
        if len(turns) % 2:
            return False
        expected = (Role.USER, Role.MODEL)
        return all(turn.role == expected[i % 2] for i, turn in enumerate(turns))

    def __len__(self) -> int:
        with self._lock:
            return len(self._turns)
