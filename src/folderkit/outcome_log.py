"""Per-instance record of filesystem operation outcomes."""

import logging
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationOutcome:
    """Outcome of a single filesystem operation.

    Attributes:
        path: Path that was operated on.
        succeeded: Whether the operation succeeded. Informational notes are recorded as
            successes.
        message: Human-readable description of what happened.
    """

    path: str
    succeeded: bool
    message: str


class OutcomeLog:
    """Ordered, append-only record of successes and failures.

    Every bulk operation of a Folder appends one outcome per item it touches. Entries are
    never removed or changed, and successive operations keep appending to the same log;
    use a fresh log (or a fresh Folder) to observe one call in isolation. A log must not be
    shared between threads without external locking.

    Example:
        >>> log = OutcomeLog()
        >>> log.record_success("/srv/a", "/srv/a removed")
        >>> log.record_failure("/srv/b", "/srv/b not removed: Permission denied")
        >>> log.has_errors()
        True
        >>> log.get_errors()
        ['/srv/b not removed: Permission denied']
        >>> log.get_messages()
        ['/srv/a removed']
    """

    def __init__(self) -> None:
        self._outcomes: List[OperationOutcome] = []
        self._messages: List[OperationOutcome] = []
        self._errors: List[OperationOutcome] = []

    def record_success(self, path: str, message: str) -> None:
        outcome = OperationOutcome(path, True, message)
        self._outcomes.append(outcome)
        self._messages.append(outcome)
        logger.debug("%s", message)

    def record_failure(self, path: str, message: str) -> None:
        outcome = OperationOutcome(path, False, message)
        self._outcomes.append(outcome)
        self._errors.append(outcome)
        logger.warning("%s", message)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def get_errors(self) -> List[str]:
        """Get the failure messages in the order they were recorded."""
        return [outcome.message for outcome in self._errors]

    def get_messages(self) -> List[str]:
        """Get the success messages in the order they were recorded."""
        return [outcome.message for outcome in self._messages]

    @property
    def outcomes(self) -> List[OperationOutcome]:
        """All outcomes, successes and failures interleaved, in recording order."""
        return list(self._outcomes)

    @property
    def errors(self) -> List[OperationOutcome]:
        return list(self._errors)
