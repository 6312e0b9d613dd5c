"""User-facing failure notifications.

The dispatcher reports total detection failures through a notifier
instead of raising, so one bad upload never aborts a batch.
"""

from __future__ import annotations

from typing import Protocol

from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class Notifier(Protocol):
    """Fire-and-forget channel for user-visible failure messages."""

    def failure(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that logs each message and remembers what it sent."""

    def __init__(self) -> None:
        self._messages: list[str] = []

    def failure(self, message: str) -> None:
        """Record and log one failure message."""
        self._messages.append(message)
        _LOGGER.warning("intake_failure_notified", message=message)

    @property
    def messages(self) -> tuple[str, ...]:
        """Return every message sent so far, oldest first."""
        return tuple(self._messages)

    def clear(self) -> None:
        """Forget previously sent messages."""
        self._messages.clear()
