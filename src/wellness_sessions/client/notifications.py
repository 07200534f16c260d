"""User-facing notifications for client actions."""

import logging
from dataclasses import dataclass, field
from typing import Protocol


class Notifier(Protocol):
    """Shows short-lived success and failure messages."""

    def success(self, text: str) -> None:
        """Report a successful action."""

    def error(self, text: str) -> None:
        """Report a failed action."""


@dataclass
class LoggingNotifier(Notifier):
    """Notifier that writes messages to the application log."""

    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("wellness_sessions.client")
    )

    def success(self, text: str) -> None:
        self.logger.info(text)

    def error(self, text: str) -> None:
        self.logger.warning(text)
