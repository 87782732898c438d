"""
Simple GeolocationProvider and Notifier implementations for headless use.
"""

import logging
from typing import List, Optional

from client.ports import GeolocationError
from domain.models import Coordinates

logger = logging.getLogger(__name__)


class FixedGeolocation:
    """Reports a configured position; with no position it reports failure."""

    def __init__(self, position: Optional[Coordinates]):
        self._position = position

    async def current_position(self) -> Coordinates:
        if self._position is None:
            raise GeolocationError("No position configured")
        return self._position


class LoggingNotifier:
    """Writes user notices to the log and keeps them for later display."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        logger.warning(message)
        self.messages.append(message)
