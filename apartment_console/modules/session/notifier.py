"""
Token change notifications.

Every component that depends on the session (auth context, user context,
CLI) subscribes here instead of polling the token manager.
"""

import logging
from typing import Callable, Optional

from .interfaces import TokenListener

logger = logging.getLogger(__name__)


class TokenChangeNotifier:
    """Synchronous observable carrying the new access token (or None)."""

    def __init__(self) -> None:
        self._listeners: list[TokenListener] = []

    def subscribe(self, listener: TokenListener) -> Callable[[], None]:
        """Register listener; the returned callable removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def publish(self, token: Optional[str]) -> None:
        """Deliver token to every listener in subscription order."""
        for listener in list(self._listeners):
            try:
                listener(token)
            except Exception:
                logger.exception("Token change listener failed")
