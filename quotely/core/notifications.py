"""
Change notifications.

Services announce state changes through a ``ChangeNotifier``. Delivery is
best effort: a failing notifier is logged and never fails the operation that
triggered it.
"""

from __future__ import annotations

from typing import Any, Protocol

from quotely.core import monitoring
from quotely.core.logging_config import get_logger

logger = get_logger(__name__)

CONTENT_SUBMITTED = "content.submitted"
CONTENT_MODERATED = "content.moderated"
RELATIONSHIP_ADDED = "relationship.added"
RELATIONSHIP_REMOVED = "relationship.removed"


class ChangeNotifier(Protocol):
    """Receiver of change events."""

    def publish(self, event: str, payload: dict[str, Any]) -> None: ...


class LoggingChangeNotifier:
    """Writes each event to the log and forwards it to Logfire when active."""

    def publish(self, event: str, payload: dict[str, Any]) -> None:
        logger.info(f"{event}: {payload}")
        monitoring.log_change_event(event, payload)


def notify(notifier: ChangeNotifier, event: str, payload: dict[str, Any]) -> None:
    """Publish ``event`` and swallow any notifier failure after logging it."""
    try:
        notifier.publish(event, payload)
    except Exception as exc:  # noqa: BLE001
        logger.warning(f"Change notifier failed for {event}: {exc}", exc_info=True)
