"""Outbound event notifications.

The host application owns the event bus; msgcatalog only announces
conditions to it. Emission is fire-and-forget: a failing subscriber is
logged and never breaks message rendering.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from msgcatalog.constants import EVENT_MISSING_LOCALE, EVENT_MISSING_TRANSLATION

__all__ = [
    "EVENT_MISSING_LOCALE",
    "EVENT_MISSING_TRANSLATION",
    "EventEmitter",
    "emit_event",
]

logger = logging.getLogger(__name__)


class EventEmitter(Protocol):
    """Protocol for the host application's event bus.

    Example:
        >>> class PrintEmitter:
        ...     def emit(self, event: str, payload: Mapping[str, Any]) -> None:
        ...         print(event, dict(payload))
        >>> manager = CatalogManager(config, emitter=PrintEmitter())
    """

    def emit(self, event: str, payload: Mapping[str, Any]) -> None:
        """Deliver ``payload`` to subscribers of ``event``."""


def emit_event(
    emitter: EventEmitter | None,
    event: str,
    payload: Mapping[str, Any],
) -> None:
    """Emit an event if an emitter is configured.

    Args:
        emitter: Event bus, or None when the application did not provide one
        event: Event name (see EVENT_* constants)
        payload: Event payload
    """
    if emitter is None:
        return
    try:
        emitter.emit(event, payload)
    except Exception:  # pylint: disable=broad-exception-caught
        logger.warning("Event emitter failed for '%s'", event, exc_info=True)
