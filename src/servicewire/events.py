"""
In-process event broker connecting event sources to event listeners.

Listeners handle an event named ``Saved`` with a method called ``OnSaved``.
Sources get a notifier attribute called ``_notifySaved`` that dispatches to
every listener subscribed at the time of the call.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

HANDLER_PREFIX = "On"
NOTIFIER_PREFIX = "_notify"


def handler_name(event: str) -> str:
    """Name of the listener method that handles an event."""
    return f"{HANDLER_PREFIX}{event}"


def notifier_name(event: str) -> str:
    """Name of the source attribute that raises an event."""
    return f"{NOTIFIER_PREFIX}{event}"


@dataclass(frozen=True)
class Subscription:
    """A listener instance paired with its resolved handler."""

    listener: Any
    handler: Callable[..., Any]


class EventBroker:
    """Dispatches named events to subscribed listener instances."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[Subscription]] = defaultdict(list)

    def subscribe(self, event: str, listener: Any) -> bool:
        """
        Subscribe a listener instance to an event.

        The handler is resolved once, here. Listeners without a handler
        method for the event are skipped.

        Returns:
            True if the listener is subscribed after the call
        """
        handler = getattr(listener, handler_name(event), None)
        if not callable(handler):
            logger.debug("%r has no %s, not subscribed", listener, handler_name(event))
            return False

        subscriptions = self._subscriptions[event]
        if any(s.listener is listener for s in subscriptions):
            return True

        subscriptions.append(Subscription(listener, handler))
        logger.debug("Subscribed %r to %s", listener, event)
        return True

    def notify(self, event: str, args: Sequence[Any] | None = None) -> None:
        """
        Call the handler of every listener subscribed to the event.

        Handlers run in subscription order. Return values are discarded and
        an exception raised by a handler propagates, so later listeners are
        not called.
        """
        args = tuple(args or ())
        subscriptions = list(self._subscriptions.get(event, ()))
        logger.debug("Dispatching %s to %d listener(s)", event, len(subscriptions))

        for subscription in subscriptions:
            subscription.handler(*args)

    def notifier(self, event: str) -> Callable[..., None]:
        """Create a function that raises the event with its positional arguments."""

        def notify(*args: Any) -> None:
            self.notify(event, args)

        notify.__name__ = notifier_name(event)
        return notify

    def listeners(self, event: str) -> list[Any]:
        """Get the listener instances subscribed to an event."""
        return [s.listener for s in self._subscriptions.get(event, ())]

    def events(self) -> list[str]:
        """Get the events that have at least one subscriber."""
        return [event for event, subs in self._subscriptions.items() if subs]
