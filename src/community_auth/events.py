"""
community_auth.events  ──  Observer hooks for registry notifications
"""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict, Iterable, Set, Type

import structlog

from .core.notifications import CommunityCreated, CouncilChanged, Notification

log = structlog.get_logger(__name__)

Handler = Callable[[Notification], None]


class EventRegistry:
    """Central registry for notification handlers"""

    def __init__(self):
        # Maps notification class name -> set of handlers
        self._handlers: Dict[str, Set[Handler]] = defaultdict(set)

    def register(self, kinds: tuple[Type[Notification], ...], handler: Handler) -> None:
        for cls in kinds:
            self._handlers[cls.__name__].add(handler)

    def unregister(self, handler: Handler) -> None:
        for handlers in self._handlers.values():
            handlers.discard(handler)

    def clear(self) -> None:
        self._handlers.clear()

    def emit(self, notification: Notification) -> None:
        """Deliver to every handler registered for the class or a parent.

        Delivery is fire and forget: a failing handler is logged and the
        remaining handlers still run.
        """
        handlers: Set[Handler] = set()
        for cls in notification.__class__.__mro__:
            handlers.update(self._handlers.get(cls.__name__, ()))

        for handler in handlers:
            try:
                handler(notification)
            except Exception:
                log.exception(
                    "notification_handler_failed",
                    handler=getattr(handler, "__qualname__", repr(handler)),
                    notification=notification.__class__.__name__,
                    community_id=notification.community_id,
                )

    def emit_all(self, notifications: Iterable[Notification]) -> None:
        for notification in notifications:
            self.emit(notification)


# Global registry instance
_registry = EventRegistry()


class OnDecorator:
    """Namespace for notification decorators"""

    @staticmethod
    def created(func: Handler) -> Handler:
        """Handle ``CommunityCreated`` notifications"""
        _registry.register((CommunityCreated,), func)
        return func

    @staticmethod
    def council_changed(func: Handler) -> Handler:
        """Handle ``CouncilChanged`` notifications"""
        _registry.register((CouncilChanged,), func)
        return func

    @staticmethod
    def any(func: Handler) -> Handler:
        _registry.register((Notification,), func)
        return func


# Export the decorator interface
on = OnDecorator()


def default_registry() -> EventRegistry:
    return _registry
