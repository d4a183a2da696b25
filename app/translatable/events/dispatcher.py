"""Event sinks for translation notifications.

Drivers push events to whatever sink they were built with. EventDispatcher
is an in-process sink with a per-instance handler registry; handlers are
called synchronously and a failing handler never stops the others or the
write that produced the event.
"""

from typing import Any, Callable, Dict, List, Protocol, runtime_checkable

from translatable.events.models import Event
from translatable.logging import get_module_logger

logger = get_module_logger()

EventHandler = Callable[[Event], Any]


@runtime_checkable
class EventSink(Protocol):
    """Receives events. Delivery is fire-and-forget."""

    def dispatch(self, event: Event) -> Any: ...


class NullEventSink:
    """Sink that drops every event."""

    def dispatch(self, event: Event) -> None:
        return None


class EventDispatcher:
    """In-process event dispatcher with a handler registry.

    Example:
        dispatcher = EventDispatcher()

        @dispatcher.register_handler(TRANSLATION_SET)
        def audit_translation(event: TranslationHasBeenSet) -> None:
            ...

        registry = TranslationDriverRegistry(settings, events=dispatcher)
    """

    def __init__(self):
        self._handlers: Dict[str, List[EventHandler]] = {}

    def register_handler(self, event_type: str):
        """Decorator to register an event handler for a specific event type.

        Args:
            event_type: The type of event to handle (e.g., 'translation.set').

        Returns:
            Decorator function that registers the handler.
        """

        def decorator(handler_func: EventHandler) -> EventHandler:
            self._handlers.setdefault(event_type, []).append(handler_func)
            logger.debug(
                "registered_event_handler",
                handler=getattr(handler_func, "__name__", "unknown"),
                event_type=event_type,
                total_handlers=len(self._handlers[event_type]),
            )
            return handler_func

        return decorator

    def dispatch(self, event: Event) -> List[Any]:
        """Dispatch event synchronously to all registered handlers.

        If a handler raises an exception, it is caught and logged, and
        processing continues with remaining handlers.

        Args:
            event: The event to dispatch.

        Returns:
            List of return values from handlers that succeeded.
        """
        results = []
        handlers = self._handlers.get(event.event_type, [])

        logger.debug(
            "dispatching_event",
            event_type=event.event_type,
            handler_count=len(handlers),
            correlation_id=str(event.correlation_id),
        )

        for handler in handlers:
            try:
                results.append(handler(event))
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    handler=getattr(handler, "__name__", "unknown"),
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                )

        return results

    def get_registered_events(self) -> List[str]:
        return list(self._handlers.keys())

    def get_handlers_for_event(self, event_type: str) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))

    def clear_handlers(self) -> None:
        """Clear all registered handlers."""
        self._handlers.clear()
        logger.debug("cleared_all_event_handlers")
