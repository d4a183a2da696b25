"""Translation event notifications.

Usage:

    from translatable.events import EventDispatcher, TRANSLATION_SET

    dispatcher = EventDispatcher()

    @dispatcher.register_handler(TRANSLATION_SET)
    def handle_translation_set(event):
        print(event.key, event.locale, event.old_value, event.new_value)

    registry = TranslationDriverRegistry(settings, events=dispatcher)
"""

from translatable.events.dispatcher import (
    EventDispatcher,
    EventHandler,
    EventSink,
    NullEventSink,
)
from translatable.events.models import TRANSLATION_SET, Event, TranslationHasBeenSet

__all__ = [
    "Event",
    "TranslationHasBeenSet",
    "TRANSLATION_SET",
    "EventSink",
    "EventHandler",
    "EventDispatcher",
    "NullEventSink",
]
