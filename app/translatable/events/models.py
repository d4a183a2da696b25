"""Event models for translation notifications."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict
from uuid import UUID, uuid4

TRANSLATION_SET = "translation.set"


@dataclass
class Event:
    """Base class for all events.

    Events are records of something that happened, pushed to an EventSink.
    """

    event_type: str
    """The type of event (e.g., 'translation.set')."""

    timestamp: datetime = field(default_factory=datetime.now)
    """When the event occurred."""

    correlation_id: UUID = field(default_factory=uuid4)
    """Unique ID to track related events."""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Custom metadata for this event type."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event to dictionary.

        Returns:
            Dictionary with ISO format timestamp and UUID as string.
        """
        return {
            "event_type": self.event_type,
            "timestamp": self.timestamp.isoformat(),
            "correlation_id": str(self.correlation_id),
            "metadata": dict(self.metadata),
        }

    def __hash__(self) -> int:
        """Hash based on correlation_id and timestamp."""
        return hash((self.correlation_id, self.timestamp))


@dataclass(kw_only=True)
class TranslationHasBeenSet(Event):
    """Emitted after a driver wrote a translation into a record.

    Attributes:
        record: The record that was written to.
        key: Translatable attribute name.
        locale: Locale that was written.
        old_value: Value before the write.
        new_value: Value after the write.
    """

    event_type: str = TRANSLATION_SET
    record: Any
    key: str
    locale: str
    old_value: Any = None
    new_value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            record_type=type(self.record).__name__,
            key=self.key,
            locale=self.locale,
            old_value=self.old_value,
            new_value=self.new_value,
        )
        return data

    __hash__ = Event.__hash__
