"""Base driver with locale fallback and translation filtering.

Shared by every layout: locale resolution with fallback, null/empty/locale
filtering of enumerated translations, option lookup and event notification.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from translatable.configuration import TranslatableSettings
from translatable.drivers.contract import SupportsAttributes, TranslationDriver
from translatable.events import EventSink, NullEventSink, TranslationHasBeenSet
from translatable.logging import get_module_logger
from translatable.models import AttributePath

logger = get_module_logger()


class AbstractTranslationDriver(TranslationDriver):
    """Base class for translation drivers.

    Subclasses implement the storage layout (get, set, forget, all and the
    query predicates); this class provides the policy shared by all layouts.

    Attributes:
        config: Package-wide settings (fallback and filtering policy).
        options: Driver options from the attribute declaration.
        events: Sink receiving TranslationHasBeenSet notifications.
    """

    def __init__(
        self,
        attribute: Union[str, AttributePath],
        config: TranslatableSettings,
        options: Optional[Mapping[str, Any]] = None,
        events: Optional[EventSink] = None,
    ):
        """Initialize the driver.

        Args:
            attribute: Attribute name or parsed path.
            config: Package-wide settings.
            options: Driver options (storage_column, base_locale, ...).
            events: Event sink; events are dropped when not provided.
        """
        if isinstance(attribute, str):
            attribute = AttributePath.from_string(attribute)
        self._path = attribute
        self.config = config
        self.options: Dict[str, Any] = dict(options or {})
        self.events: EventSink = events or NullEventSink()
        self._logger = logger.bind(
            driver=type(self).__name__, attribute=self._path.name
        )

    @property
    def path(self) -> AttributePath:
        return self._path

    def set_many(self, record: SupportsAttributes, translations: Mapping[str, Any]) -> None:
        for locale, value in translations.items():
            self.set(record, locale, value)

    def locales(self, record: SupportsAttributes) -> List[str]:
        return list(self.all(record).keys())

    def get_fallback_locale(self, record: SupportsAttributes) -> Optional[str]:
        """Get fallback locale for the record.

        The record's own get_fallback_locale() wins when it exposes one and
        returns a locale; otherwise the configured fallback locale is used.
        """
        record_fallback = getattr(record, "get_fallback_locale", None)
        if callable(record_fallback):
            fallback_locale = record_fallback()
            if fallback_locale is not None:
                return fallback_locale
        return self.config.FALLBACK_LOCALE

    def resolve_locale(
        self, record: SupportsAttributes, locale: str, use_fallback_locale: bool
    ) -> str:
        """Pick the locale a read should use.

        Args:
            record: Record being read.
            locale: Requested locale.
            use_fallback_locale: Whether another locale may be substituted.

        Returns:
            The requested locale if it has a translation or fallback is off;
            otherwise the fallback locale if translated, otherwise the first
            translated locale when FALLBACK_ANY is on, otherwise the
            requested locale.
        """
        translated_locales = self.locales(record)

        if locale in translated_locales:
            return locale

        if not use_fallback_locale:
            return locale

        fallback_locale = self.get_fallback_locale(record)
        if fallback_locale is not None and fallback_locale in translated_locales:
            return fallback_locale

        if translated_locales and self.config.FALLBACK_ANY:
            return translated_locales[0]

        return locale

    def filter_translations(
        self,
        translations: Mapping[str, Any],
        allowed_locales: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """Filter translations based on allowed locales and null/empty settings."""
        allowed = None if allowed_locales is None else set(allowed_locales)
        return {
            locale: value
            for locale, value in translations.items()
            if self._should_include_translation(value, locale, allowed)
        }

    def _should_include_translation(
        self, value: Any, locale: str, allowed_locales: Optional[set]
    ) -> bool:
        if value is None and not self.config.ALLOW_NULL_FOR_TRANSLATION:
            return False

        if value == "" and not self.config.ALLOW_EMPTY_STRING_FOR_TRANSLATION:
            return False

        if allowed_locales is not None and locale not in allowed_locales:
            return False

        return True

    def get_option(self, key: str, default: Any = None) -> Any:
        """Get option value, treating an explicit None as missing."""
        value = self.options.get(key)
        return default if value is None else value

    def notify_translation_set(
        self,
        record: SupportsAttributes,
        locale: str,
        old_value: Any,
        new_value: Any,
    ) -> None:
        """Push a TranslationHasBeenSet event to the sink.

        Sink failures are logged and never undo or interrupt the write.
        """
        event = TranslationHasBeenSet(
            record=record,
            key=self.attribute,
            locale=locale,
            old_value=old_value,
            new_value=new_value,
        )
        try:
            self.events.dispatch(event)
        except Exception:
            self._logger.exception(
                "translation_event_dispatch_failed",
                locale=locale,
                correlation_id=str(event.correlation_id),
            )
