"""Shared JSON column support for the hybrid and extra_only layouts.

The shared column is keyed by locale first and attribute second, so several
translatable attributes can live in one physical column:

    extra = {"es": {"title": "Hola", "subtitle": "Sub"}, "fr": {"title": "Salut"}}
"""

from typing import Any, Dict, Mapping, Optional, Union

from translatable.codecs import StorageCodec
from translatable.configuration import TranslatableSettings
from translatable.drivers.base import AbstractTranslationDriver
from translatable.drivers.contract import SupportsAttributes
from translatable.events import EventSink
from translatable.models import AttributePath
from translatable.query import NotNull, not_null

DEFAULT_STORAGE_COLUMN = "translations"
DEFAULT_BASE_LOCALE = "en"


class SharedColumnDriver(AbstractTranslationDriver):
    """Base class for layouts that keep translations in a shared JSON column.

    The storage column and base locale only depend on static configuration,
    so they are resolved once per driver instance and memoized.
    """

    supports_nested_paths = False

    def __init__(
        self,
        attribute: Union[str, AttributePath],
        config: TranslatableSettings,
        options: Optional[Mapping[str, Any]] = None,
        events: Optional[EventSink] = None,
    ):
        super().__init__(attribute, config, options, events)
        self._cached_storage_column: Optional[str] = None
        self._cached_base_locale: Optional[str] = None

    def resolve_storage_column(self, record_type: type) -> str:
        """Resolve the shared column name.

        Order: storage_column option, the record type's EXTRA_JSON_COLUMN,
        settings.STORAGE_COLUMN, "translations".
        """
        if self._cached_storage_column is not None:
            return self._cached_storage_column

        self._cached_storage_column = (
            self.get_option("storage_column")
            or getattr(record_type, "EXTRA_JSON_COLUMN", None)
            or self.config.STORAGE_COLUMN
            or DEFAULT_STORAGE_COLUMN
        )
        return self._cached_storage_column

    def resolve_base_locale(self, record_type: type) -> str:
        """Resolve the base locale.

        Order: base_locale option, the record type's BASE_LOCALE,
        settings.BASE_LOCALE, settings.FALLBACK_LOCALE, "en".
        """
        if self._cached_base_locale is not None:
            return self._cached_base_locale

        self._cached_base_locale = (
            self.get_option("base_locale")
            or getattr(record_type, "BASE_LOCALE", None)
            or self.config.BASE_LOCALE
            or self.config.FALLBACK_LOCALE
            or DEFAULT_BASE_LOCALE
        )
        return self._cached_base_locale

    def get_storage_data(self, record: SupportsAttributes) -> Dict[str, Any]:
        column = self.resolve_storage_column(type(record))
        return StorageCodec.decode(record.get_raw_attribute(column))

    def set_storage_data(self, record: SupportsAttributes, data: Dict[str, Any]) -> None:
        column = self.resolve_storage_column(type(record))
        record.set_raw_attribute(column, StorageCodec.encode(data))

    def read_shared(self, storage_data: Dict[str, Any], locale: str) -> Any:
        """Value at storage_data[locale][attribute], or None."""
        bucket = storage_data.get(locale)
        if not isinstance(bucket, dict):
            return None
        return bucket.get(self.attribute)

    def put_shared(self, storage_data: Dict[str, Any], locale: str, value: Any) -> None:
        bucket = storage_data.get(locale)
        if not isinstance(bucket, dict):
            bucket = {}
            storage_data[locale] = bucket
        bucket[self.attribute] = value

    def remove_shared(self, storage_data: Dict[str, Any], locale: str) -> bool:
        """Remove storage_data[locale][attribute], pruning an emptied bucket.

        Returns:
            True if something was removed.
        """
        bucket = storage_data.get(locale)
        if not isinstance(bucket, dict) or self.attribute not in bucket:
            return False

        del bucket[self.attribute]
        if not bucket:
            del storage_data[locale]
        return True

    def remove_shared_everywhere(self, storage_data: Dict[str, Any]) -> bool:
        removed = False
        for locale in list(storage_data):
            removed = self.remove_shared(storage_data, locale) or removed
        return removed

    def shared_translations(self, storage_data: Dict[str, Any]) -> Dict[str, Any]:
        """Locale -> value for every bucket holding this attribute."""
        translations = {}
        for locale, bucket in storage_data.items():
            if isinstance(bucket, dict) and bucket.get(self.attribute) is not None:
                translations[locale] = bucket[self.attribute]
        return translations

    def shared_predicate(self, record_type: type, locale: str) -> NotNull:
        storage_column = self.resolve_storage_column(record_type)
        return not_null(storage_column, locale, self.attribute)
