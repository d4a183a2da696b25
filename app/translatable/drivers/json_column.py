"""JSON column layout.

All locales of an attribute live in one JSON object stored in the attribute's
own column:

    title = {"en": "Hello", "fr": "Bonjour"}

A nested attribute ("meta->title") addresses a key inside a larger JSON
object; sibling keys of that object are left untouched on write:

    meta = {"title": {"en": "Hello"}, "author": "Ana"}
"""

from typing import Any, Dict, Iterable, Optional

from translatable.codecs import StorageCodec
from translatable.drivers.base import AbstractTranslationDriver
from translatable.drivers.contract import SupportsAttributes
from translatable.query import Predicate, any_of, not_null


class JsonColumnDriver(AbstractTranslationDriver):
    """Stores every locale of an attribute in a JSON column."""

    supports_nested_paths = True

    def get(self, record: SupportsAttributes, locale: str, with_fallback: bool = True) -> Any:
        normalized_locale = self.resolve_locale(record, locale, with_fallback)
        is_key_missing_from_locale = locale != normalized_locale

        if record.get_raw_attribute(self.path.column) is None:
            translation = None
        else:
            translation = self.all(record).get(normalized_locale)
            if translation is None and not self.config.ALLOW_NULL_FOR_TRANSLATION:
                translation = ""

        callback = self.config.missing_key_callback
        if is_key_missing_from_locale and callback is not None:
            try:
                callback_value = callback(
                    record,
                    self.attribute,
                    locale,
                    translation,
                    normalized_locale,
                )
            except Exception:
                self._logger.warning(
                    "missing_key_callback_failed",
                    locale=locale,
                    fallback_locale=normalized_locale,
                    exc_info=True,
                )
            else:
                if isinstance(callback_value, str):
                    translation = callback_value

        return translation

    def set(self, record: SupportsAttributes, locale: str, value: Any) -> None:
        translations = self._read(record)
        old_value = translations.get(locale, "")

        translations[locale] = value
        self._write(record, translations)

        self._logger.debug("translation_set", locale=locale)
        self.notify_translation_set(record, locale, old_value, value)

    def forget(
        self,
        record: SupportsAttributes,
        locale: Optional[str] = None,
        as_null: bool = False,
    ) -> None:
        if locale is None:
            if as_null:
                self._write(record, None)
            elif self._read(record):
                self._write(record, {})
            return

        translations = self._read(record)
        if locale not in translations:
            return

        del translations[locale]
        self._write(record, translations)

    def all(
        self,
        record: SupportsAttributes,
        allowed_locales: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        return self.filter_translations(self._read(record), allowed_locales)

    def where_locale(self, record_type: type, locale: str) -> Predicate:
        return not_null(self.path.column, *self.path.segments, locale)

    def where_locales(self, record_type: type, locales: Iterable[str]) -> Predicate:
        return any_of(self.where_locale(record_type, locale) for locale in locales)

    def _read(self, record: SupportsAttributes) -> Dict[str, Any]:
        """Decode the unfiltered locale map, following the nested path."""
        translations: Any = StorageCodec.decode(record.get_raw_attribute(self.path.column))

        for segment in self.path.segments:
            if not isinstance(translations, dict):
                return {}
            translations = translations.get(segment)

        if not isinstance(translations, dict):
            return {}

        return dict(translations)

    def _write(self, record: SupportsAttributes, translations: Optional[Dict[str, Any]]) -> None:
        """Store the locale map (or None) at the attribute's location."""
        column = self.path.column

        if not self.path.is_nested:
            value = None if translations is None else StorageCodec.encode(translations)
            record.set_raw_attribute(column, value)
            return

        container = StorageCodec.decode(record.get_raw_attribute(column))
        node = container
        for segment in self.path.segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[self.path.segments[-1]] = translations

        record.set_raw_attribute(column, StorageCodec.encode(container))
