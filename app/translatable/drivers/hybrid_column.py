"""Hybrid layout: base locale in a plain column, other locales in a shared column.

    title = "Hello"                                   (base locale)
    extra = {"es": {"title": "Hola"}, "fr": {"title": "Salut"}}

Reading the base locale touches only the plain column. The base locale's
value is never kept in the shared column unless the force_base_in_storage
option asks for a duplicate there.
"""

from typing import Any, Dict, Iterable, Optional

from translatable.drivers.contract import SupportsAttributes
from translatable.drivers.shared_column import SharedColumnDriver
from translatable.query import Predicate, any_of, not_null


class HybridColumnDriver(SharedColumnDriver):
    """Base locale in the attribute's own column, the rest in a shared column."""

    def get(self, record: SupportsAttributes, locale: str, with_fallback: bool = True) -> Any:
        base_locale = self.resolve_base_locale(type(record))

        if locale == base_locale:
            return record.get_raw_attribute(self.attribute)

        storage_data = self.get_storage_data(record)
        value = self.read_shared(storage_data, locale)

        if value is not None or not with_fallback:
            return value

        value = self.read_shared(storage_data, base_locale)
        if value is not None:
            return value

        return record.get_raw_attribute(self.attribute)

    def set(self, record: SupportsAttributes, locale: str, value: Any) -> None:
        base_locale = self.resolve_base_locale(type(record))
        old_value = self.get(record, locale, False)

        storage_data = self.get_storage_data(record)

        if locale == base_locale:
            record.set_raw_attribute(self.attribute, value)

            if self.get_option("force_base_in_storage", False):
                self.put_shared(storage_data, base_locale, value)
                self.set_storage_data(record, storage_data)
            elif self.remove_shared(storage_data, base_locale):
                self.set_storage_data(record, storage_data)
        else:
            self.put_shared(storage_data, locale, value)
            self.set_storage_data(record, storage_data)

        self._logger.debug(
            "translation_set", locale=locale, is_base=locale == base_locale
        )
        self.notify_translation_set(record, locale, old_value, value)

    def forget(
        self,
        record: SupportsAttributes,
        locale: Optional[str] = None,
        as_null: bool = False,
    ) -> None:
        base_locale = self.resolve_base_locale(type(record))
        cleared_value = None if as_null else ""
        storage_data = self.get_storage_data(record)

        if locale is None:
            record.set_raw_attribute(self.attribute, cleared_value)
            if self.remove_shared_everywhere(storage_data):
                self.set_storage_data(record, storage_data)
            return

        if locale == base_locale:
            if record.get_raw_attribute(self.attribute) is not None:
                record.set_raw_attribute(self.attribute, cleared_value)

        if self.remove_shared(storage_data, locale):
            self.set_storage_data(record, storage_data)

    def all(
        self,
        record: SupportsAttributes,
        allowed_locales: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        base_locale = self.resolve_base_locale(type(record))
        translations: Dict[str, Any] = {}

        base_value = record.get_raw_attribute(self.attribute)
        if base_value is not None:
            translations[base_locale] = base_value

        storage_data = self.get_storage_data(record)
        for locale, value in self.shared_translations(storage_data).items():
            # The plain column is authoritative for the base locale
            if locale == base_locale and base_locale in translations:
                continue
            translations[locale] = value

        return self.filter_translations(translations, allowed_locales)

    def where_locale(self, record_type: type, locale: str) -> Predicate:
        if locale == self.resolve_base_locale(record_type):
            return not_null(self.attribute)
        return self.shared_predicate(record_type, locale)

    def where_locales(self, record_type: type, locales: Iterable[str]) -> Predicate:
        return any_of(self.where_locale(record_type, locale) for locale in locales)
