"""Extra-only layout: every locale, base included, lives in the shared column.

    extra = {"en": {"subtitle": "Base"}, "es": {"subtitle": "Sub"}}

The attribute's own column is never read or written.
"""

from typing import Any, Dict, Iterable, Optional

from translatable.drivers.contract import SupportsAttributes
from translatable.drivers.shared_column import SharedColumnDriver
from translatable.query import Predicate, any_of


class ExtraOnlyDriver(SharedColumnDriver):
    """Stores all locales under shared[locale][attribute]."""

    def get(self, record: SupportsAttributes, locale: str, with_fallback: bool = True) -> Any:
        storage_data = self.get_storage_data(record)
        value = self.read_shared(storage_data, locale)

        if value is not None or not with_fallback:
            return value

        base_locale = self.resolve_base_locale(type(record))
        return self.read_shared(storage_data, base_locale)

    def set(self, record: SupportsAttributes, locale: str, value: Any) -> None:
        old_value = self.get(record, locale, False)

        storage_data = self.get_storage_data(record)
        self.put_shared(storage_data, locale, value)
        self.set_storage_data(record, storage_data)

        self._logger.debug("translation_set", locale=locale)
        self.notify_translation_set(record, locale, old_value, value)

    def forget(
        self,
        record: SupportsAttributes,
        locale: Optional[str] = None,
        as_null: bool = False,
    ) -> None:
        storage_data = self.get_storage_data(record)

        if locale is None:
            changed = self.remove_shared_everywhere(storage_data)
        else:
            changed = self.remove_shared(storage_data, locale)

        if changed:
            self.set_storage_data(record, storage_data)

    def all(
        self,
        record: SupportsAttributes,
        allowed_locales: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        storage_data = self.get_storage_data(record)
        return self.filter_translations(
            self.shared_translations(storage_data), allowed_locales
        )

    def where_locale(self, record_type: type, locale: str) -> Predicate:
        return self.shared_predicate(record_type, locale)

    def where_locales(self, record_type: type, locales: Iterable[str]) -> Predicate:
        return any_of(self.shared_predicate(record_type, locale) for locale in locales)
