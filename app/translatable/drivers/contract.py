"""Translation driver contract.

Every storage layout implements TranslationDriver. One driver instance serves
every record of a type for one attribute, so drivers keep no per-record state:
everything record-specific is read from and written to the record's
attribute bag through SupportsAttributes.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from translatable.models import AttributePath
from translatable.query import Predicate


@runtime_checkable
class SupportsAttributes(Protocol):
    """Attribute bag of a host record.

    Hosts may also expose get_fallback_locale() -> Optional[str]; drivers
    look it up with getattr.
    """

    def get_raw_attribute(self, key: str) -> Any:
        """Return the stored value, or None when the attribute is absent."""
        ...

    def has_raw_attribute(self, key: str) -> bool: ...

    def set_raw_attribute(self, key: str, value: Any) -> None:
        """Store a value without running any host casting or mutators."""
        ...


class TranslationDriver(ABC):
    """Abstract base class for all translation storage layouts.

    Attributes:
        supports_nested_paths: Whether attributes like "meta->title" may be
            bound to this layout. Checked by the registry at resolve time.
    """

    supports_nested_paths: ClassVar[bool] = False

    @property
    @abstractmethod
    def path(self) -> AttributePath:
        """Structured location of the managed attribute."""
        pass

    @property
    def attribute(self) -> str:
        """Declared name of the managed attribute."""
        return self.path.name

    @abstractmethod
    def get(self, record: SupportsAttributes, locale: str, with_fallback: bool = True) -> Any:
        """Get the translation for a locale.

        Args:
            record: Record to read from.
            locale: Requested locale.
            with_fallback: Whether another locale may be used when missing.

        Returns:
            The translated value, or the layout's "no value" result.
        """
        pass

    @abstractmethod
    def set(self, record: SupportsAttributes, locale: str, value: Any) -> None:
        """Set the translation for a locale."""
        pass

    @abstractmethod
    def set_many(self, record: SupportsAttributes, translations: Dict[str, Any]) -> None:
        """Set several translations at once (locale -> value)."""
        pass

    @abstractmethod
    def forget(
        self,
        record: SupportsAttributes,
        locale: Optional[str] = None,
        as_null: bool = False,
    ) -> None:
        """Forget the translation for one locale, or all when locale is None.

        Args:
            record: Record to write to.
            locale: Locale to forget; None forgets every locale.
            as_null: When forgetting everything, store null instead of an
                empty value.
        """
        pass

    @abstractmethod
    def all(
        self,
        record: SupportsAttributes,
        allowed_locales: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """Get all translations (locale -> value), filtered by policy."""
        pass

    @abstractmethod
    def locales(self, record: SupportsAttributes) -> List[str]:
        """Get locales that currently hold a translation."""
        pass

    @abstractmethod
    def where_locale(self, record_type: type, locale: str) -> Predicate:
        """Describe "has a translation in locale" for a query."""
        pass

    @abstractmethod
    def where_locales(self, record_type: type, locales: Iterable[str]) -> Predicate:
        """Describe "has a translation in any of locales" for a query."""
        pass
