"""Records with translatable attributes.

Record is a minimal attribute bag standing in for a host persistence model;
HasTranslations routes declared attributes through their translation drivers
and leaves every other attribute to the host.

Example:
    class Article(TranslatableRecord):
        translatable = [
            "title",
            {"subtitle": {"driver": "extra_only", "storage_column": "extra"}},
        ]

    registry = TranslationDriverRegistry(get_settings())
    article = Article(registry)
    article["title"] = "Hello"
    article.set_translation("title", "fr", "Bonjour")
    french = Article.using_locale("fr", registry, article.attributes)
    french["title"]  # "Bonjour"
"""

from typing import Any, ClassVar, Dict, Iterable, List, Mapping, Optional, Tuple

from translatable.drivers import TranslationDriver
from translatable.exceptions import AttributeIsNotTranslatable, ConfigurationError
from translatable.models import AttributeConfig, AttributePath, parse_attribute_configs
from translatable.query import Predicate, any_of, not_null
from translatable.registry import TranslationDriverRegistry


class Record:
    """Dict-backed record exposing raw attribute access."""

    casts: ClassVar[Mapping[str, Any]] = {}

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None):
        self.attributes: Dict[str, Any] = dict(attributes or {})

    def get_raw_attribute(self, key: str) -> Any:
        return self.attributes.get(key)

    def has_raw_attribute(self, key: str) -> bool:
        return key in self.attributes

    def set_raw_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def get_attribute_value(self, key: str) -> Any:
        return self.get_raw_attribute(key)

    def set_attribute(self, key: str, value: Any) -> "Record":
        self.set_raw_attribute(key, value)
        return self

    def __getitem__(self, key: str) -> Any:
        return self.get_attribute_value(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set_attribute(key, value)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.attributes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attributes!r})"


class HasTranslations:
    """Mixin adding translatable attributes to a record class.

    The class-level ``translatable`` declaration is parsed once, when the
    class is defined. Each instance binds its attributes to drivers through
    initialize_translations(); drivers are cached per record type by the
    registry, so binding is a dictionary lookup after the first record.

    Class attributes:
        translatable: Declaration of translatable attributes.
        fallback_locale: Record-level fallback locale, overriding settings.
        use_translation_fallback: Record-level switch for attribute reads,
            overriding settings.USE_FALLBACK_LOCALE.
    """

    translatable: ClassVar[Any] = None
    fallback_locale: ClassVar[Optional[str]] = None
    use_translation_fallback: ClassVar[Optional[bool]] = None

    _translatable_configs: ClassVar[Tuple[AttributeConfig, ...]] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._translatable_configs = parse_attribute_configs(cls.translatable)

    def initialize_translations(self, registry: TranslationDriverRegistry) -> "HasTranslations":
        """Bind every declared attribute to its driver.

        Raises:
            ConfigurationError: If an attribute resolves to an unknown driver
                or to a layout that cannot hold it.
        """
        self._translation_registry = registry
        self._translation_drivers: Dict[str, TranslationDriver] = registry.resolve_all(
            type(self), self._translatable_configs
        )
        return self

    # Attribute routing

    def get_attribute_value(self, key: str) -> Any:
        if not self.is_translatable_attribute(key):
            return super().get_attribute_value(key)
        return self.get_translation(key, self.get_locale(), self.use_fallback_locale())

    def set_attribute(self, key: str, value: Any) -> Any:
        if not self.is_translatable_attribute(key):
            return super().set_attribute(key, value)
        if isinstance(value, Mapping):
            return self.set_translations(key, value)
        return self.set_translation(key, self.get_locale(), value)

    def to_dict(self) -> Dict[str, Any]:
        """Raw attributes with each translatable attribute as its locale map."""
        data = super().to_dict()
        data.update(self.translations)
        return data

    # Reading

    def translate(self, key: str, locale: str = "", use_fallback_locale: bool = True) -> Any:
        return self.get_translation(key, locale or self.get_locale(), use_fallback_locale)

    def get_translation(self, key: str, locale: str, use_fallback_locale: bool = True) -> Any:
        return self._driver(key).get(self, locale, use_fallback_locale)

    def get_translation_with_fallback(self, key: str, locale: str) -> Any:
        return self.get_translation(key, locale, True)

    def get_translation_without_fallback(self, key: str, locale: str) -> Any:
        return self.get_translation(key, locale, False)

    def get_translations(
        self,
        key: Optional[str] = None,
        allowed_locales: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """Get translations of one attribute, or of every attribute when key is None.

        Args:
            key: Attribute name, or None for all translatable attributes.
            allowed_locales: Restrict the result to these locales.

        Returns:
            locale -> value for a key; attribute -> (locale -> value) otherwise.
        """
        if key is not None:
            return self._driver(key).all(self, allowed_locales)

        if allowed_locales is not None:
            allowed_locales = list(allowed_locales)

        return {
            attribute: self._driver(attribute).all(self, allowed_locales)
            for attribute in self.get_translatable_attributes()
        }

    @property
    def translations(self) -> Dict[str, Dict[str, Any]]:
        return self.get_translations()

    def get_translated_locales(self, key: str) -> List[str]:
        return self._driver(key).locales(self)

    def locales(self) -> List[str]:
        """Locales translated in at least one attribute, in first-seen order."""
        seen: Dict[str, None] = {}
        for attribute in self.get_translatable_attributes():
            for locale in self.get_translated_locales(attribute):
                seen.setdefault(locale, None)
        return list(seen)

    def has_translation(self, key: str, locale: Optional[str] = None) -> bool:
        locale = locale or self.get_locale()
        return self.get_translations(key).get(locale) is not None

    # Writing

    def set_translation(self, key: str, locale: str, value: Any) -> "HasTranslations":
        self._driver(key).set(self, locale, value)
        return self

    def set_translations(self, key: str, translations: Mapping[str, Any]) -> "HasTranslations":
        self._driver(key).set_many(self, translations)
        return self

    def replace_translations(self, key: str, translations: Mapping[str, Any]) -> "HasTranslations":
        for locale in self.get_translated_locales(key):
            self.forget_translation(key, locale)
        return self.set_translations(key, translations)

    def forget_translation(self, key: str, locale: str) -> "HasTranslations":
        self._driver(key).forget(self, locale)
        return self

    def forget_translations(self, key: str, as_null: bool = False) -> "HasTranslations":
        self._driver(key).forget(self, None, as_null)
        return self

    def forget_all_translations(self, locale: str) -> "HasTranslations":
        for attribute in self.get_translatable_attributes():
            self.forget_translation(attribute, locale)
        return self

    # Locale state

    def set_locale(self, locale: Optional[str]) -> "HasTranslations":
        self._translation_locale = locale
        return self

    def get_locale(self) -> str:
        locale = getattr(self, "_translation_locale", None)
        if locale:
            return locale
        return self._registry().config.LOCALE

    @classmethod
    def using_locale(cls, locale: str, *args, **kwargs) -> "HasTranslations":
        """Build a record and set its locale."""
        record = cls(*args, **kwargs)
        record.set_locale(locale)
        return record

    def get_fallback_locale(self) -> Optional[str]:
        return self.fallback_locale

    def use_fallback_locale(self) -> bool:
        if self.use_translation_fallback is not None:
            return self.use_translation_fallback
        return self._registry().config.USE_FALLBACK_LOCALE

    # Declaration

    def is_translatable_attribute(self, key: str) -> bool:
        return key in self.get_translatable_attributes()

    @classmethod
    def get_translatable_attributes(cls) -> List[str]:
        return [config.name for config in cls._translatable_configs]

    @classmethod
    def get_translatable_config(cls, key: str) -> Optional[AttributeConfig]:
        for config in cls._translatable_configs:
            if config.name == key:
                return config
        return None

    # Query predicates

    @classmethod
    def where_locale(
        cls, registry: TranslationDriverRegistry, column: str, locale: str
    ) -> Predicate:
        """Predicate matching records translated in locale for column.

        Undeclared columns are treated as json layout columns.
        """
        config = cls.get_translatable_config(column)
        if config is None:
            path = AttributePath.from_string(column)
            return not_null(path.column, *path.segments, locale)
        return registry.resolve(cls, config).where_locale(cls, locale)

    @classmethod
    def where_locales(
        cls, registry: TranslationDriverRegistry, column: str, locales: Iterable[str]
    ) -> Predicate:
        config = cls.get_translatable_config(column)
        if config is None:
            return any_of(cls.where_locale(registry, column, locale) for locale in locales)
        return registry.resolve(cls, config).where_locales(cls, locales)

    def _registry(self) -> TranslationDriverRegistry:
        registry = getattr(self, "_translation_registry", None)
        if registry is None:
            raise ConfigurationError(
                f"Translations of {type(self).__name__} are not initialized; "
                "call initialize_translations() first"
            )
        return registry

    def _driver(self, key: str) -> TranslationDriver:
        if not self.is_translatable_attribute(key):
            raise AttributeIsNotTranslatable(key, self)
        self._registry()
        return self._translation_drivers[key]


class TranslatableRecord(HasTranslations, Record):
    """Record with translatable attributes bound at construction."""

    def __init__(
        self,
        registry: TranslationDriverRegistry,
        attributes: Optional[Mapping[str, Any]] = None,
        locale: Optional[str] = None,
    ):
        super().__init__(attributes)
        self._translation_locale = locale
        self.initialize_translations(registry)
