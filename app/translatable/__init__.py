"""Translatable record attributes with pluggable storage layouts.

Usage:

    from translatable import TranslatableRecord, TranslationDriverRegistry

    class Article(TranslatableRecord):
        translatable = ["title", {"subtitle": {"driver": "hybrid"}}]

    registry = TranslationDriverRegistry()
    article = Article(registry, {"subtitle": "Base"})
    article.set_translation("title", "fr", "Bonjour")
"""

from translatable.casts import ExtraOnlyTranslatable, HybridTranslatable
from translatable.codecs import StorageCodec
from translatable.configuration import TranslatableSettings, get_settings
from translatable.drivers import (
    AbstractTranslationDriver,
    ExtraOnlyDriver,
    HybridColumnDriver,
    JsonColumnDriver,
    TranslationDriver,
)
from translatable.events import EventDispatcher, TranslationHasBeenSet
from translatable.exceptions import (
    AttributeIsNotTranslatable,
    ConfigurationError,
    NestedPathNotSupportedError,
    TranslatableError,
    UnknownDriverError,
)
from translatable.models import (
    AttributeConfig,
    AttributePath,
    ExplicitAttribute,
    ImplicitAttribute,
    parse_attribute_configs,
)
from translatable.query import AnyOf, NotNull, QueryBuilder
from translatable.records import HasTranslations, Record, TranslatableRecord
from translatable.registry import TranslationDriverRegistry

__all__ = [
    "AbstractTranslationDriver",
    "AnyOf",
    "AttributeConfig",
    "AttributeIsNotTranslatable",
    "AttributePath",
    "ConfigurationError",
    "EventDispatcher",
    "ExplicitAttribute",
    "ExtraOnlyDriver",
    "ExtraOnlyTranslatable",
    "HasTranslations",
    "HybridColumnDriver",
    "HybridTranslatable",
    "ImplicitAttribute",
    "JsonColumnDriver",
    "NestedPathNotSupportedError",
    "NotNull",
    "QueryBuilder",
    "Record",
    "StorageCodec",
    "TranslatableError",
    "TranslatableRecord",
    "TranslatableSettings",
    "TranslationDriver",
    "TranslationDriverRegistry",
    "TranslationHasBeenSet",
    "UnknownDriverError",
    "get_settings",
    "parse_attribute_configs",
]
