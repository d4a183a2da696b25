"""Custom exceptions for the translatable system.

Configuration errors are programmer errors: they are raised as soon as the
bad configuration is seen and are never retried. Malformed stored data is
not an error and never raises (see translatable.codecs).
"""

from typing import Any


class TranslatableError(Exception):
    """Base exception for all translatable errors.

    Example:
        try:
            record.set_translation("title", "fr", "Bonjour")
        except TranslatableError as e:
            logger.error("translation_error", error=str(e))
    """

    pass


class ConfigurationError(TranslatableError):
    """Raised when a translatable attribute or driver is misconfigured."""

    pass


class UnknownDriverError(ConfigurationError):
    """Raised when an attribute resolves to a driver name nobody registered.

    Example:
        >>> registry.resolve(Article, ExplicitAttribute(path, driver="redis"))
        Traceback (most recent call last):
        ...
        UnknownDriverError: Translation driver [redis] not registered.
    """

    def __init__(self, driver_name: str):
        self.driver_name = driver_name
        super().__init__(f"Translation driver [{driver_name}] not registered.")


class NestedPathNotSupportedError(ConfigurationError):
    """Raised when a nested attribute path is bound to a flat-only layout."""

    def __init__(self, attribute: str, driver_name: str):
        self.attribute = attribute
        self.driver_name = driver_name
        super().__init__(
            f"Translation driver [{driver_name}] does not support nested "
            f"attribute paths, got [{attribute}]."
        )


class AttributeIsNotTranslatable(TranslatableError):
    """Raised when a translation API is used on an undeclared attribute."""

    def __init__(self, key: str, record: Any):
        self.key = key
        record_type = record if isinstance(record, type) else type(record)
        self.record_type = record_type
        super().__init__(
            f"Cannot translate attribute `{key}` as it's not one of the "
            f"translatable attributes of `{record_type.__name__}`."
        )
