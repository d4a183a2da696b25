"""Package-wide translatable settings."""

from functools import lru_cache
from typing import Any, Callable, Optional

from pydantic import Field

from translatable.configuration.base import TranslatableBaseSettings

MissingKeyCallback = Callable[..., Any]


class TranslatableSettings(TranslatableBaseSettings):
    """Package-wide configuration consumed by every translation driver.

    Environment Variables:
        TRANSLATABLE_LOCALE: Active locale when a record has none set (default: en)
        TRANSLATABLE_FALLBACK_LOCALE: Locale used when a translation is missing (default: en)
        TRANSLATABLE_BASE_LOCALE: Base locale for shared-column layouts (default: fallback locale)
        TRANSLATABLE_STORAGE_COLUMN: Default shared JSON column (default: translations)
        TRANSLATABLE_USE_FALLBACK_LOCALE: Whether attribute reads fall back (default: True)
        TRANSLATABLE_FALLBACK_ANY: Fall back to any translated locale (default: False)
        TRANSLATABLE_ALLOW_NULL_FOR_TRANSLATION: Keep null values (default: False)
        TRANSLATABLE_ALLOW_EMPTY_STRING_FOR_TRANSLATION: Keep empty strings (default: False)
        TRANSLATABLE_LOG_LEVEL: Logging level (default: INFO)
        TRANSLATABLE_PREFIX: Environment prefix, empty in production

    Example:
        ```python
        from translatable.configuration import get_settings

        settings = get_settings()
        if settings.FALLBACK_ANY:
            ...

        strict = settings.with_fallback(fallback_any=False)
        ```
    """

    LOCALE: str = Field(default="en", description="Active locale")
    FALLBACK_LOCALE: Optional[str] = Field(
        default="en",
        description="Locale used when the requested translation is missing",
    )
    BASE_LOCALE: Optional[str] = Field(
        default=None,
        description="Base locale for hybrid and extra_only layouts",
    )
    STORAGE_COLUMN: str = Field(
        default="translations",
        description="Default shared JSON column for hybrid and extra_only layouts",
    )
    USE_FALLBACK_LOCALE: bool = True
    FALLBACK_ANY: bool = False
    ALLOW_NULL_FOR_TRANSLATION: bool = False
    ALLOW_EMPTY_STRING_FOR_TRANSLATION: bool = False

    LOG_LEVEL: str = "INFO"
    PREFIX: str = ""

    missing_key_callback: Optional[MissingKeyCallback] = Field(
        default=None,
        exclude=True,
        description="Called when a json layout read used a different locale",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def with_fallback(
        self,
        fallback_locale: Optional[str] = None,
        fallback_any: bool = False,
        missing_key_callback: Optional[MissingKeyCallback] = None,
    ) -> "TranslatableSettings":
        """Return a copy with the fallback policy replaced.

        Args:
            fallback_locale: Locale to fall back to. Keeps the current one if None.
            fallback_any: Whether any translated locale may be used as fallback.
            missing_key_callback: Hook invoked when a fallback locale was used.

        Returns:
            Updated settings copy.
        """
        return self.model_copy(
            update={
                "FALLBACK_LOCALE": fallback_locale or self.FALLBACK_LOCALE,
                "FALLBACK_ANY": fallback_any,
                "missing_key_callback": missing_key_callback,
            }
        )

    def allow_null_for_translation(self, allow: bool = True) -> "TranslatableSettings":
        return self.model_copy(update={"ALLOW_NULL_FOR_TRANSLATION": allow})

    def allow_empty_string_for_translation(
        self, allow: bool = True
    ) -> "TranslatableSettings":
        return self.model_copy(update={"ALLOW_EMPTY_STRING_FOR_TRANSLATION": allow})


@lru_cache
def get_settings() -> TranslatableSettings:
    """Get the process-wide settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.
    Tests that need different policies should build their own
    TranslatableSettings instead of mutating this one.

    Returns:
        TranslatableSettings instance.
    """
    return TranslatableSettings()
