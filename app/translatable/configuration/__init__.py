"""Translatable configuration module - public API.

Exports:
    TranslatableSettings: Settings class (for building per-test or per-app policies)
    get_settings: Cached process-wide settings accessor

Example:
    ```python
    from translatable.configuration import get_settings

    settings = get_settings()
    column = settings.STORAGE_COLUMN
    ```
"""

from translatable.configuration.settings import (
    MissingKeyCallback,
    TranslatableSettings,
    get_settings,
)

__all__ = ["MissingKeyCallback", "TranslatableSettings", "get_settings"]
