"""Shared base classes for settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class TranslatableBaseSettings(BaseSettings):
    """Base class for translatable settings.

    All settings classes should inherit from this class to ensure consistent
    configuration behavior (env file loading, prefix, case sensitivity).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TRANSLATABLE_",
        case_sensitive=True,
        extra="ignore",
    )
