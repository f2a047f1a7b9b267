"""Shared base class for settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class PolyglotSettings(BaseSettings):
    """Base class for library-level settings.

    All settings sections should inherit from this class to ensure
    consistent configuration behavior (env file loading, case sensitivity).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
