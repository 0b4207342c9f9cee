"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The persisted layout (namespace + key) defaults to the values existing
installs already use, so changing them is an explicit opt-in.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CATEGORIES = "Alimentação,Transporte,Compras,Lazer,Saúde,Outros"


class StorageSettings(BaseSettings):
    """Preferences store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_STORAGE_",
        extra="ignore"
    )

    backend: str = Field(
        default="json",
        pattern="^(json|memory)$",
        description="Preferences backend: 'json' (file per namespace) or 'memory'"
    )
    data_dir: Path = Field(
        default=Path.home() / ".expense_tracker",
        description="Directory holding one JSON file per preferences namespace"
    )
    namespace: str = Field(
        default="expense_prefs",
        min_length=1,
        description="Preferences namespace the expenses live in"
    )
    key: str = Field(
        default="expenses",
        min_length=1,
        description="Key of the serialized expense collection"
    )

    @field_validator('namespace')
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        """Namespaces become file names, so path separators are not allowed."""
        if "/" in v or "\\" in v:
            raise ValueError(f"Namespace must not contain path separators: {v}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_title: str = Field(
        default="Controle de Gastos",
        description="Title shown at the top of the screen"
    )
    currency_symbol: str = Field(
        default="R$",
        description="Symbol printed before every amount"
    )
    categories: str = Field(
        default=DEFAULT_CATEGORIES,
        description="Comma-separated list of categories offered in the add form"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    @property
    def categories_list(self) -> list[str]:
        """Get offered categories as a list."""
        return [c.strip() for c in self.categories.split(",") if c.strip()]


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry for each failure. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
