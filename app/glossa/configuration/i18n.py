"""Translation infrastructure settings."""

from typing import Literal, Optional

from pydantic import Field, field_validator

from glossa.configuration.base import InfrastructureSettings


class I18nSettings(InfrastructureSettings):
    """Translation service configuration.

    Environment Variables:
        DEFAULT_LOCALE: Locale tag used as the fallback locale (e.g. "en_US").
            Empty means no default locale is configured at startup.
        TRANSLATION_CACHE_MODE: Cache sizing policy - 'default', 'manual'
            or 'automatic' (default: 'default')
        TRANSLATION_CACHE_SIZE: Cache capacity used by the 'manual' mode
            (default: 1000)

    Cache Modes:
        - default: fixed capacity of 1000 entries
        - manual: capacity taken from TRANSLATION_CACHE_SIZE
        - automatic: derived from available memory, clamped to [100, 50000]

    Example:
        ```python
        from glossa.services import get_settings

        settings = get_settings()

        if settings.i18n.cache_mode == "manual":
            capacity = settings.i18n.cache_size
        ```
    """

    default_locale: Optional[str] = Field(
        default=None,
        alias="DEFAULT_LOCALE",
        description="Fallback locale tag",
    )
    cache_mode: Literal["default", "manual", "automatic"] = Field(
        default="default",
        alias="TRANSLATION_CACHE_MODE",
        description="Translation cache sizing policy",
    )
    cache_size: int = Field(
        default=1000,
        alias="TRANSLATION_CACHE_SIZE",
        description="Manual translation cache capacity",
    )

    @field_validator("cache_mode", mode="before")
    @classmethod
    def normalize_cache_mode(cls, value):
        """Accept cache modes in any letter case."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("cache_size")
    @classmethod
    def validate_cache_size(cls, value: int) -> int:
        """Reject non-positive cache capacities."""
        if value <= 0:
            raise ValueError(f"TRANSLATION_CACHE_SIZE must be > 0, got {value}")
        return value

    @field_validator("default_locale")
    @classmethod
    def blank_locale_is_none(cls, value: Optional[str]) -> Optional[str]:
        """Treat an empty DEFAULT_LOCALE as unset."""
        if value is None or not value.strip():
            return None
        return value.strip()
