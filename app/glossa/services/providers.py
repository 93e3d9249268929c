"""
Factory functions for dependency injection.

Provides process-scoped singleton providers for the translation components.
"""

from functools import lru_cache

from glossa.configuration import Settings
from glossa.i18n.factory import create_translation_service
from glossa.i18n.keys import get_key_registry
from glossa.i18n.locales import get_locale_registry
from glossa.i18n.service import TranslationService


@lru_cache
def get_settings() -> Settings:
    """
    Get process-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_translation_service() -> TranslationService:
    """
    Get process-scoped translation service singleton.

    The service starts empty; load stores with update_translations().

    Returns:
        TranslationService: Cached service configured from settings.i18n.

    Usage:
        service = get_translation_service()
        service.update_translations([english, polish])
        greeting = service.find_text_or_default("pl_PL", Keys.GREETING)
    """
    return create_translation_service(settings=get_settings())


def reset_providers() -> None:
    """Drop every cached singleton.

    The next call to each provider builds a fresh instance. Keys and
    locale sources handed out earlier keep working as values but no longer
    belong to the new registries.
    """
    get_translation_service.cache_clear()
    get_settings.cache_clear()
    get_key_registry.cache_clear()
    get_locale_registry.cache_clear()


__all__ = [
    "get_settings",
    "get_key_registry",
    "get_locale_registry",
    "get_translation_service",
    "reset_providers",
]
