"""Factory functions for creating translation services.

Provides a convenience function for building a TranslationService from
the library settings.
"""

from typing import Iterable, Optional

from glossa.configuration import I18nSettings, Settings
from glossa.i18n.cache import CacheSizeMode
from glossa.i18n.service import TranslationService
from glossa.i18n.translations import LocaleTranslations
from glossa.logging import get_module_logger

logger = get_module_logger()


def create_translation_service(
    settings: Optional[Settings] = None,
    translations: Optional[Iterable[LocaleTranslations]] = None,
) -> TranslationService:
    """Create and configure a TranslationService instance.

    Args:
        settings: Library settings (default: loaded from the environment).
        translations: Optional locale stores to load immediately. With a
            default locale configured, its store must be among them.

    Returns:
        TranslationService: Configured translation service

    Raises:
        LocaleNotSupportedError: If translations are given without the
            configured default locale.

    Usage:
        # Use the environment
        service = create_translation_service()

        # Explicit settings and preloaded stores
        settings = Settings(i18n=I18nSettings(DEFAULT_LOCALE="en_US"))
        service = create_translation_service(settings, [english, polish])
    """
    i18n_settings: I18nSettings = (settings or Settings()).i18n
    cache_mode = CacheSizeMode(i18n_settings.cache_mode)

    service = TranslationService(
        default_locale_source=i18n_settings.default_locale,
        cache_size_mode=cache_mode,
        manual_cache_size=i18n_settings.cache_size,
    )

    if translations is not None:
        service.update_translations(translations)
        logger.info(
            "translation_service_created_with_preload",
            locale_count=service.number_of_locales,
            cache_size_mode=cache_mode.value,
        )
    else:
        logger.info(
            "translation_service_created_lazy",
            cache_size_mode=cache_mode.value,
        )

    return service
