"""
Dependency injection services.

Provides singleton provider functions for settings, registries and the
translation service.
"""

from glossa.services.providers import (
    get_key_registry,
    get_locale_registry,
    get_settings,
    get_translation_service,
    reset_providers,
)

__all__ = [
    "get_settings",
    "get_key_registry",
    "get_locale_registry",
    "get_translation_service",
    "reset_providers",
]
