"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    Settings: Main settings class
    I18nSettings: Translation service settings class

Example:
    ```python
    from glossa.services import get_settings

    settings = get_settings()

    cache_mode = settings.i18n.cache_mode
    ```
"""

from glossa.configuration.settings import Settings
from glossa.configuration.i18n import I18nSettings

__all__ = ["Settings", "I18nSettings"]
