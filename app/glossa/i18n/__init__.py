"""i18n system - translation keys, locales, stores and lookup service.

Provides interned translation keys, locale parsing, per-locale translation
stores, a bounded LRU cache and a translation service with default-locale
fallback.

Main components:
- keys: TranslationKey, KeyRegistry, TranslationKeyEnum
- locales: LocaleDescriptor, LocaleRegistry, LocaleSource
- content: Text, Message, Replacer
- translations: LocaleTranslations
- cache: LRUCache, CacheSizeMode
- service: TranslationService
- factory: create_translation_service
"""

from glossa.i18n.cache import CacheKey, CacheSizeMode, LRUCache, calculate_automatic_cache_size
from glossa.i18n.content import Content, ContentKind, Message, Replacer, Text, contains_brackets
from glossa.i18n.exceptions import (
    InvalidArgumentError,
    InvalidCacheSizeError,
    KeyNotFoundError,
    LocaleNotSupportedError,
    TranslationError,
    TranslationKeyNotFoundError,
)
from glossa.i18n.factory import create_translation_service
from glossa.i18n.keys import (
    KeyRegistry,
    TranslationKey,
    TranslationKeyEnum,
    TranslationKeyProvider,
    get_key_registry,
    resolve_translation_key,
)
from glossa.i18n.locales import (
    LocaleDescriptor,
    LocaleRegistry,
    LocaleSource,
    LocaleSourceProvider,
    get_locale_registry,
    resolve_locale_source,
)
from glossa.i18n.service import ServiceState, TranslationService
from glossa.i18n.translations import LocaleTranslations

__all__ = [
    "TranslationKey",
    "KeyRegistry",
    "TranslationKeyEnum",
    "TranslationKeyProvider",
    "get_key_registry",
    "resolve_translation_key",
    "LocaleDescriptor",
    "LocaleRegistry",
    "LocaleSource",
    "LocaleSourceProvider",
    "get_locale_registry",
    "resolve_locale_source",
    "Content",
    "ContentKind",
    "Text",
    "Message",
    "Replacer",
    "contains_brackets",
    "LocaleTranslations",
    "CacheKey",
    "CacheSizeMode",
    "LRUCache",
    "calculate_automatic_cache_size",
    "TranslationService",
    "ServiceState",
    "create_translation_service",
    "TranslationError",
    "InvalidArgumentError",
    "InvalidCacheSizeError",
    "KeyNotFoundError",
    "LocaleNotSupportedError",
    "TranslationKeyNotFoundError",
]
