"""Custom exceptions for the translation system.

Provides specialized exceptions for invalid input, missing keys,
unsupported locales and cache configuration problems.
"""


class TranslationError(Exception):
    """Base exception for all translation-related errors.

    All translation system exceptions inherit from this base class
    for easier exception handling in application code.

    Example:
        try:
            service.find_text_or_default("pl_PL", "GREETING")
        except TranslationError as e:
            logger.error("translation_error", error=str(e))
    """

    pass


class InvalidArgumentError(TranslationError, ValueError):
    """Raised when structurally required input is missing or malformed.

    Covers empty key strings, empty or malformed locale tags and providers
    that yield nothing.

    Example:
        >>> registry.intern_or_create("   ")
        Traceback (most recent call last):
        ...
        InvalidArgumentError: Translation key content must not be empty
    """

    pass


class InvalidCacheSizeError(InvalidArgumentError):
    """Raised when a cache capacity is not strictly positive.

    Example:
        >>> cache.set_capacity(0)
        Traceback (most recent call last):
        ...
        InvalidCacheSizeError: Cache size must be greater than zero, but was: 0
    """

    pass


class KeyNotFoundError(TranslationError, LookupError):
    """Raised when a strict key lookup finds no interned key.

    Example:
        >>> registry.intern_or_fail("never_created")
        Traceback (most recent call last):
        ...
        KeyNotFoundError: Translation key 'NEVER_CREATED' does not exist
    """

    pass


class LocaleNotSupportedError(TranslationError):
    """Raised when an operation requires a locale store that does not exist.

    Example:
        >>> service.update_default_locale_translations()
        Traceback (most recent call last):
        ...
        LocaleNotSupportedError: No translations found for default locale: en_US
    """

    pass


class TranslationKeyNotFoundError(TranslationError, LookupError):
    """Raised when a fallback lookup exhausts every locale without a match.

    Example:
        >>> service.find_text_or_default("pl_PL", "MISSING")
        Traceback (most recent call last):
        ...
        TranslationKeyNotFoundError: Translation text not found for key: MISSING
    """

    pass
