"""Translation service: locale fallback, cache-first lookup and statistics.

The service keeps its locale stores, default locale and fallback store in
one immutable snapshot. Writers build a new snapshot and swap it in whole
under a lock; readers take a single snapshot per call, so every lookup sees
either the old or the new translation set, never a mix.

Each snapshot carries the cache generation it was published with. A swap
clears the cache (advancing the generation) before publishing, and cache
reads and writes made on behalf of an older snapshot are ignored.
"""

import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from glossa.i18n.cache import (
    DEFAULT_CACHE_SIZE,
    CacheSizeMode,
    LRUCache,
    calculate_automatic_cache_size,
    validate_cache_size,
)
from glossa.i18n.content import Content, ContentKind, Message, Text
from glossa.i18n.exceptions import (
    InvalidArgumentError,
    LocaleNotSupportedError,
    TranslationKeyNotFoundError,
)
from glossa.i18n.keys import KeyProviderLike, KeyRegistry, TranslationKey, resolve_translation_key
from glossa.i18n.locales import (
    LocaleProviderLike,
    LocaleRegistry,
    LocaleSource,
    resolve_locale_source,
)
from glossa.i18n.translations import LocaleTranslations
from glossa.logging import get_module_logger

logger = get_module_logger()


class ServiceState(str, Enum):
    """Lifecycle state of a TranslationService."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"


@dataclass(frozen=True)
class _Snapshot:
    translations: Mapping[LocaleSource, LocaleTranslations] = field(
        default_factory=lambda: MappingProxyType({})
    )
    default_locale_source: Optional[LocaleSource] = None
    default_locale_translations: Optional[LocaleTranslations] = None
    generation: int = 0

    def store_for(self, locale_source: LocaleSource) -> Optional[LocaleTranslations]:
        store = self.translations.get(locale_source)
        if store is None and locale_source == self.default_locale_source:
            return self.default_locale_translations
        return store


def _resolve_cache_size(mode: CacheSizeMode, manual_cache_size: Optional[int]) -> int:
    if mode is CacheSizeMode.MANUAL:
        if manual_cache_size is None:
            raise InvalidArgumentError("Manual cache mode requires a cache size")
        return validate_cache_size(manual_cache_size)
    if mode is CacheSizeMode.AUTOMATIC:
        return calculate_automatic_cache_size()
    return DEFAULT_CACHE_SIZE


class TranslationService:
    """Cache-first translation lookup with default-locale fallback.

    The "or_null" lookups consult only the requested locale and return
    None when nothing is found. The "or_default" lookups fall back to the
    default locale's store and raise once every path is exhausted.

    Usage:
        service = TranslationService(default_locale_source="en_US")
        service.update_translations([english, polish])

        service.find_text_or_default("pl_PL", Keys.GREETING)
        service.find_text_or_null("pl_PL", Keys.GREETING)
    """

    def __init__(
        self,
        default_locale_source: Optional[LocaleProviderLike] = None,
        cache_size_mode: CacheSizeMode = CacheSizeMode.DEFAULT,
        manual_cache_size: Optional[int] = None,
        key_registry: Optional[KeyRegistry] = None,
        locale_registry: Optional[LocaleRegistry] = None,
    ):
        """Initialize the service.

        Args:
            default_locale_source: Optional default (fallback) locale provider.
            cache_size_mode: Cache sizing policy.
            manual_cache_size: Capacity for CacheSizeMode.MANUAL. When given
                with another mode it is remembered for later reconfiguration.
            key_registry: Registry for key strings (process-wide by default).
            locale_registry: Registry for locale tags (process-wide by default).

        Raises:
            InvalidCacheSizeError: If a manual cache size is not positive.
            InvalidArgumentError: If the default locale provider is invalid.
        """
        cache_size_mode = CacheSizeMode(cache_size_mode)
        self._key_registry = key_registry
        self._locale_registry = locale_registry
        self._cache_size_mode = cache_size_mode
        self._manual_cache_size = manual_cache_size
        self._cache = LRUCache(_resolve_cache_size(cache_size_mode, manual_cache_size))
        self._lock = threading.RLock()

        default_source = None
        if default_locale_source is not None:
            default_source = self._resolve_locale(default_locale_source)
        self._snapshot = _Snapshot(
            default_locale_source=default_source,
            generation=self._cache.generation,
        )

        logger.info(
            "initialized_translation_service",
            cache_size_mode=cache_size_mode.value,
            cache_capacity=self._cache.capacity,
            default_locale=default_source.localization if default_source else None,
        )

    # Provider resolution

    def _resolve_locale(self, provider: LocaleProviderLike) -> LocaleSource:
        return resolve_locale_source(provider, self._locale_registry)

    def _resolve_key(self, provider: KeyProviderLike) -> TranslationKey:
        return resolve_translation_key(provider, self._key_registry)

    # Configuration

    def update_default_locale_source(self, locale_provider: LocaleProviderLike) -> None:
        """Set the default (fallback) locale.

        A fallback store previously designated for another locale goes back
        to the general store map; call update_default_locale_translations()
        to designate the store of the new default.

        Raises:
            InvalidArgumentError: If the provider yields no locale.
        """
        locale_source = self._resolve_locale(locale_provider)
        with self._lock:
            snapshot = self._snapshot
            if locale_source == snapshot.default_locale_source:
                return
            translations = dict(snapshot.translations)
            previous = snapshot.default_locale_translations
            if previous is not None:
                translations[previous.locale_source] = previous
            self._snapshot = replace(
                snapshot,
                translations=MappingProxyType(translations),
                default_locale_source=locale_source,
                default_locale_translations=None,
            )
        logger.info("default_locale_updated", locale=locale_source.localization)

    def update_default_locale_translations(self) -> None:
        """Designate the default locale's store as the fallback store.

        Raises:
            LocaleNotSupportedError: If no default locale is configured or no
                store exists for it.
        """
        with self._lock:
            snapshot = self._snapshot
            default_source = snapshot.default_locale_source
            if default_source is None:
                raise LocaleNotSupportedError(
                    "No default locale source configured. "
                    "Call update_default_locale_source first."
                )
            if snapshot.default_locale_translations is not None:
                return
            store = snapshot.translations.get(default_source)
            if store is None:
                raise LocaleNotSupportedError(
                    f"No translations found for default locale: {default_source.localization}"
                )
            self._designate_default(snapshot, store)

    def _designate_default(self, snapshot: _Snapshot, store: LocaleTranslations) -> None:
        # Only applies when ``snapshot`` is still the published one.
        with self._lock:
            if self._snapshot is not snapshot:
                return
            translations = dict(snapshot.translations)
            del translations[store.locale_source]
            self._snapshot = replace(
                snapshot,
                translations=MappingProxyType(translations),
                default_locale_translations=store,
            )
        logger.info(
            "default_locale_translations_updated",
            locale=store.locale_source.localization,
        )

    def _fallback_from(self, snapshot: _Snapshot) -> Optional[LocaleTranslations]:
        """Fallback store as seen by ``snapshot``, designating it lazily."""
        if snapshot.default_locale_translations is not None:
            return snapshot.default_locale_translations
        default_source = snapshot.default_locale_source
        if default_source is None:
            return None
        store = snapshot.translations.get(default_source)
        if store is not None:
            self._designate_default(snapshot, store)
        return store

    def update_translations(self, translations: Iterable[Optional[LocaleTranslations]]) -> None:
        """Replace the whole translation set atomically and clear the cache.

        With a default locale configured, its entry becomes the fallback
        store. None entries are skipped; for duplicate locales the last
        entry wins.

        Raises:
            InvalidArgumentError: If translations is None.
            LocaleNotSupportedError: If the default locale is configured but
                missing from ``translations``. The current set is kept.
        """
        if translations is None:
            raise InvalidArgumentError("Translations must not be None")

        stores: Dict[LocaleSource, LocaleTranslations] = {}
        for store in translations:
            if store is None:
                continue
            if store.locale_source in stores:
                logger.warning(
                    "duplicate_locale_translations",
                    locale=store.locale_source.localization,
                )
            stores[store.locale_source] = store

        with self._lock:
            default_source = self._snapshot.default_locale_source
            default_store = None
            if default_source is not None:
                default_store = stores.pop(default_source, None)
                if default_store is None:
                    logger.error(
                        "default_locale_missing_from_translations",
                        locale=default_source.localization,
                        provided_locales=[source.localization for source in stores],
                    )
                    raise LocaleNotSupportedError(
                        "Default locale source not found in provided translations: "
                        f"{default_source.localization}"
                    )
            self._cache.clear()
            self._snapshot = _Snapshot(
                translations=MappingProxyType(stores),
                default_locale_source=default_source,
                default_locale_translations=default_store,
                generation=self._cache.generation,
            )

        logger.info(
            "translations_updated",
            locale_count=len(stores) + (1 if default_store is not None else 0),
            default_locale=default_source.localization if default_source else None,
        )

    def clear(self) -> None:
        """Drop every store and the default locale, and clear the cache."""
        with self._lock:
            self._cache.clear()
            self._snapshot = _Snapshot(generation=self._cache.generation)
        logger.info("translation_service_cleared")

    # Cache configuration

    def reconfigure_cache(
        self,
        cache_size_mode: CacheSizeMode,
        manual_cache_size: Optional[int] = None,
    ) -> None:
        """Resize the cache according to a sizing mode.

        Args:
            cache_size_mode: New sizing policy.
            manual_cache_size: Capacity for MANUAL mode; defaults to the
                previously configured manual size.

        Raises:
            InvalidCacheSizeError: If the manual size is not positive.
            InvalidArgumentError: If MANUAL mode has no size to use.
        """
        cache_size_mode = CacheSizeMode(cache_size_mode)
        with self._lock:
            if manual_cache_size is None:
                manual_cache_size = self._manual_cache_size
            capacity = _resolve_cache_size(cache_size_mode, manual_cache_size)
            self._cache_size_mode = cache_size_mode
            self._manual_cache_size = manual_cache_size
            self._cache.set_capacity(capacity)
        logger.info(
            "translation_cache_reconfigured",
            cache_size_mode=cache_size_mode.value,
            cache_capacity=capacity,
        )

    @property
    def cache(self) -> LRUCache:
        """The lookup cache.

        Clear it through clear() or update_translations(); clearing it
        directly leaves lookups uncached until the next swap.
        """
        return self._cache

    @property
    def cache_size_mode(self) -> CacheSizeMode:
        return self._cache_size_mode

    @property
    def manual_cache_size(self) -> Optional[int]:
        return self._manual_cache_size

    def cache_statistics(self) -> str:
        """Human-readable cache statistics."""
        return self._cache.statistics()

    # State accessors

    @property
    def state(self) -> ServiceState:
        snapshot = self._snapshot
        if snapshot.default_locale_translations is not None:
            return ServiceState.READY
        return ServiceState.UNINITIALIZED

    @property
    def default_locale_source(self) -> Optional[LocaleSource]:
        return self._snapshot.default_locale_source

    @property
    def default_locale_translations(self) -> Optional[LocaleTranslations]:
        return self._snapshot.default_locale_translations

    @property
    def loaded_locale_sources(self) -> Tuple[LocaleSource, ...]:
        """Locales of the general store map (the fallback store excluded)."""
        return tuple(self._snapshot.translations.keys())

    @property
    def loaded_locale_translations(self) -> Tuple[LocaleTranslations, ...]:
        """Stores of the general map (the fallback store excluded)."""
        return tuple(self._snapshot.translations.values())

    def _active_stores(self) -> List[LocaleTranslations]:
        snapshot = self._snapshot
        stores = list(snapshot.translations.values())
        if snapshot.default_locale_translations is not None:
            stores.append(snapshot.default_locale_translations)
        return stores

    @property
    def number_of_locales(self) -> int:
        return len(self._active_stores())

    @property
    def number_of_texts(self) -> int:
        return sum(store.number_of_texts for store in self._active_stores())

    @property
    def number_of_messages(self) -> int:
        return sum(store.number_of_messages for store in self._active_stores())

    # Store resolution

    def find_locale_translations_or_null(
        self, locale_provider: LocaleProviderLike
    ) -> Optional[LocaleTranslations]:
        """Return the store of the requested locale, or None."""
        return self._snapshot.store_for(self._resolve_locale(locale_provider))

    def find_locale_translations_or_default(
        self, locale_provider: LocaleProviderLike
    ) -> LocaleTranslations:
        """Return the requested locale's store, else the fallback store.

        The fallback store is designated on first use when only the default
        locale was configured.

        Raises:
            LocaleNotSupportedError: If neither store exists.
        """
        locale_source = self._resolve_locale(locale_provider)
        snapshot = self._snapshot
        store = snapshot.store_for(locale_source)
        if store is None:
            store = self._fallback_from(snapshot)
        if store is None:
            raise LocaleNotSupportedError(
                f"Locale {locale_source.localization} is not supported and no default "
                "locale translations are available"
            )
        return store

    # Content lookup

    def _lookup(
        self,
        snapshot: _Snapshot,
        locale_source: LocaleSource,
        key: TranslationKey,
        kind: ContentKind,
    ) -> Optional[Content]:
        try:
            content = self._cache.get(locale_source, key, kind, generation=snapshot.generation)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(
                "translation_cache_bypassed",
                operation="get",
                locale=locale_source.localization,
                key=str(key),
                error=str(e),
            )
            content = None
        if content is not None:
            return content

        store = snapshot.store_for(locale_source)
        if store is None:
            return None
        if kind is ContentKind.TEXT:
            content = store.get_text(key)
        else:
            content = store.get_message(key)
        if content is None:
            return None

        try:
            self._cache.put(locale_source, key, content, generation=snapshot.generation)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(
                "translation_cache_bypassed",
                operation="put",
                locale=locale_source.localization,
                key=str(key),
                error=str(e),
            )
        return content

    def _find_or_null(
        self,
        locale_provider: LocaleProviderLike,
        key_provider: KeyProviderLike,
        kind: ContentKind,
    ) -> Optional[Content]:
        locale_source = self._resolve_locale(locale_provider)
        key = self._resolve_key(key_provider)
        return self._lookup(self._snapshot, locale_source, key, kind)

    def _find_or_default(
        self,
        locale_provider: LocaleProviderLike,
        key_provider: KeyProviderLike,
        kind: ContentKind,
    ) -> Content:
        locale_source = self._resolve_locale(locale_provider)
        key = self._resolve_key(key_provider)
        snapshot = self._snapshot

        content = self._lookup(snapshot, locale_source, key, kind)
        if content is not None:
            return content

        requested_store = snapshot.store_for(locale_source)
        default_store = self._fallback_from(snapshot)
        if requested_store is None and default_store is None:
            raise LocaleNotSupportedError(
                f"Locale {locale_source.localization} is not supported and no default "
                "locale translations are available"
            )

        if default_store is not None and default_store.locale_source != locale_source:
            content = self._lookup(snapshot, default_store.locale_source, key, kind)
            if content is not None:
                logger.debug(
                    "used_fallback_translation",
                    key=str(key),
                    requested_locale=locale_source.localization,
                    fallback_locale=default_store.locale_source.localization,
                )
                return content

        default_source = snapshot.default_locale_source
        logger.warning(
            "translation_not_found",
            key=str(key),
            kind=kind.value,
            locale=locale_source.localization,
            fallback_locale=default_source.localization if default_source else None,
        )
        raise TranslationKeyNotFoundError(f"Translation {kind.value} not found for key: {key}")

    def find_text_or_null(
        self, locale_provider: LocaleProviderLike, key_provider: KeyProviderLike
    ) -> Optional[Text]:
        """Return the requested locale's text, or None. No fallback."""
        return self._find_or_null(locale_provider, key_provider, ContentKind.TEXT)

    def find_message_or_null(
        self, locale_provider: LocaleProviderLike, key_provider: KeyProviderLike
    ) -> Optional[Message]:
        """Return the requested locale's message, or None. No fallback."""
        return self._find_or_null(locale_provider, key_provider, ContentKind.MESSAGE)

    def find_text_or_default(
        self, locale_provider: LocaleProviderLike, key_provider: KeyProviderLike
    ) -> Text:
        """Return the text from the requested locale, else the default locale.

        Raises:
            LocaleNotSupportedError: If the locale has no store and there is
                no fallback store.
            TranslationKeyNotFoundError: If the key is absent everywhere.
        """
        return self._find_or_default(locale_provider, key_provider, ContentKind.TEXT)

    def find_message_or_default(
        self, locale_provider: LocaleProviderLike, key_provider: KeyProviderLike
    ) -> Message:
        """Return the message from the requested locale, else the default locale.

        Raises:
            LocaleNotSupportedError: If the locale has no store and there is
                no fallback store.
            TranslationKeyNotFoundError: If the key is absent everywhere.
        """
        return self._find_or_default(locale_provider, key_provider, ContentKind.MESSAGE)
