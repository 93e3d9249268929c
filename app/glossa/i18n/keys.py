"""Translation keys and the key registry.

Keys are flyweights: every distinct normalized string maps to exactly one
TranslationKey carrying a dense ordinal. Equality and hashing use the
ordinal only, which keeps dictionary lookups and cache keys cheap.
"""

import itertools
import threading
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Protocol, Union, runtime_checkable

from glossa.i18n.exceptions import InvalidArgumentError, KeyNotFoundError
from glossa.logging import get_module_logger

logger = get_module_logger()


@dataclass(frozen=True)
class TranslationKey:
    """Interned identifier of one translatable unit.

    Instances are created by a KeyRegistry; build them through
    ``KeyRegistry.intern_or_create`` or ``TranslationKey.of`` rather than
    calling the constructor directly.

    Attributes:
        ordinal: Dense, registry-assigned number. Sole basis of equality.
        name: Normalized (stripped, uppercased) key string.
    """

    ordinal: int
    name: str = field(default="", compare=False)

    def __hash__(self) -> int:
        return self.ordinal

    def __str__(self) -> str:
        return self.name or str(self.ordinal)

    @property
    def translation_key(self) -> "TranslationKey":
        """A key is its own provider."""
        return self

    @classmethod
    def of(cls, content: str, deny_creation: bool = False) -> "TranslationKey":
        """Intern ``content`` in the process-wide registry.

        Args:
            content: Key string, normalized before lookup.
            deny_creation: Raise KeyNotFoundError instead of creating.

        Returns:
            The canonical TranslationKey for ``content``.
        """
        registry = get_key_registry()
        if deny_creation:
            return registry.intern_or_fail(content)
        return registry.intern_or_create(content)


@runtime_checkable
class TranslationKeyProvider(Protocol):
    """Anything that can yield a TranslationKey on demand."""

    @property
    def translation_key(self) -> TranslationKey: ...


KeyProviderLike = Union[
    TranslationKey,
    TranslationKeyProvider,
    str,
    Callable[[], Any],
]


def normalize_key(content: Any) -> str:
    """Normalize raw key content (strip, uppercase).

    Raises:
        InvalidArgumentError: If content is None, not a string, or blank.
    """
    if content is None:
        raise InvalidArgumentError("Translation key content must not be None")
    if not isinstance(content, str):
        raise InvalidArgumentError(
            f"Translation key content must be a string, got {type(content).__name__}"
        )
    normalized = content.strip().upper()
    if not normalized:
        raise InvalidArgumentError("Translation key content must not be empty")
    return normalized


class KeyRegistry:
    """Interns key strings into unique, stable TranslationKey instances.

    Reads of existing keys take no lock. Creation of a new key happens
    under a lock with a second lookup, so concurrent callers interning the
    same new string all receive the same instance and no ordinal is
    wasted on a losing candidate.

    Usage:
        registry = KeyRegistry()
        greeting = registry.intern_or_create("greeting")
        assert registry.intern_or_create("  GREETING ") is greeting
    """

    def __init__(self):
        self._keys: Dict[str, TranslationKey] = {}
        self._by_ordinal: List[TranslationKey] = []
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def intern_or_create(self, content: str) -> TranslationKey:
        """Return the key for ``content``, creating it when absent.

        Args:
            content: Raw key string.

        Returns:
            Canonical TranslationKey.

        Raises:
            InvalidArgumentError: If content is empty after stripping.
        """
        name = normalize_key(content)
        key = self._keys.get(name)
        if key is not None:
            return key

        with self._lock:
            key = self._keys.get(name)
            if key is None:
                key = TranslationKey(ordinal=next(self._counter), name=name)
                self._by_ordinal.append(key)
                self._keys[name] = key
                logger.debug("translation_key_created", key=name, ordinal=key.ordinal)
        return key

    def intern_or_fail(self, content: str) -> TranslationKey:
        """Return the existing key for ``content``.

        Raises:
            InvalidArgumentError: If content is empty after stripping.
            KeyNotFoundError: If no key was interned for ``content``.
        """
        name = normalize_key(content)
        key = self._keys.get(name)
        if key is None:
            raise KeyNotFoundError(f"Translation key '{name}' does not exist")
        return key

    def get_by_ordinal(self, ordinal: int) -> Optional[TranslationKey]:
        """Look up a key by ordinal, or None if not assigned."""
        if 0 <= ordinal < len(self._by_ordinal):
            return self._by_ordinal[ordinal]
        return None

    def exists(self, key: Union[TranslationKey, str]) -> bool:
        """Check whether a key (or key string) belongs to this registry."""
        if isinstance(key, TranslationKey):
            return self.get_by_ordinal(key.ordinal) is key
        try:
            return normalize_key(key) in self._keys
        except InvalidArgumentError:
            return False

    def clear(self) -> None:
        """Drop every key and restart ordinals at zero.

        Keys handed out before the call stay valid values but no longer
        belong to this registry.
        """
        with self._lock:
            self._keys = {}
            self._by_ordinal = []
            self._counter = itertools.count()
        logger.info("key_registry_cleared")

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, item: Any) -> bool:
        return self.exists(item)


@lru_cache
def get_key_registry() -> KeyRegistry:
    """Process-wide key registry.

    Reset with ``get_key_registry.cache_clear()`` (or
    ``glossa.services.reset_providers()``) to start from an empty registry.
    """
    return KeyRegistry()


class TranslationKeyEnum(Enum):
    """Enum mixin declaring translation keys as members.

    Each member interns its own name in the process-wide registry when
    first used as a key provider.

    Usage:
        class Keys(TranslationKeyEnum):
            GREETING = "greeting"
            FAREWELL = "farewell"

        service.find_text_or_default("en_US", Keys.GREETING)
    """

    @property
    def translation_key(self) -> TranslationKey:
        return get_key_registry().intern_or_create(self.name)


def resolve_translation_key(
    provider: KeyProviderLike,
    registry: Optional[KeyRegistry] = None,
) -> TranslationKey:
    """Resolve a key provider to its TranslationKey.

    Accepts a TranslationKey, an object exposing ``translation_key``
    (including TranslationKeyEnum members), a key string (which must
    already be interned), or a zero-argument callable returning any of
    those.

    Args:
        provider: The key provider.
        registry: Registry used for strings. Defaults to the process-wide one.

    Returns:
        The resolved TranslationKey.

    Raises:
        InvalidArgumentError: If the provider is None or yields no key.
        KeyNotFoundError: If a key string was never interned.
    """
    if provider is None:
        raise InvalidArgumentError("Translation key provider must not be None")

    candidate = provider
    if not isinstance(candidate, (TranslationKey, str)) and not hasattr(
        candidate, "translation_key"
    ):
        if callable(candidate):
            candidate = candidate()

    if isinstance(candidate, TranslationKey):
        return candidate
    if isinstance(candidate, str):
        return (registry or get_key_registry()).intern_or_fail(candidate)
    if candidate is not None and hasattr(candidate, "translation_key"):
        key = candidate.translation_key
        if isinstance(key, TranslationKey):
            return key

    raise InvalidArgumentError(
        f"Translation key provider {provider!r} did not provide a translation key"
    )
