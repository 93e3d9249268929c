"""Locale descriptors, the locale registry and locale sources.

Locale tags such as "en_US", "pl-PL" or "zh_Hans_CN" are parsed into
LocaleDescriptor values and cached by the LocaleRegistry. A LocaleSource
identifies a locale by its normalized tag and derives its descriptor
lazily.
"""

import re
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Protocol, Union, runtime_checkable

from glossa.i18n.exceptions import InvalidArgumentError
from glossa.logging import get_module_logger

logger = get_module_logger()

_SEPARATOR = re.compile(r"[_-]")
_LANGUAGE = re.compile(r"^(?:[A-Za-z]{2,3}|[0-9]{3})$")
_SCRIPT = re.compile(r"^[A-Za-z]{4}$")
_REGION = re.compile(r"^(?:[A-Za-z]{2}|[0-9]{3})$")


def _split_tag(tag: Any) -> list:
    if tag is None:
        raise InvalidArgumentError("Locale tag must not be None")
    if not isinstance(tag, str):
        raise InvalidArgumentError(
            f"Locale tag must be a string, got {type(tag).__name__}"
        )
    stripped = tag.strip()
    if not stripped:
        raise InvalidArgumentError("Locale tag must not be empty")
    return _SEPARATOR.split(stripped, maxsplit=2)


def normalize_locale_tag(tag: str) -> str:
    """Normalize a locale tag without validating it.

    The language is lowercased, a script is title-cased, a region is
    uppercased and a variant is kept verbatim; parts are joined with "_".

    Examples:
        >>> normalize_locale_tag("EN-us")
        'en_US'
        >>> normalize_locale_tag("zh-hans-cn")
        'zh_Hans_CN'

    Raises:
        InvalidArgumentError: If the tag is None, not a string, or blank.
    """
    parts = _split_tag(tag)
    normalized = [parts[0].lower()]
    if len(parts) > 1:
        if _SCRIPT.match(parts[1]):
            normalized.append(parts[1].title())
            if len(parts) > 2:
                normalized.append(parts[2].upper())
        else:
            normalized.append(parts[1].upper())
            if len(parts) > 2:
                normalized.append(parts[2])
    return "_".join(normalized)


@dataclass(frozen=True)
class LocaleDescriptor:
    """Parsed structure of a locale tag.

    Attributes:
        language: Lowercase 2-3 letter or 3 digit language code.
        script: Title-case 4 letter script code, or "".
        region: Uppercase 2 letter or 3 digit region code, or "".
        variant: Verbatim variant, or "".
    """

    language: str
    script: str = ""
    region: str = ""
    variant: str = ""

    def __str__(self) -> str:
        return "_".join(
            part for part in (self.language, self.script, self.region, self.variant) if part
        )


class LocaleRegistry:
    """Parses locale tags and caches the resulting descriptors.

    Cache hits are plain dictionary reads. Concurrent misses for the same
    tag may both parse it; the results are equal and whichever insert wins
    is kept. Tags that fail to parse are never cached.

    Usage:
        registry = LocaleRegistry()
        registry.parse("pl-PL")  # LocaleDescriptor(language="pl", region="PL")
    """

    def __init__(self):
        self._descriptors: Dict[str, LocaleDescriptor] = {}
        self._sources: Dict[str, "LocaleSource"] = {}
        self._lock = threading.Lock()

    def parse(self, tag: str) -> LocaleDescriptor:
        """Parse ``tag`` into a LocaleDescriptor.

        Args:
            tag: Locale tag separated by "_" or "-", at most three parts.

        Returns:
            Cached or freshly parsed descriptor.

        Raises:
            InvalidArgumentError: If the language or region is malformed.
        """
        parts = _split_tag(tag)
        cache_key = tag.strip().lower()
        descriptor = self._descriptors.get(cache_key)
        if descriptor is not None:
            return descriptor

        descriptor = self._parse_parts(tag, parts)
        return self._descriptors.setdefault(cache_key, descriptor)

    @staticmethod
    def _parse_parts(tag: str, parts: list) -> LocaleDescriptor:
        if not all(parts):
            logger.warning("empty_locale_subtag", tag=tag)
            raise InvalidArgumentError(f"Empty subtag in locale tag: {tag!r}")

        language = parts[0]
        if not _LANGUAGE.match(language):
            logger.warning("invalid_locale_language", tag=tag)
            raise InvalidArgumentError(f"Invalid language in locale tag: {tag!r}")

        script = region = variant = ""
        rest = parts[1:]
        if rest and _SCRIPT.match(rest[0]):
            script = rest.pop(0).title()
            if rest:
                region = rest.pop(0)
        elif rest:
            region = rest.pop(0)
            if rest:
                variant = rest.pop(0)

        if region and not _REGION.match(region):
            logger.warning("invalid_locale_region", tag=tag)
            raise InvalidArgumentError(f"Invalid region in locale tag: {tag!r}")

        return LocaleDescriptor(
            language=language.lower(),
            script=script,
            region=region.upper(),
            variant=variant,
        )

    def source(self, tag: str) -> "LocaleSource":
        """Return the interned LocaleSource for ``tag``.

        The tag is parsed first, so malformed tags are never interned.

        Raises:
            InvalidArgumentError: If the tag is blank or malformed.
        """
        descriptor = self.parse(tag)
        localization = str(descriptor)
        source = self._sources.get(localization)
        if source is not None:
            return source
        with self._lock:
            return self._sources.setdefault(
                localization, LocaleSource.from_descriptor(descriptor, registry=self)
            )

    def clear(self) -> None:
        """Drop every cached descriptor and interned source."""
        with self._lock:
            self._descriptors = {}
            self._sources = {}
        logger.info("locale_registry_cleared")

    def __len__(self) -> int:
        return len(self._descriptors)


@lru_cache
def get_locale_registry() -> LocaleRegistry:
    """Process-wide locale registry.

    Reset with ``get_locale_registry.cache_clear()`` (or
    ``glossa.services.reset_providers()``).
    """
    return LocaleRegistry()


class LocaleSource:
    """Identifies a locale by its normalized tag.

    Equality and hashing use ``localization`` only. The structured
    ``locale`` descriptor is computed on first access, cached by reference
    assignment, and dropped again by ``invalidate()``.

    Usage:
        LocaleSource("EN-us") == LocaleSource("en_US")  # True
        LocaleSource.from_descriptor(LocaleDescriptor("en", region="US"))
    """

    __slots__ = ("_localization", "_descriptor", "_registry")

    def __init__(self, localization: str, registry: Optional[LocaleRegistry] = None):
        self._localization = normalize_locale_tag(localization)
        self._descriptor: Optional[LocaleDescriptor] = None
        self._registry = registry

    @classmethod
    def from_descriptor(
        cls,
        descriptor: LocaleDescriptor,
        registry: Optional[LocaleRegistry] = None,
    ) -> "LocaleSource":
        """Build a source from an already parsed descriptor."""
        source = cls(str(descriptor), registry=registry)
        source._descriptor = descriptor
        return source

    @property
    def localization(self) -> str:
        return self._localization

    @property
    def locale(self) -> LocaleDescriptor:
        """Parsed descriptor, computed once and cached until invalidated.

        Raises:
            InvalidArgumentError: If the localization does not parse.
        """
        descriptor = self._descriptor
        if descriptor is None:
            registry = self._registry or get_locale_registry()
            descriptor = registry.parse(self._localization)
            self._descriptor = descriptor
        return descriptor

    @property
    def locale_source(self) -> "LocaleSource":
        """A source is its own provider."""
        return self

    def invalidate(self) -> None:
        """Forget the cached descriptor; the next access recomputes it."""
        self._descriptor = None

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, LocaleSource):
            return NotImplemented
        return self._localization == other._localization

    def __hash__(self) -> int:
        return hash(self._localization)

    def __str__(self) -> str:
        return self._localization

    def __repr__(self) -> str:
        return f"LocaleSource({self._localization!r})"


@runtime_checkable
class LocaleSourceProvider(Protocol):
    """Anything that can yield a LocaleSource on demand."""

    @property
    def locale_source(self) -> LocaleSource: ...


LocaleProviderLike = Union[LocaleSource, LocaleSourceProvider, str, Callable[[], Any]]


def resolve_locale_source(
    provider: LocaleProviderLike,
    registry: Optional[LocaleRegistry] = None,
) -> LocaleSource:
    """Resolve a locale provider to its LocaleSource.

    Accepts a LocaleSource, an object exposing ``locale_source``, a locale
    tag, or a zero-argument callable returning any of those.

    Raises:
        InvalidArgumentError: If the provider is None, yields nothing, or
            yields a blank or malformed tag.
    """
    if provider is None:
        raise InvalidArgumentError("Locale source provider must not be None")

    candidate = provider
    if not isinstance(candidate, (LocaleSource, str)) and not hasattr(
        candidate, "locale_source"
    ):
        if callable(candidate):
            candidate = candidate()

    if isinstance(candidate, LocaleSource):
        return candidate
    if isinstance(candidate, str):
        return (registry or get_locale_registry()).source(candidate)
    if candidate is not None and hasattr(candidate, "locale_source"):
        source = candidate.locale_source
        if isinstance(source, LocaleSource):
            return source

    raise InvalidArgumentError(
        f"Locale source provider {provider!r} did not provide a locale source"
    )
