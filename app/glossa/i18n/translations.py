"""Per-locale translation store.

LocaleTranslations is the authoritative key -> content table for one
locale. It holds no eviction logic; caching lives in glossa.i18n.cache.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from glossa.i18n.content import Message, Text
from glossa.i18n.exceptions import InvalidArgumentError
from glossa.i18n.keys import (
    KeyProviderLike,
    KeyRegistry,
    TranslationKey,
    get_key_registry,
    resolve_translation_key,
)
from glossa.i18n.locales import LocaleProviderLike, LocaleSource, resolve_locale_source
from glossa.logging import get_module_logger

logger = get_module_logger()


class LocaleTranslations:
    """Texts and messages of a single locale.

    A key is expected to denote either a text or a message, never both;
    the loader that builds the store is responsible for that.

    Attributes:
        locale_source: The locale these translations belong to.
    """

    def __init__(
        self,
        locale_source: LocaleSource,
        texts: Optional[Mapping[TranslationKey, Text]] = None,
        messages: Optional[Mapping[TranslationKey, Message]] = None,
    ):
        """Initialize the store.

        Args:
            locale_source: Owning locale.
            texts: Initial key -> Text mapping (copied).
            messages: Initial key -> Message mapping (copied).

        Raises:
            InvalidArgumentError: If locale_source is not a LocaleSource.
        """
        if not isinstance(locale_source, LocaleSource):
            raise InvalidArgumentError("Locale translations require a LocaleSource")
        self.locale_source = locale_source
        self._texts: Dict[TranslationKey, Text] = dict(texts or {})
        self._messages: Dict[TranslationKey, Message] = dict(messages or {})

    @classmethod
    def from_mapping(
        cls,
        locale: LocaleProviderLike,
        data: Mapping[str, Any],
        registry: Optional[KeyRegistry] = None,
    ) -> "LocaleTranslations":
        """Build a store from an already parsed nested mapping.

        Nested mapping names are uppercased and joined with "_" to form key
        names. String leaves become Text, list or tuple leaves become
        Message.

        Example:
            LocaleTranslations.from_mapping(
                "en_US",
                {"menu": {"title": "Menu", "help": ["Line one", "Line two"]}},
            )
            # MENU_TITLE -> Text("Menu"), MENU_HELP -> Message(...)

        Args:
            locale: Locale provider for the owning locale.
            data: Nested mapping of names to strings, lists or mappings.
            registry: Key registry used to intern key names.

        Returns:
            Populated LocaleTranslations.

        Raises:
            InvalidArgumentError: On blank texts, empty messages, non-string
                segments or unsupported value types.
        """
        if not isinstance(data, Mapping):
            raise InvalidArgumentError(
                f"Translation data must be a mapping, got {type(data).__name__}"
            )
        registry = registry or get_key_registry()
        translations = cls(resolve_locale_source(locale))
        translations._fill(data, "", registry)
        logger.info(
            "locale_translations_built",
            locale=translations.locale_source.localization,
            text_count=translations.number_of_texts,
            message_count=translations.number_of_messages,
        )
        return translations

    def _fill(self, data: Mapping[str, Any], prefix: str, registry: KeyRegistry) -> None:
        for name, value in data.items():
            path = f"{prefix}_{str(name).upper()}" if prefix else str(name).upper()
            if isinstance(value, Mapping):
                self._fill(value, path, registry)
            elif isinstance(value, str):
                if not value.strip():
                    raise InvalidArgumentError(f"Text '{path}' must not be blank")
                self._texts[registry.intern_or_create(path)] = Text(value)
            elif isinstance(value, (list, tuple)):
                if not value:
                    raise InvalidArgumentError(f"Message '{path}' must not be empty")
                if not all(isinstance(segment, str) for segment in value):
                    raise InvalidArgumentError(
                        f"Message '{path}' segments must all be strings"
                    )
                self._messages[registry.intern_or_create(path)] = Message(value)
            else:
                raise InvalidArgumentError(
                    f"Unsupported translation value for '{path}': {type(value).__name__}"
                )

    @property
    def texts(self) -> Mapping[TranslationKey, Text]:
        """Read-only view of the texts."""
        return MappingProxyType(self._texts)

    @property
    def messages(self) -> Mapping[TranslationKey, Message]:
        """Read-only view of the messages."""
        return MappingProxyType(self._messages)

    @property
    def number_of_texts(self) -> int:
        return len(self._texts)

    @property
    def number_of_messages(self) -> int:
        return len(self._messages)

    def get_text(self, key: KeyProviderLike) -> Optional[Text]:
        """Return the Text stored under ``key``, or None."""
        return self._texts.get(resolve_translation_key(key))

    def get_message(self, key: KeyProviderLike) -> Optional[Message]:
        """Return the Message stored under ``key``, or None."""
        return self._messages.get(resolve_translation_key(key))

    find_text_or_null = get_text
    find_message_or_null = get_message

    def clear(self) -> None:
        """Empty both tables and drop the locale's cached descriptor."""
        self._texts = {}
        self._messages = {}
        self.locale_source.invalidate()
        logger.info("locale_translations_cleared", locale=self.locale_source.localization)

    def __repr__(self) -> str:
        return (
            f"LocaleTranslations({self.locale_source.localization!r}, "
            f"texts={self.number_of_texts}, messages={self.number_of_messages})"
        )
