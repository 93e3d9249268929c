"""Tests for glossa.i18n.keys module."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from glossa.i18n import (
    InvalidArgumentError,
    KeyNotFoundError,
    KeyRegistry,
    TranslationKey,
    TranslationKeyEnum,
    get_key_registry,
    resolve_translation_key,
)
from glossa.i18n.keys import normalize_key


class Keys(TranslationKeyEnum):
    GREETING = "greeting"
    FAREWELL = "farewell"


@pytest.mark.unit
class TestNormalizeKey:
    """Tests for normalize_key helper."""

    def test_strips_and_uppercases(self):
        """Whitespace is stripped and letters uppercased."""
        assert normalize_key("  menu_title ") == "MENU_TITLE"

    @pytest.mark.parametrize("content", [None, "", "   ", 42])
    def test_rejects_invalid_content(self, content):
        """None, blank and non-string content is rejected."""
        with pytest.raises(InvalidArgumentError):
            normalize_key(content)


@pytest.mark.unit
class TestKeyRegistry:
    """Tests for KeyRegistry interning."""

    def test_intern_or_create_returns_same_instance(self):
        """Equivalent strings intern to the identical key."""
        registry = KeyRegistry()
        first = registry.intern_or_create("greeting")
        second = registry.intern_or_create("  GREETING ")

        assert first is second
        assert first.name == "GREETING"

    def test_ordinals_are_dense(self):
        """Ordinals are assigned 0, 1, 2 in creation order."""
        registry = KeyRegistry()
        keys = [registry.intern_or_create(name) for name in ("a", "b", "c")]

        assert [key.ordinal for key in keys] == [0, 1, 2]
        assert len(registry) == 3

    def test_intern_or_create_rejects_blank(self):
        """Blank content raises InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            KeyRegistry().intern_or_create("   ")

    def test_intern_or_fail_returns_existing(self):
        """intern_or_fail finds previously created keys."""
        registry = KeyRegistry()
        key = registry.intern_or_create("farewell")

        assert registry.intern_or_fail("FAREWELL") is key

    def test_intern_or_fail_raises_for_unknown(self):
        """intern_or_fail does not create keys."""
        registry = KeyRegistry()

        with pytest.raises(KeyNotFoundError):
            registry.intern_or_fail("never_created")
        assert len(registry) == 0

    def test_get_by_ordinal(self):
        """Keys can be looked up by ordinal."""
        registry = KeyRegistry()
        key = registry.intern_or_create("title")

        assert registry.get_by_ordinal(key.ordinal) is key
        assert registry.get_by_ordinal(99) is None
        assert registry.get_by_ordinal(-1) is None

    def test_exists(self):
        """exists() checks both key instances and strings."""
        registry = KeyRegistry()
        key = registry.intern_or_create("title")

        assert registry.exists(key)
        assert registry.exists("title")
        assert "TITLE" in registry
        assert not registry.exists("other")
        assert not registry.exists("")

    def test_exists_rejects_foreign_key(self):
        """A key with a matching ordinal from another registry is not ours."""
        registry = KeyRegistry()
        registry.intern_or_create("title")
        foreign = KeyRegistry().intern_or_create("other")

        assert foreign.ordinal == 0
        assert not registry.exists(foreign)

    def test_clear_restarts_ordinals(self):
        """clear() empties the registry and resets ordinals."""
        registry = KeyRegistry()
        registry.intern_or_create("a")
        registry.intern_or_create("b")

        registry.clear()

        assert len(registry) == 0
        assert registry.intern_or_create("c").ordinal == 0

    def test_concurrent_interning_yields_one_key(self):
        """Concurrent callers interning the same string share one key."""
        registry = KeyRegistry()

        with ThreadPoolExecutor(max_workers=8) as executor:
            keys = list(executor.map(lambda _: registry.intern_or_create("shared"), range(200)))

        assert all(key is keys[0] for key in keys)
        assert len(registry) == 1
        assert keys[0].ordinal == 0


@pytest.mark.unit
class TestTranslationKey:
    """Tests for TranslationKey value semantics."""

    def test_equality_uses_ordinal_only(self):
        """Keys with the same ordinal are equal regardless of name."""
        assert TranslationKey(3, "A") == TranslationKey(3, "B")
        assert TranslationKey(3, "A") != TranslationKey(4, "A")
        assert hash(TranslationKey(3, "A")) == 3

    def test_str_uses_name(self):
        """str() returns the normalized name."""
        assert str(TranslationKey(0, "GREETING")) == "GREETING"
        assert str(TranslationKey(5)) == "5"

    def test_of_uses_process_registry(self):
        """TranslationKey.of interns in the process-wide registry."""
        key = TranslationKey.of("greeting")

        assert get_key_registry().intern_or_fail("GREETING") is key
        assert TranslationKey.of("greeting", deny_creation=True) is key

    def test_of_with_deny_creation_raises(self):
        """deny_creation turns a miss into KeyNotFoundError."""
        with pytest.raises(KeyNotFoundError):
            TranslationKey.of("missing", deny_creation=True)

    def test_key_is_its_own_provider(self):
        """A key resolves to itself."""
        key = TranslationKey.of("greeting")
        assert key.translation_key is key


@pytest.mark.unit
class TestResolveTranslationKey:
    """Tests for key provider resolution."""

    def test_resolves_key_instance(self):
        """TranslationKey instances resolve to themselves."""
        key = TranslationKey.of("greeting")
        assert resolve_translation_key(key) is key

    def test_resolves_existing_string(self):
        """Strings resolve through intern_or_fail."""
        key = TranslationKey.of("greeting")
        assert resolve_translation_key(" greeting ") is key

    def test_unknown_string_raises(self):
        """Strings never create keys during resolution."""
        with pytest.raises(KeyNotFoundError):
            resolve_translation_key("unknown")

    def test_resolves_enum_member(self):
        """TranslationKeyEnum members intern their names."""
        key = resolve_translation_key(Keys.GREETING)

        assert key.name == "GREETING"
        assert Keys.GREETING.translation_key is key

    def test_resolves_callable(self):
        """Zero-argument callables are invoked."""
        key = TranslationKey.of("farewell")
        assert resolve_translation_key(lambda: key) is key

    def test_uses_given_registry(self):
        """Strings resolve against an explicit registry."""
        registry = KeyRegistry()
        key = registry.intern_or_create("local")

        assert resolve_translation_key("local", registry) is key

    @pytest.mark.parametrize("provider", [None, lambda: None, object(), 42])
    def test_invalid_provider_raises(self, provider):
        """Providers yielding nothing raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            resolve_translation_key(provider)
