"""Tests for glossa.i18n.translations module."""

import pytest

from glossa.i18n import (
    InvalidArgumentError,
    LocaleSource,
    LocaleTranslations,
    Message,
    Text,
    TranslationKey,
)


@pytest.mark.unit
class TestLocaleTranslations:
    """Tests for LocaleTranslations store."""

    def test_from_mapping_flattens_nested_keys(self, english):
        """Nested names are uppercased and joined with underscores."""
        assert english.get_text("MENU_TITLE") == Text("Main menu")
        assert english.get_message("menu_help") == Message(
            ["Use {command} to start", "Use /quit to leave"]
        )

    def test_counts(self, english):
        """Text and message counts reflect the loaded data."""
        assert english.number_of_texts == 4
        assert english.number_of_messages == 1

    def test_kinds_are_separate(self, english):
        """A text key is not found as a message and vice versa."""
        assert english.get_message("GREETING") is None
        assert english.get_text("MENU_HELP") is None

    def test_missing_key_returns_none(self, english):
        """Absent keys return None."""
        key = TranslationKey.of("not_in_store")

        assert english.get_text(key) is None
        assert english.find_text_or_null(key) is None
        assert english.find_message_or_null(key) is None

    def test_views_are_read_only(self, english):
        """texts and messages cannot be mutated through the views."""
        with pytest.raises(TypeError):
            english.texts[TranslationKey.of("x")] = Text("x")

    def test_constructor_copies_mappings(self):
        """Later changes to the source dict do not leak into the store."""
        key = TranslationKey.of("title")
        texts = {key: Text("Title")}
        store = LocaleTranslations(LocaleSource("en_US"), texts=texts)

        texts.clear()

        assert store.get_text(key) == Text("Title")

    def test_requires_locale_source(self):
        """The owning locale must be a LocaleSource."""
        with pytest.raises(InvalidArgumentError):
            LocaleTranslations("en_US")

    @pytest.mark.parametrize(
        "data",
        [
            {"title": "   "},
            {"lines": []},
            {"lines": ["ok", 3]},
            {"count": 3},
            {"flag": None},
        ],
    )
    def test_from_mapping_rejects_invalid_values(self, data):
        """Blank texts, empty messages and unsupported values are rejected."""
        with pytest.raises(InvalidArgumentError):
            LocaleTranslations.from_mapping("en_US", data)

    def test_from_mapping_rejects_non_mapping(self):
        """The root of the data must be a mapping."""
        with pytest.raises(InvalidArgumentError):
            LocaleTranslations.from_mapping("en_US", ["not", "a", "mapping"])

    def test_clear_empties_store_and_invalidates_locale(self, english):
        """clear() drops all content and the cached descriptor."""
        _ = english.locale_source.locale

        english.clear()

        assert english.number_of_texts == 0
        assert english.number_of_messages == 0
        assert english.locale_source._descriptor is None  # pylint: disable=protected-access

    def test_repr(self, polish):
        """repr() shows the locale and counts."""
        assert repr(polish) == "LocaleTranslations('pl_PL', texts=2, messages=0)"
