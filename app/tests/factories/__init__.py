"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    ENGLISH_DATA,
    POLISH_DATA,
    make_english,
    make_locale_translations,
    make_polish,
    make_service,
)

__all__ = [
    "ENGLISH_DATA",
    "POLISH_DATA",
    "make_english",
    "make_locale_translations",
    "make_polish",
    "make_service",
]
