"""Shared fixtures for glossa tests."""

import pytest

from glossa.logging import configure_logging
from glossa.services import reset_providers
from tests.factories.i18n import make_english, make_polish, make_service


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Configure logging once, as a host application would; silent under pytest."""
    configure_logging(log_level="INFO", is_production=False)


@pytest.fixture(autouse=True)
def fresh_providers(monkeypatch):
    """Start every test with empty registries and no cached singletons."""
    for name in (
        "ENVIRONMENT",
        "LOG_LEVEL",
        "DEFAULT_LOCALE",
        "TRANSLATION_CACHE_MODE",
        "TRANSLATION_CACHE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_providers()
    yield
    reset_providers()


@pytest.fixture
def english():
    """en_US store with texts and messages."""
    return make_english()


@pytest.fixture
def polish():
    """pl_PL store with a partial set of translations."""
    return make_polish()


@pytest.fixture
def service(english, polish):
    """Service with en_US as default and both stores loaded."""
    return make_service(default_locale="en_US", translations=[english, polish])
