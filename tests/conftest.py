"""Pytest fixtures shared by unit and integration tests."""

import pytest

from scout.config import get_settings
from scout.forensics.merge import APOLLO_PROVENANCE, SupplementalData, scrape_provenance
from scout.models import SocialLinks

from fixtures.leads import make_bare_lead, make_lead, make_verifying_lead


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; tests that patch env need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def lead():
    """A lead with a website and nothing else populated."""
    return make_lead()


@pytest.fixture
def bare_lead():
    return make_bare_lead()


@pytest.fixture
def verifying_lead():
    return make_verifying_lead()


@pytest.fixture
def apollo_layer_data() -> SupplementalData:
    """Apollo-style layer supplying a phone and a LinkedIn page."""
    return SupplementalData(
        provenance=APOLLO_PROVENANCE,
        phone="555-1111",
        social_links=SocialLinks(linked_in="https://linkedin.com/company/acme"),
    )


@pytest.fixture
def scrape_layer_data() -> SupplementalData:
    """Website scrape supplying only an Instagram handle."""
    return SupplementalData(
        provenance=scrape_provenance("https://acme.com"),
        social_links=SocialLinks(instagram="acme"),
    )
