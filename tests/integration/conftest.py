"""Pytest fixtures for collaborator integration tests.

Collaborators talk to a mocked HTTP transport; no network is used.
"""

import httpx
import pytest

from fixtures.http import RecordingHandler
from fixtures.leads import APOLLO_ORGANIZATION, APOLLO_PEOPLE


@pytest.fixture
def apollo_ok_handler() -> RecordingHandler:
    """Apollo API answering both company and people lookups."""
    return RecordingHandler(
        {
            "/organizations/enrich": httpx.Response(200, json={"organization": APOLLO_ORGANIZATION}),
            "/mixed_people/search": httpx.Response(200, json={"people": APOLLO_PEOPLE}),
        }
    )
