"""Shared test fixtures for all test modules."""

import json
import os
from pathlib import Path

import pytest

# ── Environment overrides (must be set before importing derpiquery modules) ──
# Neutralise any developer .env so client defaults are predictable.
os.environ["DERPIQUERY_API_KEY"] = ""
os.environ["DERPIQUERY_FILTER_ID"] = "-1"
os.environ["DERPIQUERY_REQUEST_TIMEOUT"] = "5"
os.environ["DERPIQUERY_USER_AGENT"] = "derpiquery-tests"


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def search_page_bytes():
    """Return a saved search.json response body."""
    return (FIXTURES_DIR / "search_page.json").read_bytes()


@pytest.fixture
def search_page_json(search_page_bytes):
    """Return the saved search.json response, parsed."""
    return json.loads(search_page_bytes)


@pytest.fixture
def image_json(search_page_json):
    """Return the first image object of the saved search response."""
    return search_page_json["search"][0]
