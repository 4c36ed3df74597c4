"""Tests for the property search endpoint."""

import pytest
from unittest.mock import AsyncMock, patch
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))
from api.properties import handler
from estatenexus.utils.errors import SupabaseError
from tests.utils.assertions import assert_json_body
from tests.utils.helpers import call_handler


def _call(path, listings=None, error=None):
    with patch("api.properties.ListingRepository") as mock_repo_class:
        mock_repo_class.return_value.fetch_listings = AsyncMock(return_value=listings, side_effect=error)
        return call_handler(handler, path)


@pytest.mark.unit
def test_properties_search(scenario_listings):
    h = _call("/api/properties?type=House&sort=price-asc", listings=scenario_listings)

    assert h.send_response.call_args[0][0] == 200
    body = assert_json_body(h.wfile.read())
    assert [item["id"] for item in body["page_items"]] == ["item1", "item3"]
    assert body["page_items"][0]["type"] == "House"
    assert body["total_pages"] == 1
    assert body["price_bounds"] == {"min": 100000, "max": 500000}


@pytest.mark.unit
def test_properties_empty_catalog():
    h = _call("/api/properties", listings=[])

    body = assert_json_body(h.wfile.read())
    assert body["page_items"] == []
    assert body["total_pages"] == 1
    assert body["price_bounds"] == {"min": 0.0, "max": 0.0}


@pytest.mark.unit
def test_properties_supabase_failure_returns_502():
    h = _call("/api/properties", error=SupabaseError("Failed to fetch listings"))

    assert h.send_response.call_args[0][0] == 502
    assert assert_json_body(h.wfile.read()) == {"error": "listings unavailable"}
