"""Tests for the agent search endpoint."""

import pytest
from unittest.mock import patch
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))
from api.agents import handler
from tests.utils.assertions import assert_json_body
from tests.utils.helpers import call_handler


@pytest.mark.unit
def test_agents_default_search():
    h = call_handler(handler, "/api/agents")

    assert h.send_response.call_args[0][0] == 200
    body = assert_json_body(h.wfile.read())
    assert body["total_items"] == 6
    assert body["page_size"] == 9
    assert body["total_pages"] == 1
    # most experienced first
    assert [a["id"] for a in body["page_items"]][:2] == ["agent-004", "agent-001"]
    assert "CA" in body["options"]["states"]


@pytest.mark.unit
def test_agents_filtered_and_sorted():
    h = call_handler(handler, "/api/agents?location=CA&sort=name-asc")

    body = assert_json_body(h.wfile.read())
    assert [a["name"] for a in body["page_items"]] == ["David Kim", "Michael Rodriguez"]


@pytest.mark.unit
def test_agents_query_and_paging():
    h = call_handler(handler, "/api/agents?experience=10&page_size=1&page=2")

    body = assert_json_body(h.wfile.read())
    assert body["total_items"] == 3
    assert body["total_pages"] == 3
    assert body["page_index"] == 1
    assert [a["id"] for a in body["page_items"]] == ["agent-001"]


@pytest.mark.unit
def test_agents_unexpected_error_returns_500():
    with patch("api.agents.list_agents", side_effect=RuntimeError("boom")):
        h = call_handler(handler, "/api/agents")

    assert h.send_response.call_args[0][0] == 500
    assert assert_json_body(h.wfile.read()) == {"error": "internal server error"}
