"""Tests for listing persistence."""

import pytest
from unittest.mock import MagicMock, patch

from estatenexus.models.listing import ListingForm, PropertyType
from estatenexus.models.principal import PlatformRole, SessionSnapshot
from estatenexus.services.listing_repository import (
    DEFAULT_AGENT_AVATAR,
    PLACEHOLDER_AGENT,
    ListingRepository,
    listing_from_row,
)
from estatenexus.services.roles import RoleEvaluator
from estatenexus.utils.errors import PermissionDeniedError, SupabaseError
from tests.utils.factories import create_property_row, make_principal


def _form(**overrides) -> ListingForm:
    data = {
        "title": "Downtown loft",
        "type": "Apartment",
        "address": "5 River St",
        "city": "Portland",
        "state": "OR",
        "price": 420000,
        "beds": 2,
        "baths": 1,
        "area": 1100,
        "images": ["https://example.com/loft.jpg"],
    }
    data.update(overrides)
    return ListingForm.model_validate(data)


def _mock_client(data):
    client = MagicMock()
    query = MagicMock()
    for method in ("select", "insert", "update", "delete", "eq", "order"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data)
    client.table.return_value = query
    return client, query


def _patched(client):
    patcher = patch("estatenexus.services.listing_repository.SupabaseClient")
    mock_client_class = patcher.start()
    mock_client_class.return_value.__aenter__.return_value = client
    mock_client_class.return_value.__aexit__.return_value = None
    return patcher


@pytest.fixture
def agent_evaluator():
    principal = make_principal(role=PlatformRole.AGENT, company_id="company-7")
    return RoleEvaluator(SessionSnapshot.resolved(principal=principal))


@pytest.fixture
def buyer_evaluator(buyer_snapshot):
    return RoleEvaluator(buyer_snapshot)


@pytest.mark.unit
def test_listing_from_row_maps_columns():
    row = create_property_row(id=17, latitude=30.2, longitude=-97.7)
    listing = listing_from_row(row)

    assert listing.id == "17"
    assert listing.property_type == PropertyType.CONDO
    assert listing.location.city == "Austin"
    assert listing.location.latitude == 30.2
    assert listing.agent.name == row["agent"]["full_name"]
    assert listing.agent.avatar == DEFAULT_AGENT_AVATAR


@pytest.mark.unit
def test_listing_from_row_without_agent_uses_placeholder():
    listing = listing_from_row(create_property_row(agent=None))
    assert listing.agent.name == PLACEHOLDER_AGENT["name"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_listings_newest_first_and_skips_bad_rows():
    rows = [create_property_row(id="a"), create_property_row(id="b", baths=1.3), create_property_row(id="c")]
    client, query = _mock_client(rows)
    patcher = _patched(client)
    try:
        listings = await ListingRepository().fetch_listings()
    finally:
        patcher.stop()

    assert [listing.id for listing in listings] == ["a", "c"]
    client.table.assert_called_with("properties")
    query.order.assert_called_once_with("created_at", desc=True)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_listings_skips_infinite_values():
    rows = [
        create_property_row(id="a"),
        create_property_row(id="b", baths="Infinity"),
        create_property_row(id="c", price="Infinity"),
        create_property_row(id="d"),
    ]
    client, _ = _mock_client(rows)
    patcher = _patched(client)
    try:
        listings = await ListingRepository().fetch_listings()
    finally:
        patcher.stop()

    assert [listing.id for listing in listings] == ["a", "d"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_listings_wraps_query_errors():
    client, query = _mock_client([])
    query.execute.side_effect = Exception("connection refused")
    patcher = _patched(client)
    try:
        with pytest.raises(SupabaseError):
            await ListingRepository().fetch_listings()
    finally:
        patcher.stop()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_listing_not_found():
    client, _ = _mock_client([])
    patcher = _patched(client)
    try:
        assert await ListingRepository().fetch_listing("missing") is None
    finally:
        patcher.stop()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_listing_sets_owner(agent_evaluator):
    created_row = create_property_row(id="new-1", agent=None)
    client, query = _mock_client([created_row])
    patcher = _patched(client)
    try:
        listing = await ListingRepository().create_listing(_form(), agent_evaluator)
    finally:
        patcher.stop()

    inserted = query.insert.call_args[0][0]
    assert inserted["agent_id"] == agent_evaluator.principal.id
    assert inserted["company_id"] == "company-7"
    assert inserted["type"] == "Apartment"
    assert listing.id == "new-1"
    assert listing.agent.name == agent_evaluator.principal.full_name


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_listing_denied_for_buyer(buyer_evaluator):
    client, query = _mock_client([])
    patcher = _patched(client)
    try:
        with pytest.raises(PermissionDeniedError):
            await ListingRepository().create_listing(_form(), buyer_evaluator)
    finally:
        patcher.stop()

    query.insert.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_listing_without_returned_row_fails(agent_evaluator):
    client, _ = _mock_client([])
    patcher = _patched(client)
    try:
        with pytest.raises(SupabaseError):
            await ListingRepository().create_listing(_form(), agent_evaluator)
    finally:
        patcher.stop()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_listing_refetches(agent_evaluator):
    row = create_property_row(id="p-1", title="Downtown loft", type="Apartment")
    client, query = _mock_client([row])
    patcher = _patched(client)
    try:
        listing = await ListingRepository().update_listing("p-1", _form(), agent_evaluator)
    finally:
        patcher.stop()

    query.update.assert_called_once()
    query.eq.assert_any_call("id", "p-1")
    assert listing.title == "Downtown loft"
    assert listing.property_type == PropertyType.APARTMENT


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_listing_missing_row_fails(agent_evaluator):
    client, _ = _mock_client([])
    patcher = _patched(client)
    try:
        with pytest.raises(SupabaseError):
            await ListingRepository().update_listing("p-404", _form(), agent_evaluator)
    finally:
        patcher.stop()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_listing(agent_evaluator, buyer_evaluator):
    client, query = _mock_client([])
    patcher = _patched(client)
    try:
        with pytest.raises(PermissionDeniedError):
            await ListingRepository().delete_listing("p-1", buyer_evaluator)
        query.delete.assert_not_called()

        await ListingRepository().delete_listing("p-1", agent_evaluator)
    finally:
        patcher.stop()

    query.delete.assert_called_once()
    query.eq.assert_called_with("id", "p-1")
