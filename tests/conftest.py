"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("LISTINGS_PAGE_SIZE", "6")
os.environ.setdefault("AGENTS_PAGE_SIZE", "9")
os.environ.setdefault("INVITATION_TTL_DAYS", "7")

from estatenexus.models.listing import Listing
from estatenexus.models.principal import CompanyRole, PlatformRole, SessionSnapshot
from estatenexus.services.roles import RoleEvaluator
from tests.utils.factories import make_agent, make_listing, make_membership, make_principal


@pytest.fixture
def scenario_listings() -> list[Listing]:
    """Three listings: two Houses around a Condo."""
    return [
        make_listing(id="item1", price=100000, type="House"),
        make_listing(id="item2", price=500000, type="Condo"),
        make_listing(id="item3", price=250000, type="House"),
    ]


@pytest.fixture
def scenario_agents():
    return [
        make_agent(id="bob", name="Bob", experience=5),
        make_agent(id="amy", name="Amy", experience=5),
        make_agent(id="cid", name="Cid", experience=9),
    ]


@pytest.fixture
def anonymous_snapshot() -> SessionSnapshot:
    return SessionSnapshot.resolved()


@pytest.fixture
def buyer_snapshot() -> SessionSnapshot:
    return SessionSnapshot.resolved(principal=make_principal(role=PlatformRole.BUYER))


@pytest.fixture
def agent_snapshot() -> SessionSnapshot:
    return SessionSnapshot.resolved(principal=make_principal(role=PlatformRole.AGENT))


@pytest.fixture
def admin_snapshot() -> SessionSnapshot:
    return SessionSnapshot.resolved(principal=make_principal(role=PlatformRole.ADMIN))


@pytest.fixture
def company_manager_evaluator() -> RoleEvaluator:
    principal = make_principal(role=PlatformRole.BUYER, company_id="company-1")
    membership = make_membership(role=CompanyRole.MANAGER, company_id="company-1", user_id=principal.id)
    return RoleEvaluator(SessionSnapshot.resolved(principal=principal, membership=membership))


@pytest.fixture
def company_admin_evaluator() -> RoleEvaluator:
    principal = make_principal(role=PlatformRole.AGENT, company_id="company-1")
    membership = make_membership(role=CompanyRole.ADMIN, company_id="company-1", user_id=principal.id)
    return RoleEvaluator(SessionSnapshot.resolved(principal=principal, membership=membership))


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time

