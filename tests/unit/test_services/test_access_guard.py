"""Tests for route access decisions."""

import pytest

from estatenexus.models.principal import CompanyRole, PlatformRole, SessionSnapshot
from estatenexus.services.access_guard import (
    HOME_PATH,
    LOGIN_PATH,
    DecisionKind,
    guard,
    guard_route,
    rule_for_path,
)
from tests.utils.factories import make_membership, make_principal


@pytest.mark.unit
def test_pending_session_waits():
    decision = guard(SessionSnapshot.pending(), "/dashboard")
    assert decision.kind == DecisionKind.PENDING
    assert not decision.allowed


@pytest.mark.unit
def test_pending_wins_even_without_requirements():
    decision = guard(SessionSnapshot.pending(), "/", require_auth=False)
    assert decision.kind == DecisionKind.PENDING


@pytest.mark.unit
def test_anonymous_redirects_to_login_with_return_path(anonymous_snapshot):
    decision = guard(anonymous_snapshot, "/dashboard")
    assert decision.kind == DecisionKind.REDIRECT_TO_LOGIN
    assert decision.redirect_to == LOGIN_PATH
    assert decision.return_to == "/dashboard"


@pytest.mark.unit
def test_authenticated_proceeds(buyer_snapshot):
    assert guard(buyer_snapshot, "/profile").allowed


@pytest.mark.unit
def test_buyer_needing_agent_goes_home(buyer_snapshot):
    decision = guard(buyer_snapshot, "/property/add", require_agent=True)
    assert decision.kind == DecisionKind.REDIRECT_TO_HOME
    assert decision.redirect_to == HOME_PATH


@pytest.mark.unit
def test_company_agent_passes_agent_check():
    principal = make_principal(role=PlatformRole.BUYER, company_id="company-1")
    membership = make_membership(role=CompanyRole.AGENT, user_id=principal.id)
    snapshot = SessionSnapshot.resolved(principal=principal, membership=membership)
    assert guard(snapshot, "/property/add", require_agent=True).allowed


@pytest.mark.unit
def test_admin_requirement(agent_snapshot, admin_snapshot):
    decision = guard(agent_snapshot, "/admin", require_admin=True)
    assert decision.kind == DecisionKind.REDIRECT_TO_HOME
    assert guard(admin_snapshot, "/admin", require_admin=True).allowed


@pytest.mark.unit
def test_login_check_runs_before_role_checks(anonymous_snapshot):
    decision = guard(anonymous_snapshot, "/admin", require_agent=True, require_admin=True)
    assert decision.kind == DecisionKind.REDIRECT_TO_LOGIN


@pytest.mark.unit
def test_profile_without_role_fails_closed():
    snapshot = SessionSnapshot.resolved(principal=make_principal(role=None), notice="Profile unavailable")
    assert guard(snapshot, "/dashboard").allowed
    assert guard(snapshot, "/property/add", require_agent=True).kind == DecisionKind.REDIRECT_TO_HOME


@pytest.mark.unit
@pytest.mark.parametrize(
    "path,expected_pattern",
    [
        ("/dashboard", "/dashboard"),
        ("/dashboard/", "/dashboard"),
        ("/company?tab=team", "/company"),
        ("/property/add", "/property/add"),
        ("/property/edit/abc-123", "/property/edit/:id"),
    ],
)
def test_rule_for_protected_paths(path, expected_pattern):
    assert rule_for_path(path).pattern == expected_pattern


@pytest.mark.unit
@pytest.mark.parametrize("path", ["/", "/properties", "/property/abc-123", "/agents", "/auth", "/property/edit"])
def test_public_paths_have_no_rule(path):
    assert rule_for_path(path) is None


@pytest.mark.unit
def test_guard_route_public_path_proceeds_even_when_anonymous(anonymous_snapshot):
    assert guard_route(anonymous_snapshot, "/properties").allowed


@pytest.mark.unit
def test_guard_route_edit_requires_agent(buyer_snapshot, agent_snapshot):
    assert guard_route(buyer_snapshot, "/property/edit/42").kind == DecisionKind.REDIRECT_TO_HOME
    assert guard_route(agent_snapshot, "/property/edit/42").allowed


@pytest.mark.unit
def test_guard_route_keeps_query_in_return_path(anonymous_snapshot):
    decision = guard_route(anonymous_snapshot, "/company?tab=team")
    assert decision.return_to == "/company?tab=team"
