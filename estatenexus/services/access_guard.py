"""Route access decisions based on the session snapshot."""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from estatenexus.models.principal import SessionSnapshot
from estatenexus.services.roles import is_authenticated, is_platform_admin, is_platform_agent


LOGIN_PATH = "/auth"
HOME_PATH = "/"


class DecisionKind(str, Enum):
    """Outcome of a guard check."""
    PENDING = "pending"
    PROCEED = "proceed"
    REDIRECT_TO_LOGIN = "redirect_to_login"
    REDIRECT_TO_HOME = "redirect_to_home"


class GuardDecision(BaseModel):
    """Guard outcome. The caller performs any navigation."""
    model_config = ConfigDict(frozen=True)

    kind: DecisionKind
    redirect_to: Optional[str] = None
    return_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.kind == DecisionKind.PROCEED


class RouteRule(BaseModel):
    """Access requirements for a path pattern (``:param`` segments match one segment)."""
    model_config = ConfigDict(frozen=True)

    pattern: str
    require_auth: bool = True
    require_agent: bool = False
    require_admin: bool = False

    def matches(self, path: str) -> bool:
        regex = "^" + re.sub(r":[A-Za-z_]+", "[^/]+", self.pattern) + "/?$"
        return re.match(regex, path) is not None


ROUTE_RULES: tuple[RouteRule, ...] = (
    RouteRule(pattern="/dashboard"),
    RouteRule(pattern="/profile"),
    RouteRule(pattern="/settings"),
    RouteRule(pattern="/company"),
    RouteRule(pattern="/property/add", require_agent=True),
    RouteRule(pattern="/property/edit/:id", require_agent=True),
)


def guard(
    snapshot: SessionSnapshot,
    requested_path: str = HOME_PATH,
    require_auth: bool = True,
    require_agent: bool = False,
    require_admin: bool = False,
) -> GuardDecision:
    """
    Decide whether navigation to ``requested_path`` may proceed.

    Checks run in order: pending session, authentication, agent capability,
    platform admin.
    """
    if snapshot.is_pending:
        return GuardDecision(kind=DecisionKind.PENDING)

    principal = snapshot.principal
    membership = snapshot.membership

    if require_auth and not is_authenticated(principal):
        return GuardDecision(
            kind=DecisionKind.REDIRECT_TO_LOGIN,
            redirect_to=LOGIN_PATH,
            return_to=requested_path,
        )

    if require_agent and not is_platform_agent(principal, membership):
        return GuardDecision(kind=DecisionKind.REDIRECT_TO_HOME, redirect_to=HOME_PATH, return_to=requested_path)

    if require_admin and not is_platform_admin(principal):
        return GuardDecision(kind=DecisionKind.REDIRECT_TO_HOME, redirect_to=HOME_PATH, return_to=requested_path)

    return GuardDecision(kind=DecisionKind.PROCEED)


def rule_for_path(path: str) -> Optional[RouteRule]:
    """Return the rule protecting ``path``, or None for public routes."""
    path = path.split("?", 1)[0]
    for rule in ROUTE_RULES:
        if rule.matches(path):
            return rule
    return None


def guard_route(snapshot: SessionSnapshot, path: str) -> GuardDecision:
    rule = rule_for_path(path)
    if rule is None:
        return GuardDecision(kind=DecisionKind.PROCEED)
    return guard(
        snapshot,
        requested_path=path,
        require_auth=rule.require_auth,
        require_agent=rule.require_agent,
        require_admin=rule.require_admin,
    )
