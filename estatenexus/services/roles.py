"""
Role evaluation for the two role hierarchies.

Platform roles (admin/agent/buyer) live on the user's profile. Company roles
(admin > manager > agent > employee) live on the active company membership,
and each tier inherits the tiers below it. The hierarchies join at the
"agent" capability: a user is a platform agent either by platform role or by
holding agent-or-above standing in their company.

Pure Python logic - no Supabase access. Every predicate returns False when
the data it depends on is absent.
"""

from typing import Optional

from estatenexus.models.principal import (
    CompanyMembership,
    CompanyRole,
    MembershipStatus,
    PlatformRole,
    Principal,
    SessionSnapshot,
)
from estatenexus.utils.errors import PermissionDeniedError


# ============================================================================
# Predicates
# ============================================================================

def is_authenticated(principal: Optional[Principal]) -> bool:
    """True iff a principal with a usable ID is present."""
    return principal is not None and bool(principal.id)


def is_platform_admin(principal: Optional[Principal]) -> bool:
    return is_authenticated(principal) and principal.role == PlatformRole.ADMIN


def _company_role(membership: Optional[CompanyMembership]) -> Optional[CompanyRole]:
    if membership is None or membership.status != MembershipStatus.ACTIVE:
        return None
    return membership.role


def is_company_admin(membership: Optional[CompanyMembership]) -> bool:
    return _company_role(membership) == CompanyRole.ADMIN


def is_company_manager(membership: Optional[CompanyMembership]) -> bool:
    return _company_role(membership) == CompanyRole.MANAGER or is_company_admin(membership)


def is_company_agent_or_above(membership: Optional[CompanyMembership]) -> bool:
    return _company_role(membership) == CompanyRole.AGENT or is_company_manager(membership)


def is_platform_agent(
    principal: Optional[Principal],
    membership: Optional[CompanyMembership],
) -> bool:
    """Agent capability by platform role or by company standing."""
    if not is_authenticated(principal):
        return False
    if principal.role in (PlatformRole.AGENT, PlatformRole.ADMIN):
        return True
    return is_company_agent_or_above(membership)


# ============================================================================
# Snapshot-bound evaluator
# ============================================================================

_MANAGER_ASSIGNABLE = (CompanyRole.EMPLOYEE, CompanyRole.AGENT, CompanyRole.MANAGER)


class RoleEvaluator:
    """Role predicates and feature permissions for one session snapshot."""

    def __init__(self, snapshot: SessionSnapshot):
        self.snapshot = snapshot

    @property
    def principal(self) -> Optional[Principal]:
        return self.snapshot.principal

    @property
    def membership(self) -> Optional[CompanyMembership]:
        return self.snapshot.membership

    def is_authenticated(self) -> bool:
        return is_authenticated(self.principal)

    def is_platform_agent(self) -> bool:
        return is_platform_agent(self.principal, self.membership)

    def is_platform_admin(self) -> bool:
        return is_platform_admin(self.principal)

    def is_company_admin(self) -> bool:
        return self.is_authenticated() and is_company_admin(self.membership)

    def is_company_manager(self) -> bool:
        return self.is_authenticated() and is_company_manager(self.membership)

    def is_company_agent_or_above(self) -> bool:
        return self.is_authenticated() and is_company_agent_or_above(self.membership)

    # Feature permissions

    def can_manage_listings(self) -> bool:
        return self.is_platform_agent()

    def can_manage_team(self) -> bool:
        return self.is_company_manager()

    def can_edit_company(self) -> bool:
        return self.is_company_admin()

    def assignable_roles(self) -> tuple[CompanyRole, ...]:
        """Company roles this principal may grant to others."""
        if self.is_company_admin():
            return _MANAGER_ASSIGNABLE + (CompanyRole.ADMIN,)
        if self.is_company_manager():
            return _MANAGER_ASSIGNABLE
        return ()

    def dashboard_kind(self) -> PlatformRole:
        if self.is_platform_admin():
            return PlatformRole.ADMIN
        if self.is_platform_agent():
            return PlatformRole.AGENT
        return PlatformRole.BUYER

    def require(self, allowed: bool, action: str) -> None:
        """Raise PermissionDeniedError unless ``allowed``."""
        if not allowed:
            raise PermissionDeniedError(action)
