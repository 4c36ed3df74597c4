"""Company registration and team management."""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from estatenexus.models.company import Company, CompanyForm, CompanyMember, Invitation, InvitationForm
from estatenexus.models.principal import CompanyRole, MembershipStatus
from estatenexus.services.roles import RoleEvaluator
from estatenexus.services.supabase_client import SupabaseClient, all_rows, first_row
from estatenexus.utils.errors import PermissionDeniedError, SupabaseError
from estatenexus.utils.logging import get_structured_logger, mask_sensitive_data

logger = get_structured_logger(__name__)

INVITATION_TTL_DAYS = int(os.environ.get("INVITATION_TTL_DAYS", "7"))

MEMBER_SELECT = "*, user:profiles(full_name, email, avatar_url)"


def _require_team_manager(evaluator: RoleEvaluator, company_id: str, action: str) -> None:
    evaluator.require(evaluator.can_manage_team(), action)
    if evaluator.membership.company_id != company_id:
        raise PermissionDeniedError(f"{action} (different company)")


def _require_assignable(evaluator: RoleEvaluator, role: CompanyRole, action: str) -> None:
    if role not in evaluator.assignable_roles():
        raise PermissionDeniedError(f"{action} as {role.value}")


async def create_company(form: CompanyForm, evaluator: RoleEvaluator) -> Company:
    evaluator.require(evaluator.is_authenticated(), "create company")

    async with SupabaseClient() as client:
        try:
            result = client.table("companies").insert(form.to_row()).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to create company: {e}")

    row = first_row(result)
    if row is None:
        raise SupabaseError("Failed to create company: no data returned")
    logger.info("Company created", company_id=row.get("id"))
    return Company.model_validate(row)


async def fetch_company(company_id: str) -> Optional[Company]:
    async with SupabaseClient() as client:
        try:
            result = client.table("companies").select("*").eq("id", company_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to fetch company: {e}")

    row = first_row(result)
    return Company.model_validate(row) if row else None


async def fetch_company_members(company_id: str) -> list[CompanyMember]:
    """Active members of a company with their profile summary."""
    async with SupabaseClient() as client:
        try:
            result = (
                client.table("company_members")
                .select(MEMBER_SELECT)
                .eq("company_id", company_id)
                .eq("status", MembershipStatus.ACTIVE.value)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to fetch company members: {e}")

    return [CompanyMember.model_validate(row) for row in all_rows(result)]


async def invite_member(company_id: str, form: InvitationForm, evaluator: RoleEvaluator) -> Invitation:
    """Create an invitation; the returned record carries the token to deliver."""
    _require_team_manager(evaluator, company_id, "invite member")
    _require_assignable(evaluator, form.role, "invite member")

    async with SupabaseClient() as client:
        try:
            token_result = client.rpc("generate_invitation_token", {}).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to generate invitation token: {e}")

        token = token_result.data
        if not token:
            raise SupabaseError("Failed to generate invitation token: empty token")

        expires_at = datetime.now(timezone.utc) + timedelta(days=INVITATION_TTL_DAYS)
        row: dict[str, Any] = {
            "company_id": company_id,
            "email": form.email,
            "role": form.role.value,
            "invited_by": evaluator.principal.id,
            "token": token,
            "expires_at": expires_at.isoformat(),
        }
        try:
            result = client.table("invitations").insert(row).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to create invitation: {e}")

    created = first_row(result)
    if created is None:
        raise SupabaseError("Failed to create invitation: no data returned")

    logger.info(
        "Invitation created",
        company_id=company_id,
        invitee=mask_sensitive_data(form.email),
        role=form.role.value,
    )
    return Invitation.model_validate({**created, "token": token})


async def accept_invitation(token: str, evaluator: RoleEvaluator) -> Any:
    evaluator.require(evaluator.is_authenticated(), "accept invitation")

    async with SupabaseClient() as client:
        try:
            result = client.rpc("accept_invitation", {"invitation_token": token}).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to accept invitation: {e}")
    return result.data


async def fetch_pending_invitations(company_id: str) -> list[Invitation]:
    """Invitations not yet accepted and not yet expired."""
    now = datetime.now(timezone.utc).isoformat()
    async with SupabaseClient() as client:
        try:
            result = (
                client.table("invitations")
                .select("*")
                .eq("company_id", company_id)
                .is_("accepted_at", "null")
                .gt("expires_at", now)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to fetch invitations: {e}")

    return [Invitation.model_validate(row) for row in all_rows(result)]


async def revoke_invitation(company_id: str, invitation_id: str, evaluator: RoleEvaluator) -> None:
    _require_team_manager(evaluator, company_id, "revoke invitation")

    async with SupabaseClient() as client:
        try:
            client.table("invitations").delete().eq("id", invitation_id).eq("company_id", company_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to revoke invitation: {e}")
    logger.info("Invitation revoked", company_id=company_id, invitation_id=invitation_id)


async def update_member_role(
    company_id: str,
    member_id: str,
    role: CompanyRole,
    evaluator: RoleEvaluator,
) -> CompanyMember:
    _require_team_manager(evaluator, company_id, "change member role")
    _require_assignable(evaluator, role, "change member role")

    async with SupabaseClient() as client:
        try:
            result = (
                client.table("company_members")
                .update({"role": role.value})
                .eq("id", member_id)
                .eq("company_id", company_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to update member role: {e}")

    row = first_row(result)
    if row is None:
        raise SupabaseError(f"Failed to update member role: {member_id}")
    logger.info("Member role updated", company_id=company_id, member_id=member_id, role=role.value)
    return CompanyMember.model_validate(row)


async def remove_member(company_id: str, member_id: str, evaluator: RoleEvaluator) -> None:
    _require_team_manager(evaluator, company_id, "remove member")

    async with SupabaseClient() as client:
        try:
            client.table("company_members").delete().eq("id", member_id).eq("company_id", company_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to remove member: {e}")
    logger.info("Member removed", company_id=company_id, member_id=member_id)
