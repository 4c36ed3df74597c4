"""Supabase auth and profile lookups used by the session store."""

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from pydantic import ValidationError

from estatenexus.models.principal import AuthIdentity, CompanyMembership, MembershipStatus, Principal
from estatenexus.services.supabase_client import SupabaseClient, first_row, get_supabase_client
from estatenexus.utils.errors import AuthError, SupabaseError
from estatenexus.utils.logging import get_structured_logger, mask_sensitive_data, mask_user_id

logger = get_structured_logger(__name__)

AuthListener = Callable[[str, Optional[AuthIdentity]], None]

MEMBERSHIP_SELECT = "*, company:companies(id, name, description)"


def identity_from_session(session: Any) -> Optional[AuthIdentity]:
    """Extract the identity from a Supabase auth session (None when signed out)."""
    user = getattr(session, "user", None) if session is not None else None
    user_id = getattr(user, "id", None)
    if not user_id:
        return None
    return AuthIdentity(id=str(user_id), email=getattr(user, "email", None))


def _error_message(error: Exception, fallback: str) -> str:
    return getattr(error, "message", None) or str(error) or fallback


@runtime_checkable
class AuthGateway(Protocol):
    """Auth and identity operations the session store depends on."""

    async def get_session(self) -> Optional[AuthIdentity]: ...

    def subscribe(self, listener: AuthListener) -> Callable[[], None]: ...

    async def sign_in(self, email: str, password: str) -> None: ...

    async def sign_up(self, email: str, password: str, full_name: str) -> None: ...

    async def sign_out(self) -> None: ...

    async def fetch_profile(self, user_id: str) -> Optional[Principal]: ...

    async def fetch_active_membership(self, user_id: str) -> Optional[CompanyMembership]: ...


class SupabaseAuthGateway:
    """Auth/identity collaborator backed by Supabase auth and the profiles tables."""

    async def get_session(self) -> Optional[AuthIdentity]:
        async with SupabaseClient() as client:
            try:
                session = client.auth.get_session()
            except Exception as e:
                raise SupabaseError(f"Failed to get session: {e}")
        return identity_from_session(session)

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register ``listener`` for auth-state changes; returns an unsubscribe callable."""
        def _callback(event: Any, session: Any) -> None:
            listener(str(getattr(event, "value", event)), identity_from_session(session))

        subscription = get_supabase_client().auth.on_auth_state_change(_callback)
        return subscription.unsubscribe

    async def sign_in(self, email: str, password: str) -> None:
        async with SupabaseClient() as client:
            try:
                client.auth.sign_in_with_password({"email": email, "password": password})
            except Exception as e:
                raise AuthError(f"Sign in failed: {e}", _error_message(e, "Error signing in"))
        logger.info("Signed in", email=mask_sensitive_data(email))

    async def sign_up(self, email: str, password: str, full_name: str) -> None:
        async with SupabaseClient() as client:
            try:
                client.auth.sign_up({
                    "email": email,
                    "password": password,
                    "options": {"data": {"full_name": full_name}},
                })
            except Exception as e:
                raise AuthError(f"Sign up failed: {e}", _error_message(e, "Error signing up"))
        logger.info("Signed up, verification email pending", email=mask_sensitive_data(email))

    async def sign_out(self) -> None:
        async with SupabaseClient() as client:
            try:
                client.auth.sign_out()
            except Exception as e:
                raise AuthError(f"Sign out failed: {e}", _error_message(e, "Error signing out"))

    async def fetch_profile(self, user_id: str) -> Optional[Principal]:
        """Profile row for ``user_id`` as a Principal, or None when there is no row."""
        async with SupabaseClient() as client:
            try:
                result = client.table("profiles").select("*").eq("id", user_id).execute()
            except Exception as e:
                raise SupabaseError(f"Failed to fetch profile: {e}")

        row = first_row(result)
        if row is None:
            return None
        try:
            return Principal.model_validate(row)
        except ValidationError as e:
            logger.warning("Profile row failed validation", user_id=mask_user_id(user_id), error=str(e))
            raise SupabaseError(f"Invalid profile for user: {e}")

    async def fetch_active_membership(self, user_id: str) -> Optional[CompanyMembership]:
        async with SupabaseClient() as client:
            try:
                result = (
                    client.table("company_members")
                    .select(MEMBERSHIP_SELECT)
                    .eq("user_id", user_id)
                    .eq("status", MembershipStatus.ACTIVE.value)
                    .execute()
                )
            except Exception as e:
                raise SupabaseError(f"Failed to fetch company membership: {e}")

        row = first_row(result)
        if row is None:
            return None
        try:
            return CompanyMembership.model_validate(row)
        except ValidationError as e:
            raise SupabaseError(f"Invalid company membership: {e}")
