"""Error handling utilities."""

from typing import Optional


class EstateNexusError(Exception):
    """Base exception for EstateNexus backend."""
    pass


class SupabaseError(EstateNexusError):
    """Supabase operation error."""
    pass


class AuthError(EstateNexusError):
    """Authentication operation error (sign in, sign up, sign out)."""

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class PermissionDeniedError(EstateNexusError):
    """The current principal is not allowed to perform an action."""

    def __init__(self, action: str):
        super().__init__(f"Not permitted: {action}")
        self.action = action
