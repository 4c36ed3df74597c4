"""Company and team management models."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field

from estatenexus.models.principal import CompanyRole, MembershipStatus


class CompanyForm(BaseModel):
    """Company registration payload."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    logo_url: Optional[str] = None

    def to_row(self) -> dict[str, Any]:
        return self.model_dump()


class Company(CompanyForm):
    """Company record."""
    id: str
    created_at: Optional[datetime] = None


class MemberProfile(BaseModel):
    """Profile fields joined onto a team member row."""
    full_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None


class CompanyMember(BaseModel):
    """Team member row (membership joined with the member's profile)."""
    id: str
    company_id: str
    user_id: str
    role: CompanyRole
    status: MembershipStatus
    user: Optional[MemberProfile] = None


class InvitationForm(BaseModel):
    """Invitation request."""
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    role: CompanyRole


class Invitation(BaseModel):
    """Pending or accepted invitation to join a company."""
    id: str
    company_id: str
    email: str
    role: CompanyRole
    invited_by: Optional[str] = None
    token: Optional[str] = None
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
