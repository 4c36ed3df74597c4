"""Principal, company membership and session snapshot models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class PlatformRole(str, Enum):
    """Platform-wide role stored on the user's profile."""
    ADMIN = "admin"
    AGENT = "agent"
    BUYER = "buyer"


class CompanyRole(str, Enum):
    """Company-scoped role. Ordering: admin > manager > agent > employee."""
    ADMIN = "admin"
    MANAGER = "manager"
    AGENT = "agent"
    EMPLOYEE = "employee"


class MembershipStatus(str, Enum):
    """Company membership status."""
    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"


class SessionStatus(str, Enum):
    """Resolution state of the current session."""
    PENDING = "pending"
    RESOLVED = "resolved"


class AuthIdentity(BaseModel):
    """Identity carried by an auth session."""
    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None


class Principal(BaseModel):
    """The authenticated user and their profile."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Auth user ID")
    email: Optional[str] = Field(None, description="Email address")
    role: Optional[PlatformRole] = Field(None, description="Platform role (None when the profile could not be loaded)")
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    company_id: Optional[str] = None


class CompanySummary(BaseModel):
    """Company fields joined onto a membership."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None


class CompanyMembership(BaseModel):
    """Link between a principal and a company."""
    model_config = ConfigDict(frozen=True)

    id: str
    company_id: str
    user_id: Optional[str] = None
    role: CompanyRole
    status: MembershipStatus
    company: Optional[CompanySummary] = None


class SessionSnapshot(BaseModel):
    """Immutable view of the session published to readers."""
    model_config = ConfigDict(frozen=True)

    status: SessionStatus = SessionStatus.PENDING
    principal: Optional[Principal] = None
    membership: Optional[CompanyMembership] = None
    notice: Optional[str] = Field(None, description="Non-fatal message for the user")

    @classmethod
    def pending(cls) -> "SessionSnapshot":
        return cls(status=SessionStatus.PENDING)

    @classmethod
    def resolved(
        cls,
        principal: Optional[Principal] = None,
        membership: Optional[CompanyMembership] = None,
        notice: Optional[str] = None,
    ) -> "SessionSnapshot":
        return cls(
            status=SessionStatus.RESOLVED,
            principal=principal,
            membership=membership,
            notice=notice,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == SessionStatus.PENDING
