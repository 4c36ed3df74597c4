"""Agent directory models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class AgentOffice(BaseModel):
    """Office an agent works from."""
    model_config = ConfigDict(frozen=True)

    name: str
    address: str
    city: str
    state: str


class AgentSocial(BaseModel):
    """Social media handles (all optional)."""
    model_config = ConfigDict(frozen=True)

    facebook: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None


class AgentProfile(BaseModel):
    """Public profile of an agent in the directory."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Agent ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Contact email")
    phone: str = Field("", description="Contact phone")
    photo: str = Field("", description="Photo URL")
    bio: str = ""
    specialization: list[str] = Field(default_factory=list, description="Specialization tags")
    experience: int = Field(0, ge=0, description="Years of experience")
    rating: float = Field(0, ge=0, le=5, description="Average rating out of 5")
    review_count: int = Field(0, ge=0)
    listings_count: int = Field(0, ge=0, description="Active listings")
    sold_count: int = Field(0, ge=0)
    office: AgentOffice
    social: AgentSocial = Field(default_factory=AgentSocial)
