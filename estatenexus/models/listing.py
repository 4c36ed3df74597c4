"""Listing (property) models."""

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


MIN_YEAR_BUILT = 1800


class PropertyType(str, Enum):
    """Property categories offered on the marketplace."""
    HOUSE = "House"
    APARTMENT = "Apartment"
    CONDO = "Condo"
    TOWNHOUSE = "Townhouse"
    VILLA = "Villa"


def _check_half_steps(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError("baths must be a finite number")
    if (value * 2) != int(value * 2):
        raise ValueError("baths must be a multiple of 0.5")
    return value


def _check_year_built(value: Optional[int]) -> Optional[int]:
    if value is None:
        return value
    current_year = date.today().year
    if not MIN_YEAR_BUILT <= value <= current_year:
        raise ValueError(f"year_built must be between {MIN_YEAR_BUILT} and {current_year}")
    return value


class ListingLocation(BaseModel):
    """Street address and optional coordinates."""
    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Street address")
    city: str = Field(..., description="City")
    state: str = Field(..., description="State")
    zip_code: str = Field("", description="Postal code")
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class ListingAgent(BaseModel):
    """Summary of the agent that owns a listing."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    phone: str
    avatar: str


class Listing(BaseModel):
    """A property listing as shown in search results."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Listing ID")
    title: str = Field(..., description="Listing headline")
    property_type: PropertyType = Field(..., alias="type", description="Property category")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Asking price")
    beds: int = Field(..., ge=0, description="Bedroom count")
    baths: float = Field(..., ge=0, description="Bathroom count (half steps)")
    area: int = Field(..., gt=0, description="Area in square feet")
    description: str = ""
    features: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    location: ListingLocation
    year_built: Optional[int] = None
    garage_spaces: Optional[int] = Field(None, ge=0)
    available: bool = True
    created_at: datetime = Field(..., description="Creation timestamp")
    agent: Optional[ListingAgent] = None

    @field_validator("baths")
    @classmethod
    def validate_baths(cls, v: float) -> float:
        return _check_half_steps(v)

    @field_validator("year_built")
    @classmethod
    def validate_year_built(cls, v: Optional[int]) -> Optional[int]:
        return _check_year_built(v)

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC so ordering never mixes naive and aware values."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ListingForm(BaseModel):
    """Create/update payload for a listing."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    property_type: PropertyType = Field(..., alias="type")
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = ""
    price: float = Field(..., ge=0, allow_inf_nan=False)
    beds: int = Field(..., ge=0)
    baths: float = Field(..., ge=0)
    area: int = Field(..., gt=0)
    description: str = ""
    features: list[str] = Field(default_factory=list)
    images: list[str] = Field(..., min_length=1, description="At least one image is required")
    year_built: Optional[int] = None
    garage_spaces: Optional[int] = Field(None, ge=0)
    company_id: Optional[str] = None

    @field_validator("baths")
    @classmethod
    def validate_baths(cls, v: float) -> float:
        return _check_half_steps(v)

    @field_validator("year_built")
    @classmethod
    def validate_year_built(cls, v: Optional[int]) -> Optional[int]:
        return _check_year_built(v)

    def to_row(self) -> dict[str, Any]:
        """Column values for the properties table (agent/company ids are set by the repository)."""
        return {
            "title": self.title,
            "type": self.property_type.value,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "price": self.price,
            "beds": self.beds,
            "baths": self.baths,
            "area": self.area,
            "description": self.description,
            "features": list(self.features),
            "images": list(self.images),
            "year_built": self.year_built,
            "garage_spaces": self.garage_spaces,
        }
