"""Facet filtering for listings and agents.

Each facet is optional and the active ones combine with AND. Raw query-string
values are accepted as-is: the ``"all"``/``"any"`` sentinels, blanks and
malformed numbers all mean "no constraint", so filtering never raises on user
input.
"""

import math
import re
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from estatenexus.models.agent import AgentProfile
from estatenexus.models.listing import Listing


ALL = "all"
ANY = "any"

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?)")


def parse_number(value: Any) -> Optional[float]:
    """Lenient numeric parse; None means "no constraint"."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if match is None:
            return None
        number = float(match.group(1))
    if math.isnan(number):
        return None
    return number


def parse_choice(value: Any) -> Optional[str]:
    """Categorical facet value; None for blank or ``"all"``."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() == ALL:
        return None
    return text


def _fold(text: Optional[str]) -> str:
    return (text or "").casefold()


def _contains(haystacks: Iterable[Optional[str]], needle: str) -> bool:
    return any(needle in _fold(h) for h in haystacks)


class _Facets(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def from_params(cls, params: Mapping[str, Any]):
        """Build facets from query parameters keyed by field name or alias."""
        return cls.model_validate(dict(params))


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


class ListingFacets(_Facets):
    """Listing search facets."""
    query: str = Field("", alias="q", description="Matches title, city, state or address")
    location: str = Field("", description="Matches city, state or address")
    property_type: Optional[str] = Field(None, alias="type")
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    beds_min: Optional[int] = Field(None, alias="beds")
    baths_min: Optional[float] = Field(None, alias="baths")

    @field_validator("query", "location", mode="before")
    @classmethod
    def _clean_text(cls, v: Any) -> str:
        return _text(v)

    @field_validator("property_type", mode="before")
    @classmethod
    def _clean_choice(cls, v: Any) -> Optional[str]:
        return parse_choice(v)

    @field_validator("price_min", "price_max", "baths_min", mode="before")
    @classmethod
    def _clean_number(cls, v: Any) -> Optional[float]:
        return parse_number(v)

    @field_validator("beds_min", mode="before")
    @classmethod
    def _clean_count(cls, v: Any) -> Optional[int]:
        number = parse_number(v)
        if number is None or math.isinf(number):
            return None
        return int(number)


class AgentFacets(_Facets):
    """Agent directory facets."""
    query: str = Field("", alias="q", description="Matches name, office city/state or specialization")
    specialization: Optional[str] = None
    state: Optional[str] = Field(None, alias="location")
    experience_min: Optional[float] = Field(None, alias="experience")
    rating_min: Optional[float] = Field(None, alias="rating")

    @field_validator("query", mode="before")
    @classmethod
    def _clean_text(cls, v: Any) -> str:
        return _text(v)

    @field_validator("specialization", "state", mode="before")
    @classmethod
    def _clean_choice(cls, v: Any) -> Optional[str]:
        return parse_choice(v)

    @field_validator("experience_min", "rating_min", mode="before")
    @classmethod
    def _clean_number(cls, v: Any) -> Optional[float]:
        return parse_number(v)


def listing_matches(listing: Listing, facets: ListingFacets) -> bool:
    location = listing.location

    if facets.query:
        needle = _fold(facets.query)
        if not _contains((listing.title, location.city, location.state, location.address), needle):
            return False

    if facets.location:
        needle = _fold(facets.location)
        if not _contains((location.city, location.state, location.address), needle):
            return False

    if facets.property_type is not None and listing.property_type.value != facets.property_type:
        return False

    if facets.price_min is not None and listing.price < facets.price_min:
        return False
    if facets.price_max is not None and listing.price > facets.price_max:
        return False

    if facets.beds_min is not None and listing.beds < facets.beds_min:
        return False
    if facets.baths_min is not None and listing.baths < facets.baths_min:
        return False

    return True


def agent_matches(agent: AgentProfile, facets: AgentFacets) -> bool:
    if facets.query:
        needle = _fold(facets.query)
        fields = (agent.name, agent.office.city, agent.office.state, *agent.specialization)
        if not _contains(fields, needle):
            return False

    if facets.specialization is not None and facets.specialization not in agent.specialization:
        return False

    if facets.state is not None and agent.office.state != facets.state:
        return False

    if facets.experience_min is not None and agent.experience < facets.experience_min:
        return False
    if facets.rating_min is not None and agent.rating < facets.rating_min:
        return False

    return True


def filter_listings(items: Iterable[Listing], facets: ListingFacets) -> list[Listing]:
    """Listings matching every active facet, in input order."""
    return [listing for listing in items if listing_matches(listing, facets)]


def filter_agents(items: Iterable[AgentProfile], facets: AgentFacets) -> list[AgentProfile]:
    """Agents matching every active facet, in input order."""
    return [agent for agent in items if agent_matches(agent, facets)]


# Facet option helpers for building the filter controls

def price_bounds(listings: Iterable[Listing]) -> tuple[float, float]:
    """(min, max) listing price, (0, 0) when there are no listings."""
    prices = [listing.price for listing in listings]
    if not prices:
        return (0.0, 0.0)
    return (min(prices), max(prices))


class AgentFacetOptions(BaseModel):
    specializations: list[str]
    states: list[str]


def agent_facet_options(agents: Iterable[AgentProfile]) -> AgentFacetOptions:
    specializations: set[str] = set()
    states: set[str] = set()
    for agent in agents:
        specializations.update(agent.specialization)
        states.add(agent.office.state)
    return AgentFacetOptions(specializations=sorted(specializations), states=sorted(states))
