"""Sorting for listings and agents.

All sorts use Python's stable ``sorted`` so items with equal keys keep their
input order; ``reverse=True`` preserves that stability.
"""

import unicodedata
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from estatenexus.models.agent import AgentProfile
from estatenexus.models.listing import Listing


class SortKey(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    EXPERIENCE_DESC = "experience-desc"
    RATING_DESC = "rating-desc"
    LISTINGS_DESC = "listings-desc"
    NAME_ASC = "name-asc"

    @classmethod
    def parse(cls, value: Any, default: "SortKey") -> "SortKey":
        """Map a raw query value to a SortKey, falling back to ``default``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default


def name_collation_key(name: str) -> tuple[str, str]:
    """Accent- and case-insensitive ordering; the raw name breaks ties deterministically."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (stripped.casefold(), name)


# key -> (sort key function, descending)
_LISTING_ORDERS: dict[SortKey, tuple[Callable[[Listing], Any], bool]] = {
    SortKey.NEWEST: (lambda listing: listing.created_at, True),
    SortKey.PRICE_ASC: (lambda listing: listing.price, False),
    SortKey.PRICE_DESC: (lambda listing: listing.price, True),
}

_AGENT_ORDERS: dict[SortKey, tuple[Callable[[AgentProfile], Any], bool]] = {
    SortKey.EXPERIENCE_DESC: (lambda agent: agent.experience, True),
    SortKey.RATING_DESC: (lambda agent: agent.rating, True),
    SortKey.LISTINGS_DESC: (lambda agent: agent.listings_count, True),
    SortKey.NAME_ASC: (lambda agent: name_collation_key(agent.name), False),
}


def _sort(items: Iterable, order: Optional[tuple[Callable, bool]]) -> list:
    if order is None:
        return list(items)
    key, descending = order
    return sorted(items, key=key, reverse=descending)


def sort_listings(items: Iterable[Listing], key: SortKey) -> list[Listing]:
    """New list of listings ordered by ``key``; agent-only keys keep input order."""
    return _sort(items, _LISTING_ORDERS.get(key))


def sort_agents(items: Iterable[AgentProfile], key: SortKey) -> list[AgentProfile]:
    """New list of agents ordered by ``key``; listing-only keys keep input order."""
    return _sort(items, _AGENT_ORDERS.get(key))
