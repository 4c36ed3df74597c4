"""Search pipeline: facets -> sort -> page, driven by query parameters."""

import math
import os
from typing import Any, Iterable, Mapping

from estatenexus.models.agent import AgentProfile
from estatenexus.models.listing import Listing
from estatenexus.services.facets import AgentFacets, ListingFacets, filter_agents, filter_listings, parse_number
from estatenexus.services.pagination import Page, paginate
from estatenexus.services.sorting import SortKey, sort_agents, sort_listings
from estatenexus.utils.logging import get_structured_logger, log_timing, sanitize_search_text

logger = get_structured_logger(__name__)

LISTINGS_PAGE_SIZE = int(os.environ.get("LISTINGS_PAGE_SIZE", "6"))
AGENTS_PAGE_SIZE = int(os.environ.get("AGENTS_PAGE_SIZE", "9"))
MAX_PAGE_SIZE = 100


def page_request(params: Mapping[str, Any], default_size: int) -> tuple[int, int]:
    """
    (page_size, zero-based page_index) from ``page_size`` and 1-based ``page``.

    Missing or malformed values fall back to the first page and the default
    size; sizes are capped at MAX_PAGE_SIZE.
    """
    size = parse_number(params.get("page_size"))
    if size is None or math.isinf(size) or size < 1:
        page_size = default_size
    else:
        page_size = min(int(size), MAX_PAGE_SIZE)

    page = parse_number(params.get("page"))
    if page is None or math.isinf(page):
        page_index = 0
    else:
        page_index = int(page) - 1

    return page_size, page_index


def search_listings(listings: Iterable[Listing], params: Mapping[str, Any]) -> Page[Listing]:
    facets = ListingFacets.from_params(params)
    sort_key = SortKey.parse(params.get("sort"), SortKey.NEWEST)
    page_size, page_index = page_request(params, LISTINGS_PAGE_SIZE)

    with log_timing("search_listings", logger=logger, sort=sort_key.value):
        matched = filter_listings(listings, facets)
        page = paginate(sort_listings(matched, sort_key), page_size, page_index)

    logger.debug(
        "Listing search completed",
        query=sanitize_search_text(facets.query),
        location=sanitize_search_text(facets.location),
        property_type=facets.property_type,
        total_items=page.total_items,
        page_index=page_index,
    )
    return page


def search_agents(agents: Iterable[AgentProfile], params: Mapping[str, Any]) -> Page[AgentProfile]:
    facets = AgentFacets.from_params(params)
    sort_key = SortKey.parse(params.get("sort"), SortKey.EXPERIENCE_DESC)
    page_size, page_index = page_request(params, AGENTS_PAGE_SIZE)

    with log_timing("search_agents", logger=logger, sort=sort_key.value):
        matched = filter_agents(agents, facets)
        page = paginate(sort_agents(matched, sort_key), page_size, page_index)

    logger.debug(
        "Agent search completed",
        query=sanitize_search_text(facets.query),
        specialization=facets.specialization,
        state=facets.state,
        total_items=page.total_items,
        page_index=page_index,
    )
    return page
