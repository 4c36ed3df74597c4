"""Property search endpoint."""

from http.server import BaseHTTPRequestHandler
from urllib.parse import parse_qsl, urlsplit
import asyncio
import json
import logging

from estatenexus.services.facets import price_bounds
from estatenexus.services.listing_repository import ListingRepository
from estatenexus.services.search import search_listings
from estatenexus.utils.errors import SupabaseError
from estatenexus.utils.logging import correlation_context
from estatenexus.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
_logger = logging.getLogger(__name__)


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for property search."""

    def do_GET(self):
        """Search listings: q, location, type, price_min, price_max, beds, baths, sort, page, page_size."""
        with correlation_context():
            try:
                params = dict(parse_qsl(urlsplit(self.path).query))
                listings = asyncio.run(ListingRepository().fetch_listings())
                page = search_listings(listings, params)
                body = page.model_dump(mode="json", by_alias=True)
                low, high = price_bounds(listings)
                body["price_bounds"] = {"min": low, "max": high}
                self._send_json(200, body)
            except SupabaseError as e:
                _logger.warning(f"Listing fetch failed: {e}")
                self._send_json(502, {"error": "listings unavailable"})
            except Exception as e:
                _logger.error(f"Error searching properties: {e}", exc_info=True)
                self._send_json(500, {"error": "internal server error"})

    def _send_json(self, status: int, payload: dict) -> None:
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode('utf-8'))
