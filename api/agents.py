"""Agent directory search endpoint."""

from http.server import BaseHTTPRequestHandler
from urllib.parse import parse_qsl, urlsplit
import json
import logging

from estatenexus.services.agent_directory import list_agents
from estatenexus.services.facets import agent_facet_options
from estatenexus.services.search import search_agents
from estatenexus.utils.logging import correlation_context
from estatenexus.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
_logger = logging.getLogger(__name__)


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for agent search."""

    def do_GET(self):
        """Search agents: q, specialization, location, experience, rating, sort, page, page_size."""
        with correlation_context():
            try:
                params = dict(parse_qsl(urlsplit(self.path).query))
                agents = list_agents()
                page = search_agents(agents, params)
                body = page.model_dump(mode="json")
                body["options"] = agent_facet_options(agents).model_dump()
                self._send_json(200, body)
            except Exception as e:
                _logger.error(f"Error searching agents: {e}", exc_info=True)
                self._send_json(500, {"error": "internal server error"})

    def _send_json(self, status: int, payload: dict) -> None:
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode('utf-8'))
