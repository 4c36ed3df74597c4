"""Liveness endpoint for the listing and agent search API."""

from http.server import BaseHTTPRequestHandler
import json
import logging

from estatenexus.services.agent_directory import list_agents
from estatenexus.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
_logger = logging.getLogger(__name__)

SEARCH_ENDPOINTS = ["/api/properties", "/api/agents"]


class handler(BaseHTTPRequestHandler):
    """Reports whether the bundled agent directory loads; listings need no warm-up."""

    def do_GET(self):
        try:
            agent_count = len(list_agents())
        except Exception as e:
            _logger.error(f"Agent directory failed to load: {e}", exc_info=True)
            self._send_json(503, {"status": "degraded", "service": "estatenexus-backend"})
            return
        self._send_json(200, {
            "status": "ok",
            "service": "estatenexus-backend",
            "endpoints": SEARCH_ENDPOINTS,
            "agents": agent_count,
        })

    def do_POST(self):
        self.do_GET()

    def _send_json(self, status: int, payload: dict) -> None:
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode('utf-8'))
