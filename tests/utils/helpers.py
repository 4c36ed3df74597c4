"""Test helper functions."""

from io import BytesIO
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock, Mock

from estatenexus.models.principal import AuthIdentity


class MockSocket:
    """Minimal socket that replays one raw HTTP request."""

    def __init__(self, request_line: bytes):
        self._request = request_line

    def makefile(self, *args, **kwargs):
        return BytesIO(self._request)

    def sendall(self, data):
        pass

    def close(self):
        pass


def call_handler(handler_class, path: str, method: str = "GET"):
    """
    Build a Vercel handler for ``path`` and run ``method`` against a fresh wfile.

    Returns the handler so tests can inspect send_response and the written body.
    """
    request = f"{method} {path} HTTP/1.1\r\n\r\n".encode("utf-8")
    h = handler_class(MockSocket(request), ("127.0.0.1", 8000), None)
    h.wfile = BytesIO()
    h.send_response = Mock()
    h.send_header = Mock()
    h.end_headers = Mock()
    getattr(h, f"do_{method}")()
    h.wfile.seek(0)
    return h


def create_fake_gateway(
    identity: Optional[AuthIdentity] = None,
    profile: Any = None,
    membership: Any = None,
) -> MagicMock:
    """
    Auth gateway double. The registered auth callback is kept on
    ``gateway.listeners`` so tests can fire auth events.
    """
    gateway = MagicMock()
    gateway.listeners = []
    gateway.unsubscribe = Mock()

    def subscribe(listener):
        gateway.listeners.append(listener)
        return gateway.unsubscribe

    gateway.subscribe.side_effect = subscribe
    gateway.get_session = AsyncMock(return_value=identity)
    gateway.fetch_profile = AsyncMock(return_value=profile)
    gateway.fetch_active_membership = AsyncMock(return_value=membership)
    gateway.sign_in = AsyncMock(return_value=None)
    gateway.sign_up = AsyncMock(return_value=None)
    gateway.sign_out = AsyncMock(return_value=None)
    return gateway


def fire_auth_event(gateway: MagicMock, event: str, identity: Optional[AuthIdentity]) -> None:
    for listener in list(gateway.listeners):
        listener(event, identity)


def query_params(**params: Any) -> Dict[str, str]:
    """Query-string style params (every value a string)."""
    return {key: str(value) for key, value in params.items()}
