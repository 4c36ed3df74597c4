"""Session store - owns the current principal and publishes session snapshots."""

import asyncio
from typing import Callable, Optional

from estatenexus.models.principal import AuthIdentity, Principal, SessionSnapshot
from estatenexus.services.auth_gateway import AuthGateway
from estatenexus.services.roles import RoleEvaluator
from estatenexus.utils.errors import EstateNexusError, SupabaseError
from estatenexus.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)

SessionListener = Callable[[SessionSnapshot], None]

SESSION_UNAVAILABLE_NOTICE = "We couldn't verify your session. You can keep browsing while signed out."
PROFILE_UNAVAILABLE_NOTICE = "We couldn't load your profile. Some features are unavailable."
MEMBERSHIP_UNAVAILABLE_NOTICE = "We couldn't load your company membership. Team features are unavailable."

# Events that don't change who is signed in
_IDENTITY_PRESERVING_EVENTS = frozenset({"TOKEN_REFRESHED"})


class SessionStore:
    """
    Owns the session lifecycle and is the single publish point for snapshots.

    Readers only ever see complete snapshots: a new sign-in is published once
    both the profile and the company membership have been loaded. Every
    resolution is tagged with a generation number, and results from an older
    generation (superseded by a later auth event, or arriving after close())
    are discarded.
    """

    def __init__(self, gateway: AuthGateway):
        self._gateway = gateway
        self._snapshot = SessionSnapshot.pending()
        self._identity: Optional[AuthIdentity] = None
        self._listeners: list[SessionListener] = []
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._closed = False

    async def __aenter__(self) -> "SessionStore":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def closed(self) -> bool:
        return self._closed

    def evaluator(self) -> RoleEvaluator:
        return RoleEvaluator(self._snapshot)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a snapshot listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> None:
        """Subscribe to auth changes and resolve the current session."""
        if self._loop is not None:
            raise RuntimeError("SessionStore already started")
        self._loop = asyncio.get_running_loop()

        generation = self._next_generation()
        try:
            self._unsubscribe = self._gateway.subscribe(self._on_auth_state_change)
            identity = await self._gateway.get_session()
        except EstateNexusError as e:
            logger.warning("Session resolution failed, continuing signed out", error=str(e))
            self._commit(generation, None, SessionSnapshot.resolved(notice=SESSION_UNAVAILABLE_NOTICE))
            return

        await self._resolve(identity, generation)

    async def close(self) -> None:
        """Tear down: stop listening, cancel in-flight resolutions, drop listeners."""
        if self._closed:
            return
        self._closed = True

        if self._unsubscribe is not None:
            try:
                self._unsubscribe()
            except Exception as e:
                logger.warning("Failed to unsubscribe from auth changes", error=str(e))
            self._unsubscribe = None

        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._listeners.clear()
        logger.debug("Session store closed", cancelled_resolutions=len(pending))

    async def refresh_profile(self) -> None:
        """Reload profile and membership for the current identity."""
        if self._closed or self._identity is None:
            return
        await self._resolve(self._identity, self._next_generation())

    async def sign_in(self, email: str, password: str) -> None:
        self._ensure_open()
        await self._gateway.sign_in(email, password)

    async def sign_up(self, email: str, password: str, full_name: str) -> None:
        self._ensure_open()
        await self._gateway.sign_up(email, password, full_name)

    async def sign_out(self) -> None:
        self._ensure_open()
        await self._gateway.sign_out()
        self._commit(self._next_generation(), None, SessionSnapshot.resolved())

    async def wait_idle(self) -> None:
        """Wait until queued auth events and in-flight resolutions have finished."""
        await asyncio.sleep(0)
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
            await asyncio.sleep(0)

    # Internals

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("SessionStore is closed")

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _on_auth_state_change(self, event: str, identity: Optional[AuthIdentity]) -> None:
        """Gateway callback; may run on another thread, so hop onto the store's loop."""
        if self._closed or self._loop is None:
            return
        self._loop.call_soon_threadsafe(self._handle_auth_event, event, identity)

    def _handle_auth_event(self, event: str, identity: Optional[AuthIdentity]) -> None:
        if self._closed:
            return

        if (
            event in _IDENTITY_PRESERVING_EVENTS
            and identity is not None
            and self._identity is not None
            and identity.id == self._identity.id
        ):
            return

        generation = self._next_generation()
        logger.debug(
            "Auth state changed",
            auth_event=event,
            user_id=mask_user_id(identity.id) if identity else None,
            generation=generation,
        )

        if identity is None:
            self._commit(generation, None, SessionSnapshot.resolved())
            return

        task = asyncio.ensure_future(self._resolve(identity, generation))
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Session resolution crashed", error=str(error), type=type(error).__name__)

    async def _resolve(self, identity: Optional[AuthIdentity], generation: int) -> None:
        if identity is None:
            self._commit(generation, None, SessionSnapshot.resolved())
            return
        snapshot = await self._load(identity)
        self._commit(generation, identity, snapshot)

    async def _load(self, identity: AuthIdentity) -> SessionSnapshot:
        """Fetch profile then membership; failures degrade to least privilege."""
        bare = Principal(id=identity.id, email=identity.email)

        try:
            principal = await self._gateway.fetch_profile(identity.id)
        except SupabaseError as e:
            logger.warning("Profile fetch failed", user_id=mask_user_id(identity.id), error=str(e))
            return SessionSnapshot.resolved(principal=bare, notice=PROFILE_UNAVAILABLE_NOTICE)

        if principal is None:
            logger.warning("No profile row for user", user_id=mask_user_id(identity.id))
            return SessionSnapshot.resolved(principal=bare, notice=PROFILE_UNAVAILABLE_NOTICE)

        if not principal.company_id:
            return SessionSnapshot.resolved(principal=principal)

        try:
            membership = await self._gateway.fetch_active_membership(identity.id)
        except SupabaseError as e:
            logger.warning("Membership fetch failed", user_id=mask_user_id(identity.id), error=str(e))
            return SessionSnapshot.resolved(principal=principal, notice=MEMBERSHIP_UNAVAILABLE_NOTICE)

        return SessionSnapshot.resolved(principal=principal, membership=membership)

    def _commit(self, generation: int, identity: Optional[AuthIdentity], snapshot: SessionSnapshot) -> bool:
        if self._closed or generation != self._generation:
            logger.debug(
                "Discarding stale session resolution",
                generation=generation,
                current_generation=self._generation,
                closed=self._closed,
            )
            return False

        self._identity = identity
        self._snapshot = snapshot

        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session listener failed")
        return True
