"""Identity provider contract and the Session Gate state machine."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog

from shared_types import SessionState

from .errors import AuthError

logger = structlog.get_logger()


@dataclass(frozen=True)
class Session:
    user_id: str
    email: str
    token: str
    expires_at: Optional[datetime] = None


SessionListener = Callable[[Optional[Session]], None]


class IdentityProvider(ABC):
    """Client-side view of an identity service.

    Subclasses call ``_set_session`` whenever the signed-in account changes.
    """

    def __init__(self):
        self._session: Optional[Session] = None
        self._listeners: list[SessionListener] = []

    @property
    def current_session(self) -> Optional[Session]:
        return self._session

    @abstractmethod
    def sign_in(self, email: str, password: str) -> Session:
        """Raises AuthError on rejection."""

    @abstractmethod
    def sign_up(self, email: str, password: str) -> Session:
        """Raises AuthError on rejection."""

    @abstractmethod
    def sign_out(self) -> None: ...

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; it fires now with the current session and on every change.

        Returns:
            A callable that unregisters the listener.
        """
        self._listeners.append(listener)
        listener(self._session)

        def _unregister() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unregister

    def _set_session(self, session: Optional[Session]) -> None:
        self._session = session
        for listener in list(self._listeners):
            listener(session)


GateObserver = Callable[[SessionState, Optional[Session]], None]


class SessionGate:
    """Decides between the auth form and the main app.

    ``on_enter`` runs when the gate becomes authenticated and ``on_leave``
    when it stops being so; the client uses them to start and tear down
    the record subscription.
    """

    def __init__(
        self,
        provider: IdentityProvider,
        on_enter: Optional[Callable[[Session], None]] = None,
        on_leave: Optional[Callable[[], None]] = None,
    ):
        self.provider = provider
        self.state = SessionState.UNAUTHENTICATED
        self.session: Optional[Session] = None
        self.last_error: Optional[str] = None
        self._on_enter = on_enter
        self._on_leave = on_leave
        self._observers: list[GateObserver] = []
        self._unregister: Optional[Callable[[], None]] = None

    def add_observer(self, observer: GateObserver) -> None:
        self._observers.append(observer)

    def start(self) -> None:
        """Begin following the provider's session notifications."""
        if self._unregister is None:
            self._unregister = self.provider.on_session_change(self._on_session)

    def close(self) -> None:
        if self._unregister is not None:
            self._unregister()
            self._unregister = None

    @property
    def authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED

    def _transition(self, state: SessionState, session: Optional[Session]) -> None:
        previous = self.state
        self.state = state
        self.session = session
        logger.debug("session_gate.transition", previous=previous, state=state)
        for observer in list(self._observers):
            observer(state, session)

    def _on_session(self, session: Optional[Session]) -> None:
        if session is not None:
            if self.authenticated and self.session and self.session.user_id == session.user_id:
                self.session = session
                return
            if self.authenticated:
                self._leave()
            self.last_error = None
            self._transition(SessionState.AUTHENTICATED, session)
            if self._on_enter:
                self._on_enter(session)
        elif self.authenticated:
            self._leave()

    def _leave(self) -> None:
        if self._on_leave:
            self._on_leave()
        self._transition(SessionState.UNAUTHENTICATED, None)

    def submit_credentials(self, email: str, password: str, sign_up: bool = False) -> Optional[Session]:
        """Sign in (or sign up) and return the session, or None on failure.

        On failure the gate returns to unauthenticated and keeps the
        provider's message in ``last_error``.
        """
        self.start()
        self.sign_out()
        self.last_error = None
        self._transition(SessionState.AUTHENTICATING, None)
        try:
            if sign_up:
                session = self.provider.sign_up(email, password)
            else:
                session = self.provider.sign_in(email, password)
        except AuthError as e:
            self.last_error = str(e)
            logger.info("session_gate.auth_failed", error=str(e), sign_up=sign_up)
            self._transition(SessionState.UNAUTHENTICATED, None)
            return None
        # Providers normally announce the session themselves; cover those that don't
        if not self.authenticated:
            self._on_session(session)
        return session

    def sign_out(self) -> None:
        """End the provider's session (if any) and leave the authenticated state."""
        if self.authenticated or self.provider.current_session is not None:
            self.provider.sign_out()
        # Provider notification already ran _leave unless it stayed silent
        if self.authenticated:
            self._leave()
