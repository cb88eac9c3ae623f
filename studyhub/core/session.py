"""
Session context and the access gate state machine.

A SessionContext is created for each request from the bearer token or the
session cookie and handed to every screen that needs the signed-in identity.

    unknown --resolve--> authenticated | unauthenticated
    authenticated --logout/expire--> unauthenticated

An expired or revoked token is noticed by resolve(): the auth backend rejects
it and the session starts out unauthenticated. Token lookups are cached for a
minute, so a token that lapses mid-way keeps resolving until its entry expires.

Listeners registered with subscribe() are called after every transition.
"""
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
import logging

from studyhub.core.exceptions import AuthError

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


_TRANSITIONS = {
    SessionState.UNKNOWN: {SessionState.AUTHENTICATED, SessionState.UNAUTHENTICATED},
    SessionState.AUTHENTICATED: {SessionState.UNAUTHENTICATED},
    SessionState.UNAUTHENTICATED: set(),
}

SessionListener = Callable[["SessionContext"], None]


class SessionContext:
    def __init__(self, auth_service, token: Optional[str] = None):
        self.auth_service = auth_service
        self.token = token
        self.state = SessionState.UNKNOWN
        self.identity: Optional[Dict[str, Any]] = None
        self._listeners: List[SessionListener] = []

    @property
    def is_authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED

    @property
    def user_id(self) -> str:
        if not self.is_authenticated:
            raise AuthError("Not authenticated")
        return self.identity["id"]

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _transition(self, new_state: SessionState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid session transition {self.state.value} -> {new_state.value}")
        logger.debug("Session %s -> %s", self.state.value, new_state.value)
        self.state = new_state
        for listener in list(self._listeners):
            listener(self)

    def resolve(self) -> SessionState:
        """Resolve the token against the auth backend. Runs once; no retry."""
        if self.state != SessionState.UNKNOWN:
            return self.state
        if not self.token:
            self._transition(SessionState.UNAUTHENTICATED)
            return self.state
        try:
            self.identity = self.auth_service.get_current_user(self.token)
        except AuthError as e:
            logger.info(f"Session not resolved: {e.message}")
            self._transition(SessionState.UNAUTHENTICATED)
            return self.state
        self._transition(SessionState.AUTHENTICATED)
        return self.state

    def logout(self) -> None:
        if not self.is_authenticated:
            return
        self.auth_service.logout(self.token)
        self._end()

    def expire(self) -> None:
        """The backend rejected the token mid-session"""
        if self.is_authenticated:
            self._end()

    def _end(self) -> None:
        self.identity = None
        self.token = None
        self._transition(SessionState.UNAUTHENTICATED)

    def close(self) -> None:
        """Request teardown: drop listeners so nothing outlives the request"""
        self._listeners.clear()
