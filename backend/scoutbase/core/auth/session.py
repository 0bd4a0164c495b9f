import logging
from dataclasses import dataclass
from typing import Any, Callable

from jwt.exceptions import InvalidTokenError

from scoutbase.core.auth.jwt import decode_jwt_token, is_token_expired
from scoutbase.core.auth.roles import Role, coerce_role

logger = logging.getLogger(__name__)

AUTH_CHANGED = "authChanged"


@dataclass(frozen=True)
class AuthState:
    is_authenticated: bool
    role: Role | None
    user: dict | None
    pending: bool = False

    @property
    def user_id(self) -> int | None:
        if not self.user:
            return None
        return self.user.get("id")


AuthListener = Callable[[AuthState], Any]


class SessionStore:
    """
    Single source of truth for the signed-in session.

    Every login, logout, token expiry and "who am I" round trip publishes
    an ``authChanged`` notification carrying a fresh ``AuthState``;
    subscribers never keep their own copy of role or user.
    """

    def __init__(self, token: str | None = None, user: dict | None = None):
        self._token = token
        self._user = user
        self._pending = False
        self._listeners: list[AuthListener] = []

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        state = self.state()
        logger.debug(
            f"{AUTH_CHANGED}: authenticated={state.is_authenticated} role={state.role}"
        )
        for listener in list(self._listeners):
            listener(state)

    @property
    def token(self) -> str | None:
        if self._token and self._claims() is None:
            return None
        return self._token

    @property
    def user(self) -> dict | None:
        return self._user

    @property
    def pending(self) -> bool:
        return self._pending

    def _claims(self) -> dict | None:
        """Claims of a usable token; an expired or unreadable token is dropped."""
        if not self._token:
            return None
        try:
            payload = decode_jwt_token(self._token)
        except InvalidTokenError as exc:
            logger.error(f"Error parsing token: {exc}")
            self.clear()
            return None
        if is_token_expired(payload):
            logger.info("Session token expired, clearing session")
            self.clear()
            return None
        return payload

    def is_authenticated(self) -> bool:
        return self._claims() is not None

    def role(self) -> Role | None:
        claims = self._claims()
        if claims is None:
            return None
        role = claims.get("role")
        if role is None and self._user:
            role = self._user.get("role")
        return coerce_role(role)

    def user_id(self) -> int | None:
        if self._user and self._user.get("id") is not None:
            return self._user["id"]
        claims = self._claims()
        return claims.get("id") if claims else None

    def state(self) -> AuthState:
        authenticated = self.is_authenticated()
        return AuthState(
            is_authenticated=authenticated,
            role=self.role() if authenticated else None,
            user=self._user if authenticated else None,
            pending=self._pending,
        )

    def set_session(self, token: str, user: dict | None = None) -> None:
        self._token = token
        self._user = user
        self._publish()

    def set_user(self, user: dict | None) -> None:
        self._user = user
        self._publish()

    def begin_check(self) -> None:
        self._pending = True
        self._publish()

    def end_check(self) -> None:
        self._pending = False
        self._publish()

    def clear(self) -> None:
        had_session = self._token is not None or self._user is not None
        self._token = None
        self._user = None
        if had_session:
            self._publish()
