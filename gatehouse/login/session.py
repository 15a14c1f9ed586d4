"""In-memory session store: the session provider and authenticator consumed by the login form."""

from typing import Any, Dict, Optional

from gatehouse.core import Gatehouse, ObservableContext
from gatehouse.login.clients import CredentialClient
from gatehouse.login.exceptions import SessionNotAuthenticatedError
from gatehouse.login.types import Session, SessionSignal

DEFAULT_EXPIRED_MESSAGE = "session expired, please log in again."


@ObservableContext(vars={"is_authenticated": bool, "expired_message": str})
class SessionStore(Gatehouse):
    """Owns the authenticated session and publishes its changes.

    Subscribers receive ``is_authenticated_changed`` and ``expired_message_changed`` events with ``source``, ``old``
    and ``new`` keyword arguments, only when the value actually changes.

    Example::

        from gatehouse.login.clients import DemoCredentialClient
        from gatehouse.login.session import SessionStore

        store = SessionStore(DemoCredentialClient())
        store.subscribe("is_authenticated_changed", lambda source, old, new: print(new))
        await store.authenticate("ada@example.com", "analytical1")  # prints True
    """

    def __init__(self, client: CredentialClient, *, default_expired_message: str = DEFAULT_EXPIRED_MESSAGE, **kwargs):
        super().__init__(**kwargs)
        self.client = client
        self.default_expired_message = default_expired_message
        self._session: Optional[Session] = None
        self.is_authenticated = False
        self.expired_message = ""

    @property
    def signal(self) -> SessionSignal:
        return SessionSignal(is_authenticated=self.is_authenticated, expired_message=self.expired_message)

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def token(self) -> str:
        if self._session is None:
            raise SessionNotAuthenticatedError("No authenticated session.")
        return self._session.token

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self._session.user if self._session is not None else None

    async def authenticate(self, email: str, password: str) -> Session:
        """Exchange credentials for a session.

        Raises:
            AuthenticationError: The credential client rejected the login. The store is left unchanged.
        """
        session = await self.client.login(email, password)
        self._session = session
        self.logger.info("Session established.")
        self.set_context(expired_message="", is_authenticated=True)
        return session

    def expire(self, message: Optional[str] = None) -> None:
        """Drop the session and publish an expiry notice for the login form."""
        self._session = None
        self.logger.info("Session expired.")
        self.set_context(is_authenticated=False, expired_message=message or self.default_expired_message)

    def acknowledge_expired(self) -> None:
        """Clear the expiry notice once it has been shown."""
        self.expired_message = ""

    def logout(self) -> None:
        self._session = None
        self.set_context(is_authenticated=False, expired_message="")
