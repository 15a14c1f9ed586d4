"""Per-browser login objects, keyed by the Reflex client token.

Reflex state is serialized between events, so the session store and the form live here instead of on the state.
Entries are dropped on logout and after ``CLIENT_IDLE_TIMEOUT`` seconds without an event from their browser.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from gatehouse.core import get_logger, ifnone
from gatehouse.login import (
    LoginForm,
    LoginSettings,
    SessionStore,
    create_login_form,
    create_session_store,
    get_login_settings,
)
from gatehouse.ui.navigation import ReflexNavigator

logger = get_logger(__name__)


@dataclass
class ClientLogin:
    session: SessionStore
    navigator: ReflexNavigator = field(default_factory=ReflexNavigator)
    form: Optional[LoginForm] = None
    last_seen: float = field(default_factory=time.monotonic)

    def login_form(self, settings: Optional[LoginSettings] = None) -> LoginForm:
        if self.form is None:
            self.form = create_login_form(self.session, self.navigator, settings=settings)
        return self.form

    def close(self) -> None:
        """Discard typed input, the session and any queued redirects."""
        if self.form is not None:
            self.form.unmount()
            self.form = None
        self.session.logout()
        self.navigator.drain()


_clients: Dict[str, ClientLogin] = {}


def get_client(client_token: str, *, now: Optional[float] = None) -> ClientLogin:
    """Return the login objects for ``client_token``, creating them on first use. Idle entries are evicted first."""
    now = ifnone(now, time.monotonic())
    evict_idle(now)
    client = _clients.get(client_token)
    if client is None:
        client = ClientLogin(session=create_session_store())
        _clients[client_token] = client
    client.last_seen = now
    return client


def forget_client(client_token: str) -> None:
    client = _clients.pop(client_token, None)
    if client is not None:
        client.close()


def evict_idle(now: Optional[float] = None, *, idle_timeout: Optional[float] = None) -> int:
    """Forget every client idle for longer than ``idle_timeout`` seconds. Returns the number evicted."""
    now = ifnone(now, time.monotonic())
    idle_timeout = ifnone(idle_timeout, get_login_settings().CLIENT_IDLE_TIMEOUT)
    stale = [token for token, client in _clients.items() if now - client.last_seen > idle_timeout]
    for token in stale:
        forget_client(token)
    if stale:
        logger.debug(f"Evicted {len(stale)} idle login client(s).")
    return len(stale)


def client_count() -> int:
    return len(_clients)
