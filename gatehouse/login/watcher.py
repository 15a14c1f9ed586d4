"""Translates external session changes into navigation and banner updates for one form instance."""

from typing import Any, Callable, Optional

from gatehouse.core import ContextListener
from gatehouse.login.types import Navigator, SessionProvider

DEFAULT_AUTHENTICATED_ROUTE = "/dashboard"


class SessionWatcher(ContextListener):
    """Observes a session provider while attached to a mounted form.

    - When the session becomes authenticated, navigates to ``destination`` replacing the current history entry, so
      the login page is not reachable with the back button. Repeated notifications of the same authenticated state
      navigate once.
    - When an expiry notice is present, shows it through ``show_banner`` and acknowledges it upstream. A notice is
      consumed once; a later notice is consumed again only after the provider cleared the previous one.

    Both checks also run on `attach`, so an already-authenticated mount redirects without user action.
    """

    def __init__(
        self,
        session: SessionProvider,
        navigator: Navigator,
        show_banner: Callable[[str], None],
        *,
        destination: str = DEFAULT_AUTHENTICATED_ROUTE,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.session = session
        self.navigator = navigator
        self.show_banner = show_banner
        self.destination = destination
        self._attached = False
        self._navigated = False
        self._consumed_notice: Optional[str] = None
        self._subscriptions: list[tuple[str, str]] = []

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        if self._attached:
            return
        self._attached = True
        self._subscriptions = [
            ("is_authenticated_changed", self.session.subscribe("is_authenticated_changed", self.is_authenticated_changed)),
            ("expired_message_changed", self.session.subscribe("expired_message_changed", self.expired_message_changed)),
        ]
        signal = self.session.signal
        self._observe_expired(signal.expired_message)
        self._observe_authenticated(signal.is_authenticated)

    def detach(self) -> None:
        for event_name, handler_id in self._subscriptions:
            self.session.unsubscribe(event_name, handler_id)
        self._subscriptions = []
        self._attached = False
        self._navigated = False
        self._consumed_notice = None

    def is_authenticated_changed(self, source: str, old: Any, new: Any) -> None:
        self._observe_authenticated(bool(new))

    def expired_message_changed(self, source: str, old: Any, new: Any) -> None:
        self._observe_expired(new or "")

    def _observe_authenticated(self, is_authenticated: bool) -> None:
        if not self._attached:
            return
        if not is_authenticated:
            self._navigated = False
            return
        if self._navigated:
            return
        self._navigated = True
        self.logger.info(f"Session authenticated; redirecting to {self.destination}.")
        self.navigator.go_to(self.destination, replace_history=True)

    def _observe_expired(self, message: str) -> None:
        if not self._attached:
            return
        if not message:
            self._consumed_notice = None
            return
        if message == self._consumed_notice:
            return
        self._consumed_notice = message
        self.logger.info("Showing session expiry notice.")
        self.show_banner(message)
        self.session.acknowledge_expired()
