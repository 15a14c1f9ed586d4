from typing import List

import reflex as rx
from reflex.event import EventSpec

from gatehouse.core import Gatehouse


class ReflexNavigator(Gatehouse):
    """Queues Reflex redirect events until the running event handler returns them to the browser."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._pending: List[EventSpec] = []

    def go_to(self, destination: str, *, replace_history: bool = False) -> None:
        self.logger.debug(f"Queueing redirect to {destination} (replace={replace_history}).")
        self._pending.append(rx.redirect(destination, replace=replace_history))

    def drain(self) -> List[EventSpec]:
        pending, self._pending = self._pending, []
        return pending
