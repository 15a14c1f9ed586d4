from dataclasses import dataclass
from typing import List

from gatehouse.core import Gatehouse


@dataclass(frozen=True)
class NavigationCall:
    destination: str
    replace_history: bool


class RecordingNavigator(Gatehouse):
    """Navigator that records calls and keeps a browser-like history stack.

    ``go_to(..., replace_history=True)`` overwrites the current entry instead of pushing a new one, so the replaced
    page cannot be reached by going back.
    """

    def __init__(self, start: str = "/login", **kwargs):
        super().__init__(**kwargs)
        self.entries: List[str] = [start]
        self.calls: List[NavigationCall] = []

    @property
    def current(self) -> str:
        return self.entries[-1]

    def go_to(self, destination: str, *, replace_history: bool = False) -> None:
        self.calls.append(NavigationCall(destination, replace_history))
        if replace_history:
            self.entries[-1] = destination
        else:
            self.entries.append(destination)
        self.logger.debug(f"Navigated to {destination} (replace_history={replace_history}).")

    def back(self) -> str:
        """Pop the current entry and return the one now showing. The first entry is never popped."""
        if len(self.entries) > 1:
            self.entries.pop()
        return self.current
