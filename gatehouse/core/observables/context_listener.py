import logging
from typing import Any

from gatehouse.core.base import Gatehouse


class ContextListener(Gatehouse):
    """Listener base for observable contexts.

    Subclasses define ``<var>_changed(source, old, new)`` methods. Variables named in ``autolog`` get a logging handler
    unless the subclass already defines one.
    """

    def __init__(self, autolog: list[str] | None = None, log_level: int = logging.ERROR, **kwargs):
        super().__init__(**kwargs)
        if autolog is not None:
            for var in autolog:
                method_name = f"{var}_changed"
                if not hasattr(self, method_name):
                    setattr(self, method_name, self._make_auto_logger(var, log_level))

    def _make_auto_logger(self, varname: str, log_level: int):
        def _logger(source: str, old: Any, new: Any):
            self.logger.log(log_level, f"[{source}] {varname} changed: {old} → {new}")

        return _logger
