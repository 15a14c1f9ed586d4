from gatehouse.core.utils import ifnone
from gatehouse.core.config import Config, CoreSettings
from gatehouse.core.base import Gatehouse, GatehouseABC, GatehouseABCMeta, GatehouseMeta
from gatehouse.core.logging.logger import get_logger, setup_logger

setup_logger()  # Initialize the default logger

from gatehouse.core.observables.event_bus import EventBus
from gatehouse.core.observables.observable_context import ObservableContext
from gatehouse.core.observables.context_listener import ContextListener


__all__ = [
    "Config",
    "ContextListener",
    "CoreSettings",
    "EventBus",
    "Gatehouse",
    "GatehouseABC",
    "GatehouseABCMeta",
    "GatehouseMeta",
    "get_logger",
    "ifnone",
    "ObservableContext",
    "setup_logger",
]
