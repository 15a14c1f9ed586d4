"""Gatehouse base class. Provides unified logging and context management."""

from abc import ABC, ABCMeta

from gatehouse.core.logging.logger import get_logger

LOGGER_KWARGS = {
    "log_dir",
    "logger_level",
    "stream_level",
    "file_level",
    "file_mode",
    "propagate",
    "max_bytes",
    "backup_count",
    "use_structlog",
    "structlog_json",
    "structlog_bind",
}


class GatehouseMeta(type):
    """Metaclass for Gatehouse classes.

    Lets classes deriving from Gatehouse use the same default logger within class methods as within instance
    methods::

        from gatehouse.core import Gatehouse

        class MyClass(Gatehouse):
            def instance_method(self):
                self.logger.info(f"Using logger: {self.logger.name}")  # gatehouse.my_module.MyClass

            @classmethod
            def class_method(cls):
                cls.logger.info(f"Using logger: {cls.logger.name}")  # gatehouse.my_module.MyClass
    """

    def __init__(cls, name, bases, attr_dict):
        super().__init__(name, bases, attr_dict)
        cls._logger = None

    @property
    def logger(cls):
        if cls._logger is None:
            cls._logger = get_logger(cls.unique_name)
        return cls._logger

    @logger.setter
    def logger(cls, new_logger):
        cls._logger = new_logger

    @property
    def unique_name(cls) -> str:
        return cls.__module__ + "." + cls.__name__


class Gatehouse(metaclass=GatehouseMeta):
    """Base class for Gatehouse components.

    Adds a per-class logger and context-manager support. Exceptions raised inside a ``with`` block are logged and
    re-raised unless the instance was created with ``suppress=True``.
    """

    def __init__(self, suppress: bool = False, **kwargs):
        """
        Args:
            suppress: Whether to suppress exceptions in context manager use.
            **kwargs: Logger kwargs passed to `get_logger` (log_dir, logger_level, stream_level, file_level, file_mode,
                propagate, max_bytes, backup_count, use_structlog, structlog_json, structlog_bind).
        """
        unknown = set(kwargs) - LOGGER_KWARGS
        if unknown:
            raise TypeError(f"Unexpected keyword arguments for {type(self).__name__}: {sorted(unknown)}")
        self.suppress = suppress
        if kwargs:
            self.logger = get_logger(self.unique_name, **kwargs)
        else:
            self.logger = type(self).logger

    @property
    def unique_name(self) -> str:
        return type(self).__module__ + "." + type(self).__name__

    @property
    def name(self) -> str:
        return type(self).__name__

    def __enter__(self):
        self.logger.debug(f"Initializing {self.name} as a context manager.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.debug(f"Exiting context manager for {self.name}.")
        if exc_type is not None:
            self.logger.exception("Exception occurred", exc_info=(exc_type, exc_val, exc_tb))
            return self.suppress
        return False


class GatehouseABCMeta(GatehouseMeta, ABCMeta):
    """Metaclass combining GatehouseMeta and ABCMeta, so abstract classes can also be Gatehouse classes."""

    pass


class GatehouseABC(Gatehouse, ABC, metaclass=GatehouseABCMeta):
    """Abstract base class with Gatehouse logging and context management.

    Example::

        from abc import abstractmethod

        from gatehouse.core import GatehouseABC

        class MyAbstractClient(GatehouseABC):
            @abstractmethod
            async def login(self, email, password):
                '''Must be implemented by concrete subclasses.'''
    """
