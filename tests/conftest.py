import logging
import os
import tempfile

import pytest

# Keep test log files out of the user's cache directory. Must run before gatehouse is imported.
os.environ.setdefault("GATEHOUSE_CORE__LOGGER__LOGGER_DIR", os.path.join(tempfile.gettempdir(), "gatehouse-tests", "logs"))
os.environ.setdefault(
    "GATEHOUSE_CORE__LOGGER__STRUCT_LOGGER_DIR", os.path.join(tempfile.gettempdir(), "gatehouse-tests", "structlogs")
)


def by_slow_marker(item):
    return 0 if item.get_closest_marker("slow") is None else 1


def pytest_addoption(parser):
    parser.addoption("--slow-last", action="store_true", default=False)


def pytest_collection_modifyitems(items, config):
    if config.getoption("--slow-last"):
        items.sort(key=by_slow_marker)


@pytest.fixture(autouse=True)
def configure_logging_for_tests(caplog):
    """Configure logging to work properly with caplog fixture.

    Gatehouse loggers do not propagate past the ``gatehouse`` logger by default; let them reach the root logger so
    caplog can capture them.
    """
    caplog.set_level(logging.DEBUG)

    root_logger = logging.getLogger()
    original_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)

    gatehouse_logger = logging.getLogger("gatehouse")
    original_propagate = gatehouse_logger.propagate
    gatehouse_logger.propagate = True

    yield

    root_logger.setLevel(original_level)
    gatehouse_logger.propagate = original_propagate
