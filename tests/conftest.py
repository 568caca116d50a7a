"""
poolstat Test Configuration and Fixtures

Common fixtures for the parser, service and API tests.
"""

import pytest
from unittest.mock import Mock, AsyncMock

from poolstat.zpool.core.interfaces.command_executor import CommandResult
from poolstat.zpool.parsers.list_parser import ZpoolListParser
from poolstat.zpool.parsers.status_parser import ZpoolStatusParser
from tests.fixtures.zpool_outputs import (
    DEGRADED_TAB_REPORT,
    SPECIAL_VDEVS_REPORT,
    LIST_OUTPUT,
)


def zpool_result(stdout: str = "", returncode: int = 0, stderr: str = "") -> CommandResult:
    """CommandResult as returned by the executor."""
    return CommandResult(returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def mock_logger():
    """Mock ILogger."""
    logger = Mock()
    logger.debug = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.exception = Mock()
    return logger


@pytest.fixture
def status_outputs():
    """``zpool status <pool>`` output keyed by pool name."""
    return {
        "boot-pool": DEGRADED_TAB_REPORT.replace("pool: tank", "pool: boot-pool"),
        "tank": DEGRADED_TAB_REPORT,
        "datapool": SPECIAL_VDEVS_REPORT,
    }


@pytest.fixture
def mock_executor(status_outputs):
    """Mock executor answering ``zpool list`` and ``zpool status <pool>``."""

    async def execute_zpool(*args):
        if args[0] == "list":
            return zpool_result(LIST_OUTPUT)
        name = args[1]
        if name in status_outputs:
            return zpool_result(status_outputs[name])
        return zpool_result("", 1, f"cannot open '{name}': no such pool")

    executor = Mock()
    executor.timeout = 30
    executor.execute_zpool = AsyncMock(side_effect=execute_zpool)
    return executor


@pytest.fixture
def status_parser():
    return ZpoolStatusParser()


@pytest.fixture
def list_parser():
    return ZpoolListParser()
