import asyncio

import pytest
from unittest.mock import Mock, AsyncMock

from poolstat.zpool.core.interfaces.command_executor import CommandResult
from poolstat.zpool.infrastructure.command_executor import CommandExecutor, TIMEOUT_EXIT_CODE

SUBPROCESS_EXEC = "poolstat.zpool.infrastructure.command_executor.asyncio.create_subprocess_exec"


@pytest.fixture
def executor():
    return CommandExecutor(timeout=5, zpool_binary="/sbin/zpool")


def fake_process(stdout=b"", stderr=b"", returncode=0):
    process = Mock()
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.kill = Mock()
    process.wait = AsyncMock()
    process.returncode = returncode
    return process


@pytest.mark.asyncio
async def test_rejects_other_subcommands(executor, mocker):
    spawn = mocker.patch(SUBPROCESS_EXEC, new_callable=AsyncMock)

    result = await executor.execute_zpool("destroy", "tank")

    assert not result.success
    assert "not allowed" in result.stderr
    spawn.assert_not_awaited()


@pytest.mark.asyncio
async def test_status_keeps_leading_indentation(executor, mocker):
    spawn = mocker.patch(SUBPROCESS_EXEC, new_callable=AsyncMock,
                         return_value=fake_process(b"  pool: tank\n state: ONLINE\n\n"))

    result = await executor.execute_zpool("status", "tank")

    assert result.success
    assert result.stdout == "  pool: tank\n state: ONLINE"
    assert spawn.await_args.args[:3] == ("/sbin/zpool", "status", "tank")


@pytest.mark.asyncio
async def test_nonzero_exit(executor, mocker):
    mocker.patch(SUBPROCESS_EXEC, new_callable=AsyncMock,
                 return_value=fake_process(b"", b"cannot open 'x': no such pool\n", 1))

    result = await executor.execute_zpool("status", "x")

    assert result.returncode == 1
    assert not result.usable
    assert result.stderr == "cannot open 'x': no such pool"


@pytest.mark.asyncio
async def test_timeout_kills_process(executor, mocker):
    process = fake_process()
    process.communicate = AsyncMock(side_effect=asyncio.TimeoutError)
    mocker.patch(SUBPROCESS_EXEC, new_callable=AsyncMock, return_value=process)

    result = await executor.execute_zpool("list", "-H")

    assert result.returncode == TIMEOUT_EXIT_CODE
    process.kill.assert_called_once()


@pytest.mark.asyncio
async def test_missing_binary(executor, mocker):
    mocker.patch(SUBPROCESS_EXEC, new_callable=AsyncMock, side_effect=FileNotFoundError("zpool"))

    result = await executor.execute_zpool("list")

    assert result.returncode == 1
    assert "Command execution failed" in result.stderr


class TestCommandResult:

    def test_success_defaults_from_returncode(self):
        assert CommandResult(0, "", "").success
        assert not CommandResult(1, "", "").success

    def test_usable(self):
        assert CommandResult(0, "", "").usable
        assert CommandResult(1, "  pool: tank", "").usable
        assert not CommandResult(1, "  ", "boom").usable
