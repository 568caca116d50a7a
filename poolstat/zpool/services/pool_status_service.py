import asyncio
import re
from typing import List, Optional

from ..core.interfaces.command_executor import ICommandExecutor, CommandResult
from ..core.interfaces.logger_interface import ILogger
from ..core.entities.pool_status import PoolStatus, ListRow
from ..core.exceptions.pool_exceptions import (
    PoolStatusException,
    PoolNotFoundError,
    CommandFailedError,
    CommandTimeoutError,
    ReportParseError,
    HydrationError,
    ValidationException
)
from ..core.result import Result
from ..infrastructure.command_executor import TIMEOUT_EXIT_CODE
from ..parsers.status_parser import ZpoolStatusParser
from ..parsers.list_parser import ZpoolListParser, LIST_COLUMNS

LIST_ARGS = ("list", "-H", "-p", "-o", ",".join(LIST_COLUMNS))

_POOL_NAME_RE = re.compile(r'^[A-Za-z][A-Za-z0-9_.:-]*$')
_RESERVED_POOL_NAMES = {"mirror", "raidz", "draid", "spare", "log", "cache", "special", "dedup"}


class PoolStatusService:
    """Fetches zpool output through the executor and parses it."""

    def __init__(self,
                 executor: ICommandExecutor,
                 logger: ILogger,
                 status_parser: Optional[ZpoolStatusParser] = None,
                 list_parser: Optional[ZpoolListParser] = None,
                 concurrency: int = 4):
        self._executor = executor
        self._logger = logger
        self._status_parser = status_parser or ZpoolStatusParser()
        self._list_parser = list_parser or ZpoolListParser()
        self._concurrency = max(1, concurrency)

    async def get_pool_status(self, pool_name: str) -> Result[PoolStatus, PoolStatusException]:
        """Get the parsed ``zpool status`` report of one pool."""
        self._logger.info(f"Fetching status for pool: {pool_name}")

        validation_result = self._validate_pool_name(pool_name)
        if validation_result.is_failure:
            return Result.failure(validation_result.error)

        command_result = await self._run("status", pool_name)
        if command_result.is_failure:
            if "no such pool" in str(command_result.error.details.get("stderr", "")):
                return Result.failure(PoolNotFoundError(pool_name))
            return Result.failure(command_result.error)

        parsed = self._status_parser.parse(command_result.value.stdout)
        if parsed.is_failure:
            self._logger.error(f"Failed to parse status of pool {pool_name}: {parsed.error}",
                               {"pool": pool_name, "error": parsed.error.to_dict()})
            return Result.failure(ReportParseError("zpool status", parsed.error))

        self._logger.info(f"Successfully parsed status for pool: {pool_name}")
        return Result.success(parsed.value)

    async def list_pools(self) -> Result[List[ListRow], PoolStatusException]:
        """Get the ``zpool list`` summary rows."""
        self._logger.info("Listing all pools")

        command_result = await self._run(*LIST_ARGS)
        if command_result.is_failure:
            return Result.failure(command_result.error)

        parsed = self._list_parser.parse(command_result.value.stdout)
        if parsed.is_failure:
            self._logger.error(f"Failed to parse pool list: {parsed.error}")
            return Result.failure(ReportParseError("zpool list", parsed.error))

        self._logger.info(f"Successfully listed {len(parsed.value)} pools")
        return Result.success(parsed.value)

    async def hydrate(self, row: ListRow) -> Result[PoolStatus, PoolStatusException]:
        """Full status for ``row.name`` with the row's summary figures applied."""
        return (await self.get_pool_status(row.name)).map(lambda status: status.apply_list_row(row))

    async def hydrate_all(self, rows: List[ListRow]) -> Result[List[PoolStatus], HydrationError]:
        """Hydrate every row concurrently, preserving input order.

        The first failing row in input order fails the batch. Rows after a
        known failure are not fetched.
        """
        semaphore = asyncio.Semaphore(self._concurrency)
        first_failure: List[int] = []

        async def hydrate_one(index: int, row: ListRow) -> Optional[Result[PoolStatus, PoolStatusException]]:
            async with semaphore:
                if first_failure and first_failure[0] < index:
                    return None
                result = await self.hydrate(row)
                if result.is_failure and (not first_failure or index < first_failure[0]):
                    first_failure[:] = [index]
                return result

        results = await asyncio.gather(*(hydrate_one(i, row) for i, row in enumerate(rows)))

        if first_failure:
            # rows below the recorded index always ran and succeeded
            index = first_failure[0]
            error = HydrationError(index, rows[index], results[index].error)
            self._logger.error(str(error), {"row_index": index, "pool": rows[index].name})
            return Result.failure(error)

        statuses = [result.value for result in results]
        self._logger.info(f"Hydrated {len(statuses)} pools")
        return Result.success(statuses)

    async def get_all_pool_statuses(self) -> Result[List[PoolStatus], PoolStatusException]:
        """List pools and hydrate each row into a full status."""
        rows = await self.list_pools()
        if rows.is_failure:
            return Result.failure(rows.error)
        return await self.hydrate_all(rows.value)

    # Private helper methods

    def _validate_pool_name(self, pool_name: str) -> Result[str, ValidationException]:
        if (not pool_name or len(pool_name) > 255 or not _POOL_NAME_RE.match(pool_name)
                or pool_name.lower() in _RESERVED_POOL_NAMES):
            return Result.failure(ValidationException(
                f"Invalid pool name: {pool_name!r}", field="pool_name", value=pool_name
            ))
        return Result.success(pool_name)

    async def _run(self, *args: str) -> Result[CommandResult, PoolStatusException]:
        command = " ".join(("zpool",) + args)
        result = await self._executor.execute_zpool(*args)

        if result.returncode == TIMEOUT_EXIT_CODE and not result.stdout:
            return Result.failure(CommandTimeoutError(command, getattr(self._executor, "timeout", 0)))

        # zpool can exit non-zero and still print a usable report
        if not result.usable:
            self._logger.error(f"Command failed: {command}", {"stderr": result.stderr})
            return Result.failure(CommandFailedError(command, result.returncode, result.stderr))

        return Result.success(result)
