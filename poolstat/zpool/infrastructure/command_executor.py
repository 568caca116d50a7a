"""
Concrete implementation of the zpool command executor.
"""
import asyncio
import logging
from typing import List

from ..core.interfaces.command_executor import ICommandExecutor, CommandResult

TIMEOUT_EXIT_CODE = 124


class CommandExecutor(ICommandExecutor):
    """Runs read-only zpool subcommands with a timeout."""

    def __init__(self, timeout: float = 30, zpool_binary: str = "zpool"):
        self.timeout = timeout
        self.zpool_binary = zpool_binary
        self.logger = logging.getLogger(__name__)

        self._allowed_zpool_commands = {'status', 'list'}

    async def execute_zpool(self, *args: str) -> CommandResult:
        """Execute zpool subcommand with validation."""
        if not args or args[0] not in self._allowed_zpool_commands:
            return CommandResult(
                success=False,
                returncode=1,
                stdout="",
                stderr=f"zpool command '{args[0] if args else ''}' not allowed"
            )

        return await self._execute_command([self.zpool_binary, *args])

    async def _execute_command(self, command: List[str]) -> CommandResult:
        try:
            self.logger.debug(f"Executing command: {' '.join(command)}")

            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=1024*1024
            )

            try:
                stdout, stderr = await asyncio.wait_for(
                    process.communicate(),
                    timeout=self.timeout
                )
            except asyncio.TimeoutError:
                process.kill()
                await process.wait()
                return CommandResult(
                    success=False,
                    returncode=TIMEOUT_EXIT_CODE,
                    stdout="",
                    stderr=f"Command timed out after {self.timeout} seconds"
                )

            # leading indentation is significant, only trailing space goes
            stdout_str = stdout.decode('utf-8', errors='replace').rstrip()
            stderr_str = stderr.decode('utf-8', errors='replace').strip()

            if process.returncode != 0:
                self.logger.warning(
                    f"Command failed with exit code {process.returncode}: {stderr_str}"
                )

            return CommandResult(
                returncode=process.returncode if process.returncode is not None else 1,
                stdout=stdout_str,
                stderr=stderr_str
            )

        except OSError as e:
            self.logger.error(f"Command execution failed: {e}")
            return CommandResult(
                success=False,
                returncode=1,
                stdout="",
                stderr=f"Command execution failed: {e}"
            )
