from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class CommandResult:
    """Result of a command execution"""
    returncode: int
    stdout: str
    stderr: str
    success: Optional[bool] = None

    def __post_init__(self):
        if self.success is None:
            self.success = self.returncode == 0

    @property
    def usable(self) -> bool:
        """Output is worth parsing: zpool may exit non-zero and still print a report."""
        return bool(self.success) or bool(self.stdout.strip())


class ICommandExecutor(ABC):
    """Interface for running the zpool binary"""

    @abstractmethod
    async def execute_zpool(self, *args: str) -> CommandResult:
        """Execute a zpool subcommand with a bounded timeout"""
        pass
