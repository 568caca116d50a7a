from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..result import Result
from ..exceptions.parse_exceptions import ZpoolParseException

T = TypeVar('T')


class IResultParser(ABC, Generic[T]):
    """Interface for parsing command output"""

    @abstractmethod
    def can_parse(self, command_type: str) -> bool:
        """Check if this parser can handle the given zpool subcommand"""
        pass

    @abstractmethod
    def parse(self, raw_output: str) -> Result[T, ZpoolParseException]:
        """Parse raw command output into a domain value"""
        pass
