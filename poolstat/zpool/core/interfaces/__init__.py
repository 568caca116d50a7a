"""Core interfaces"""

from .command_executor import CommandResult, ICommandExecutor
from .logger_interface import ILogger
from .result_parser import IResultParser

__all__ = [
    'CommandResult',
    'ICommandExecutor',
    'ILogger',
    'IResultParser'
]
