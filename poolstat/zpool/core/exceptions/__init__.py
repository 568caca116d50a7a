"""Core domain exceptions"""

from .parse_exceptions import (
    ZpoolParseException,
    SectionNotFoundError,
    MalformedLineError,
    NumericParseError
)
from .pool_exceptions import (
    PoolStatusException,
    PoolNotFoundError,
    CommandFailedError,
    CommandTimeoutError,
    ReportParseError,
    HydrationError,
    ValidationException
)

__all__ = [
    'ZpoolParseException',
    'SectionNotFoundError',
    'MalformedLineError',
    'NumericParseError',
    'PoolStatusException',
    'PoolNotFoundError',
    'CommandFailedError',
    'CommandTimeoutError',
    'ReportParseError',
    'HydrationError',
    'ValidationException'
]
