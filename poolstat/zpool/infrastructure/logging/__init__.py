"""Logging infrastructure"""

from .structured_logger import StructuredLogger, ContextLogger, StructuredFormatter, configure_logging

__all__ = [
    'StructuredLogger',
    'ContextLogger',
    'StructuredFormatter',
    'configure_logging'
]
