"""
Logging seam injected into the services.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class ILogger(ABC):
    """Leveled logger; keys of ``extra`` become fields of the emitted record.

    Implementations provide :meth:`log`; the level helpers delegate to it.
    """

    @abstractmethod
    def log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        pass

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.ERROR, message, extra)
