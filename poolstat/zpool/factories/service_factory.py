"""
Service factory for dependency injection and service creation.
"""
import asyncio
from typing import Dict, Any, Optional

from ..core.interfaces.command_executor import ICommandExecutor
from ..core.interfaces.logger_interface import ILogger
from ..infrastructure.command_executor import CommandExecutor
from ..infrastructure.logging.structured_logger import ContextLogger
from ..parsers.status_parser import ZpoolStatusParser
from ..parsers.list_parser import ZpoolListParser
from ..services.pool_status_service import PoolStatusService
from ...config import get_config


class ServiceFactory:
    """Factory for creating service instances with proper dependency injection."""

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 executor: Optional[ICommandExecutor] = None):
        self._config = config or {}
        self._logger_instances: Dict[str, ILogger] = {}
        self._lock = asyncio.Lock()

        self._executor: ICommandExecutor = executor or CommandExecutor(
            timeout=self._config.get('command_timeout', 30),
            zpool_binary=self._config.get('zpool_binary', 'zpool')
        )

    async def create_pool_status_service(self) -> PoolStatusService:
        """Create a PoolStatusService instance with injected dependencies."""
        logger = await self._get_logger("pool_status_service")
        return PoolStatusService(
            executor=self._executor,
            logger=logger,
            status_parser=self.create_status_parser(),
            list_parser=self.create_list_parser(),
            concurrency=self._config.get('hydration_concurrency', 4)
        )

    def create_status_parser(self) -> ZpoolStatusParser:
        return ZpoolStatusParser(strict=self._config.get('strict_parsing', True))

    def create_list_parser(self) -> ZpoolListParser:
        return ZpoolListParser(
            alias_capacity_to_dedup=self._config.get('alias_capacity_to_dedup', True)
        )

    async def _get_logger(self, service_name: str) -> ILogger:
        """Get or create a logger instance for a service."""
        async with self._lock:
            if service_name not in self._logger_instances:
                self._logger_instances[service_name] = ContextLogger(
                    name=f"poolstat.{service_name}",
                    level=self._config.get('log_level', 'INFO'),
                    context={"service": service_name}
                )
            return self._logger_instances[service_name]

    def get_config(self) -> Dict[str, Any]:
        return self._config.copy()


def create_default_service_factory() -> ServiceFactory:
    """Create a service factory from the environment configuration."""
    return ServiceFactory(get_config().to_factory_config())
