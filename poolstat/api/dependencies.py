"""
Dependencies for API endpoints.
"""
from typing import Optional
from functools import lru_cache

from ..zpool.factories.service_factory import ServiceFactory, create_default_service_factory
from ..zpool.parsers.list_parser import ZpoolListParser
from ..zpool.services.pool_status_service import PoolStatusService


_service_factory: Optional[ServiceFactory] = None


@lru_cache()
def get_service_factory() -> ServiceFactory:
    """Get the global service factory instance."""
    global _service_factory
    if _service_factory is None:
        _service_factory = create_default_service_factory()
    return _service_factory


async def get_pool_status_service() -> PoolStatusService:
    """Get a PoolStatusService instance."""
    return await get_service_factory().create_pool_status_service()


def get_list_parser() -> ZpoolListParser:
    """List parser configured like the one the service uses."""
    return get_service_factory().create_list_parser()


def configure_services(factory: ServiceFactory) -> None:
    """Replace the service factory, e.g. with one wrapping a fake executor."""
    global _service_factory
    _service_factory = factory
    get_service_factory.cache_clear()
