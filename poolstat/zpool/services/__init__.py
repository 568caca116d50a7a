"""Pool status services"""

from .pool_status_service import PoolStatusService

__all__ = [
    'PoolStatusService'
]
