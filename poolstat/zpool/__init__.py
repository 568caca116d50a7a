"""
Parsing of ``zpool status`` and ``zpool list`` output into pool health and
device topology records.
"""

from .core.entities.pool_status import DeviceState, DeviceKind, DeviceNode, ListRow, PoolStatus
from .core.result import Result
from .parsers.status_parser import parse_zpool_status
from .parsers.list_parser import parse_zpool_list

__all__ = [
    'DeviceState',
    'DeviceKind',
    'DeviceNode',
    'ListRow',
    'PoolStatus',
    'Result',
    'parse_zpool_status',
    'parse_zpool_list'
]
