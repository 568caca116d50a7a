"""Core domain entities"""

from .pool_status import DeviceState, DeviceKind, DeviceNode, ListRow, PoolStatus

__all__ = [
    'DeviceState',
    'DeviceKind',
    'DeviceNode',
    'ListRow',
    'PoolStatus'
]
