"""
Pool status domain entities: the parsed ``zpool status`` report, its device
tree, and the summary rows of ``zpool list``.
"""
import dataclasses
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any, Iterator

import yaml

from ..value_objects.size_value import SizeValue


class DeviceState(Enum):
    """State of a pool, vdev or device."""
    ONLINE = "ONLINE"
    DEGRADED = "DEGRADED"
    FAULTED = "FAULTED"
    OFFLINE = "OFFLINE"
    REMOVED = "REMOVED"
    IN_USE = "IN USE"
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"


class DeviceKind(Enum):
    """Kind of a vdev, inferred from its name."""
    BLOCK = "block"
    MIRROR = "mirror"
    SPARE = "spare"
    RAIDZ1 = "raidz1"
    RAIDZ2 = "raidz2"
    RAIDZ3 = "raidz3"
    RAIDZ4 = "raidz4"


@dataclass
class DeviceNode:
    """A device or virtual device in the pool topology."""
    name: str
    kind: DeviceKind
    state: DeviceState
    read_errors: int = 0
    write_errors: int = 0
    checksum_errors: int = 0
    message: str = ""
    parent: Optional['DeviceNode'] = field(default=None, repr=False, compare=False)
    children: List['DeviceNode'] = field(default_factory=list)

    def add_child(self, child: 'DeviceNode') -> 'DeviceNode':
        """Append ``child`` and point its parent link here."""
        child.parent = self
        self.children.append(child)
        return child

    @property
    def depth(self) -> int:
        """1 for a top-level vdev, 2 for its children, and so on."""
        depth = 1
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def root(self) -> 'DeviceNode':
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def path(self) -> List[str]:
        """Names from the top-level vdev down to this node."""
        names = []
        node: Optional[DeviceNode] = self
        while node is not None:
            names.append(node.name)
            node = node.parent
        return list(reversed(names))

    def walk(self) -> Iterator['DeviceNode']:
        """Pre-order traversal starting with this node."""
        yield self
        for child in self.children:
            yield from child.walk()

    def has_errors(self) -> bool:
        return (self.read_errors > 0 or
                self.write_errors > 0 or
                self.checksum_errors > 0)

    def total_errors(self) -> int:
        return self.read_errors + self.write_errors + self.checksum_errors

    def is_healthy(self) -> bool:
        return self.state == DeviceState.ONLINE and not self.has_errors()

    def to_dict(self) -> Dict[str, Any]:
        """Tree-shaped dict; zero counters and empty fields are omitted."""
        out: Dict[str, Any] = {
            'name': self.name,
            'type': self.kind.value,
            'state': self.state.value,
        }
        if self.read_errors:
            out['read_errors'] = self.read_errors
        if self.write_errors:
            out['write_errors'] = self.write_errors
        if self.checksum_errors:
            out['checksum_errors'] = self.checksum_errors
        if self.message:
            out['message'] = self.message
        if self.children:
            out['devices'] = [child.to_dict() for child in self.children]
        return out

    def __str__(self) -> str:
        return f"DeviceNode({self.name})"


@dataclass
class ListRow:
    """One row of ``zpool list -H -p``."""
    name: str
    size: SizeValue
    allocated: SizeValue
    free: SizeValue
    fragmentation_percent: float
    capacity_percent: float
    deduplication_ratio: float
    health: str
    alt_root: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'size': self.size.bytes,
            'allocated': self.allocated.bytes,
            'free': self.free.bytes,
            'fragmentation_percent': self.fragmentation_percent,
            'capacity_percent': self.capacity_percent,
            'deduplication_ratio': self.deduplication_ratio,
            'health': self.health,
            'alt_root': self.alt_root,
        }

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)


@dataclass
class PoolStatus:
    """A parsed ``zpool status`` report.

    The error counters and ``message`` belong to the pool root line of the
    config block. Size, allocation and ratio figures are not part of the
    report; they are filled in from a ``ListRow`` by :meth:`apply_list_row`.
    """
    name: str
    state: str = ""
    status: str = ""
    action: str = ""
    see: str = ""
    scrub: str = ""
    error: str = ""
    size: Optional[SizeValue] = None
    allocated: Optional[SizeValue] = None
    free: Optional[SizeValue] = None
    fragmentation_percent: float = 0.0
    capacity_percent: float = 0.0
    deduplication_ratio: float = 0.0
    health: str = ""
    alt_root: str = ""
    read_errors: int = 0
    write_errors: int = 0
    checksum_errors: int = 0
    message: str = ""
    devices: List[DeviceNode] = field(default_factory=list)
    spares: List[DeviceNode] = field(default_factory=list)
    parse_errors: List[Exception] = field(default_factory=list, repr=False, compare=False)

    def apply_list_row(self, row: ListRow) -> 'PoolStatus':
        """Return a copy with the summary figures of ``row``; row values always win."""
        return dataclasses.replace(
            self,
            size=row.size,
            allocated=row.allocated,
            free=row.free,
            fragmentation_percent=row.fragmentation_percent,
            capacity_percent=row.capacity_percent,
            deduplication_ratio=row.deduplication_ratio,
            health=row.health,
            alt_root=row.alt_root,
        )

    def walk_devices(self) -> Iterator[DeviceNode]:
        for device in self.devices:
            yield from device.walk()

    def find_device(self, name: str) -> Optional[DeviceNode]:
        """First device in the tree (not the spares list) named ``name``."""
        for device in self.walk_devices():
            if device.name == name:
                return device
        return None

    def get_unhealthy_devices(self) -> List[DeviceNode]:
        return [device for device in self.walk_devices() if not device.is_healthy()]

    def has_errors(self) -> bool:
        return (self.read_errors > 0 or
                self.write_errors > 0 or
                self.checksum_errors > 0 or
                any(device.has_errors() for device in self.walk_devices()))

    def total_errors(self) -> int:
        own = self.read_errors + self.write_errors + self.checksum_errors
        return own + sum(device.total_errors() for device in self.walk_devices())

    def to_dict(self) -> Dict[str, Any]:
        """Tree-shaped dict; empty optional fields are omitted."""
        out: Dict[str, Any] = {'name': self.name}
        for key in ('state', 'status', 'action', 'see', 'scrub', 'error', 'health', 'alt_root', 'message'):
            value = getattr(self, key)
            if value:
                out[key] = value
        for key in ('size', 'allocated', 'free'):
            value = getattr(self, key)
            if value is not None:
                out[key] = value.bytes
                out[f'{key}_human'] = value.format_bytes()
        for key in ('fragmentation_percent', 'capacity_percent', 'deduplication_ratio',
                    'read_errors', 'write_errors', 'checksum_errors'):
            value = getattr(self, key)
            if value:
                out[key] = value
        if self.devices:
            out['devices'] = [device.to_dict() for device in self.devices]
        if self.spares:
            out['spares'] = [spare.to_dict() for spare in self.spares]
        if self.parse_errors:
            out['parse_errors'] = [
                e.to_dict() if hasattr(e, 'to_dict') else str(e) for e in self.parse_errors
            ]
        return out

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __str__(self) -> str:
        return f"PoolStatus({self.name})"
