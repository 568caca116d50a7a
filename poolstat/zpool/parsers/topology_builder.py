"""
Reconstruction of the vdev tree from the ``config`` and ``spares`` sections.

Depth is measured in two-space steps relative to the pool root line, the
first data line under the column header. The pool root line carries the
pool's own counters and is not a device.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..core.entities.pool_status import DeviceNode
from ..core.exceptions.parse_exceptions import ZpoolParseException
from .line_decoder import decode_device_line, decode_spare_line

logger = logging.getLogger(__name__)

INDENT_UNIT = 2

_TITLE_RE = re.compile(r'^\s*NAME\s+STATE\b')


@dataclass
class Topology:
    """Output of :class:`TopologyBuilder`."""
    pool_line: Optional[DeviceNode] = None
    devices: List[DeviceNode] = field(default_factory=list)
    spares: List[DeviceNode] = field(default_factory=list)
    errors: List[ZpoolParseException] = field(default_factory=list)


def count_indent(line: str) -> int:
    return len(line) - len(line.lstrip(' '))


class TopologyBuilder:
    """Builds the device tree.

    In strict mode the first malformed line raises. Otherwise malformed lines
    are skipped and collected in ``Topology.errors``.

    A dedent may span several levels at once (``depth 3`` straight to
    ``depth 1``): the new node's parent is found by walking up the chain of
    open ancestors until one sits shallower than the new line.
    """

    def __init__(self, strict: bool = True):
        self.strict = strict

    def build(self, config: str, spares: str = "") -> Topology:
        topology = Topology()
        self._build_config(config, topology)
        if spares:
            self._build_spares(spares, topology)
        return topology

    def _decode(self, decoder, line: str, topology: Topology) -> Optional[DeviceNode]:
        try:
            return decoder(line)
        except ZpoolParseException as e:
            if self.strict:
                raise
            logger.warning(f"Skipping malformed line: {e}", extra={"line": line})
            topology.errors.append(e)
            return None

    def _build_config(self, config: str, topology: Topology) -> None:
        base_indent: Optional[int] = None
        # (depth, node) for the current node and each of its ancestors
        open_nodes: List[Tuple[int, DeviceNode]] = []

        for line in config.splitlines():
            if not line.strip() or _TITLE_RE.match(line):
                continue

            if line.strip() == "spares":
                # listed separately in the spares section
                break

            if base_indent is None:
                base_indent = count_indent(line)
                topology.pool_line = self._decode(decode_device_line, line, topology)
                continue

            depth = (count_indent(line) - base_indent) // INDENT_UNIT
            if depth <= 0:
                # logs, cache and similar pool-level sections end the tree
                logger.debug(f"Config tree ends at {line.strip()!r}")
                break

            node = self._decode(decode_device_line, line, topology)
            if node is None:
                continue

            while open_nodes and open_nodes[-1][0] >= depth:
                open_nodes.pop()

            if open_nodes:
                open_nodes[-1][1].add_child(node)
            else:
                if depth != 1:
                    logger.warning(f"Device {node.name!r} at depth {depth} has no parent, treating as top-level")
                topology.devices.append(node)

            open_nodes.append((depth, node))
            logger.debug(f"Placed {node.name} at depth {depth}",
                         extra={"device": node.name, "depth": depth})

    def _build_spares(self, spares: str, topology: Topology) -> None:
        for line in spares.splitlines():
            if not line.strip():
                continue
            node = self._decode(decode_spare_line, line, topology)
            if node is not None:
                topology.spares.append(node)


def build_topology(config: str, spares: str = "", strict: bool = True) -> Topology:
    return TopologyBuilder(strict=strict).build(config, spares)
