"""
Decoders for single lines of the ``config`` and ``spares`` blocks.

Device line: ``<name> <state> <read> <write> <cksum> [message]``
Spare line:  ``<name> <state> [message]``
"""
import re

from ..core.entities.pool_status import DeviceNode
from ..core.exceptions.parse_exceptions import MalformedLineError, NumericParseError
from .classifiers import parse_state, parse_kind

_COUNTER_RE = re.compile(r'^[0-9]+$')

DEVICE_LINE = "device"
SPARE_LINE = "spare"


def _parse_counter(field: str, token: str, line: str) -> int:
    if not _COUNTER_RE.match(token):
        raise NumericParseError(field, token, "non-negative integer", line=line)
    return int(token)


def decode_device_line(line: str) -> DeviceNode:
    """Decode a device/vdev line into a parentless node.

    Raises MalformedLineError on fewer than five tokens and
    NumericParseError when a counter is not a non-negative integer.
    """
    parts = line.split(None, 5)
    if len(parts) < 5:
        raise MalformedLineError(line, DEVICE_LINE, len(parts))

    name, state = parts[0], parts[1]
    return DeviceNode(
        name=name,
        kind=parse_kind(name),
        state=parse_state(state),
        read_errors=_parse_counter("read", parts[2], line),
        write_errors=_parse_counter("write", parts[3], line),
        checksum_errors=_parse_counter("checksum", parts[4], line),
        message=parts[5].strip() if len(parts) > 5 else "",
    )


def decode_spare_line(line: str) -> DeviceNode:
    """Decode a spare line; raises MalformedLineError on fewer than two tokens."""
    parts = line.split(None, 2)
    if len(parts) < 2:
        raise MalformedLineError(line, SPARE_LINE, len(parts))

    return DeviceNode(
        name=parts[0],
        kind=parse_kind(parts[0]),
        state=parse_state(parts[1]),
        message=parts[2].strip() if len(parts) > 2 else "",
    )
