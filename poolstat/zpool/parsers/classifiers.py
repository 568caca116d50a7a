"""
Token classifiers for zpool state and vdev kind strings.

Unknown tokens never fail: states fall back to UNAVAILABLE and kinds to
BLOCK, so newer zpool releases with new state strings still parse.
"""
import logging

from ..core.entities.pool_status import DeviceState, DeviceKind

logger = logging.getLogger(__name__)

_STATES = {
    "online": DeviceState.ONLINE,
    "degraded": DeviceState.DEGRADED,
    "faulted": DeviceState.FAULTED,
    "offline": DeviceState.OFFLINE,
    "removed": DeviceState.REMOVED,
    "inuse": DeviceState.IN_USE,
    "avail": DeviceState.AVAILABLE,
}

# Checked in order; first prefix match wins.
_KIND_PREFIXES = (
    ("mirror", DeviceKind.MIRROR),
    ("spare", DeviceKind.SPARE),
    ("raidz1", DeviceKind.RAIDZ1),
    ("raidz2", DeviceKind.RAIDZ2),
    ("raidz3", DeviceKind.RAIDZ3),
    ("raidz4", DeviceKind.RAIDZ4),
)


def parse_state(token: str) -> DeviceState:
    """Classify a state token case-insensitively."""
    state = _STATES.get(token.strip().lower())
    if state is None:
        logger.debug(f"Unknown state token {token!r}, using {DeviceState.UNAVAILABLE.value}")
        return DeviceState.UNAVAILABLE
    return state


def parse_kind(name: str) -> DeviceKind:
    """Classify a device name by case-insensitive prefix."""
    lowered = name.strip().lower()
    for prefix, kind in _KIND_PREFIXES:
        if lowered.startswith(prefix):
            return kind
    return DeviceKind.BLOCK
