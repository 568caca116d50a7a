from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import re
from typing import Union


_DECIMAL_UNITS = {
    "": 1,
    "b": 1,
    "k": 10**3, "kb": 10**3,
    "m": 10**6, "mb": 10**6,
    "g": 10**9, "gb": 10**9,
    "t": 10**12, "tb": 10**12,
    "p": 10**15, "pb": 10**15,
    "e": 10**18, "eb": 10**18,
}

_BINARY_UNITS = {
    "kib": 1024,
    "mib": 1024**2,
    "gib": 1024**3,
    "tib": 1024**4,
    "pib": 1024**5,
    "eib": 1024**6,
}

# zfs prints single-letter suffixes in powers of 1024
_ZFS_UNITS = {
    "B": 1,
    "K": 1024,
    "M": 1024**2,
    "G": 1024**3,
    "T": 1024**4,
    "P": 1024**5,
    "E": 1024**6,
    "Z": 1024**7,
    "Y": 1024**8
}

_SIZE_RE = re.compile(r'^(\d+(?:\.\d+)?)\s*([A-Za-z]*)$')


@dataclass(frozen=True)
class SizeValue:
    """Byte quantity backed by an exact integer byte count"""
    bytes: int

    def __post_init__(self):
        if self.bytes < 0:
            raise ValueError("Size cannot be negative")

    @classmethod
    def from_bytes(cls, byte_count: int) -> 'SizeValue':
        """Create SizeValue from byte count"""
        return cls(int(byte_count))

    @classmethod
    def from_zfs_string(cls, size_str: str) -> 'SizeValue':
        """Parse ZFS size string (e.g., '1.5G', '500M') to bytes"""
        size_str = size_str.strip().upper()

        if size_str in ["-", "0", "0B"]:
            return cls(0)

        match = re.match(r'^(\d+(?:\.\d+)?)\s*([BKMGTPEZY]?)$', size_str)
        if not match:
            raise ValueError(f"Cannot parse size: {size_str}")

        unit = match.group(2) or "B"
        return cls(int(Decimal(match.group(1)) * _ZFS_UNITS[unit]))

    @classmethod
    def parse(cls, size_str: str) -> 'SizeValue':
        """Parse a unit-suffixed size.

        ``KB``/``MB``/... and bare ``K``/``M``/... are powers of 1000,
        ``KiB``/``MiB``/... are powers of 1024. An empty string is zero.

        >>> SizeValue.parse("1.23TB").bytes
        1230000000000
        >>> SizeValue.parse("38.2T").bytes
        38200000000000
        """
        size_str = size_str.strip()
        if not size_str:
            return cls(0)

        match = _SIZE_RE.match(size_str)
        if not match:
            raise ValueError(f"{size_str} is not a valid capacity")

        unit = match.group(2).lower()
        multiplier = _DECIMAL_UNITS.get(unit) or _BINARY_UNITS.get(unit)
        if multiplier is None:
            raise ValueError(f"{match.group(2)} is not a valid unit type")

        try:
            return cls(int(Decimal(match.group(1)) * multiplier))
        except InvalidOperation as e:
            raise ValueError(f"{size_str} is not a valid capacity") from e

    def to_human_readable(self, precision: int = 1) -> str:
        """Convert bytes to ZFS-style human readable format"""
        if self.bytes == 0:
            return "0B"

        units = ["B", "K", "M", "G", "T", "P", "E", "Z", "Y"]
        size = float(self.bytes)
        unit_index = 0

        while size >= 1024 and unit_index < len(units) - 1:
            size /= 1024
            unit_index += 1

        if size == int(size):
            return f"{int(size)}{units[unit_index]}"

        return f"{size:.{precision}f}{units[unit_index]}"

    def format_bytes(self) -> str:
        """Format with decimal suffixes, e.g. '1.23 TB'"""
        return self._format(1000, ("B", "KB", "MB", "GB", "TB", "PB", "EB"))

    def format_base2_bytes(self) -> str:
        """Format with IEC suffixes, e.g. '1.5 KiB'"""
        return self._format(1024, ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB"))

    def _format(self, base: int, suffixes: tuple) -> str:
        divisor = 1
        index = 0
        while index < len(suffixes) - 1 and self.bytes >= divisor * base:
            divisor *= base
            index += 1

        if index == 0:
            return f"{self.bytes} {suffixes[0]}"
        return f"{self.bytes / divisor:.3g} {suffixes[index]}"

    def __str__(self) -> str:
        return self.format_bytes()

    def __int__(self) -> int:
        return self.bytes

    def __add__(self, other: Union['SizeValue', int]) -> 'SizeValue':
        if isinstance(other, int):
            return SizeValue(self.bytes + other)
        return SizeValue(self.bytes + other.bytes)

    def __sub__(self, other: Union['SizeValue', int]) -> 'SizeValue':
        result = self.bytes - (other if isinstance(other, int) else other.bytes)
        if result < 0:
            raise ValueError("Size cannot be negative")
        return SizeValue(result)

    def __mul__(self, multiplier: int) -> 'SizeValue':
        return SizeValue(self.bytes * multiplier)

    def __floordiv__(self, divisor: int) -> 'SizeValue':
        return SizeValue(self.bytes // divisor)

    def __lt__(self, other: Union['SizeValue', int]) -> bool:
        if isinstance(other, int):
            return self.bytes < other
        return self.bytes < other.bytes

    def __le__(self, other: Union['SizeValue', int]) -> bool:
        if isinstance(other, int):
            return self.bytes <= other
        return self.bytes <= other.bytes

    def __gt__(self, other: Union['SizeValue', int]) -> bool:
        if isinstance(other, int):
            return self.bytes > other
        return self.bytes > other.bytes

    def __ge__(self, other: Union['SizeValue', int]) -> bool:
        if isinstance(other, int):
            return self.bytes >= other
        return self.bytes >= other.bytes

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int):
            return self.bytes == other
        if isinstance(other, SizeValue):
            return self.bytes == other.bytes
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.bytes)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'bytes': self.bytes,
            'human_readable': self.format_bytes(),
        }
