"""
Decoder for ``zpool list -H -p -o name,size,allocated,free,fragmentation,capacity,dedupratio,health,altroot``.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.entities.pool_status import ListRow
from ..core.exceptions.parse_exceptions import (
    ZpoolParseException,
    MalformedLineError,
    NumericParseError
)
from ..core.interfaces.result_parser import IResultParser
from ..core.result import Result
from ..core.value_objects.size_value import SizeValue

logger = logging.getLogger(__name__)

LIST_COLUMNS = ("name", "size", "allocated", "free", "fragmentation",
                "capacity", "dedupratio", "health", "altroot")

LIST_ROW = "list row"


def flex_split(value: str, delim: Optional[str] = None) -> List[str]:
    """Split on ``delim``, treating any run of delimiters as one.

    With no ``delim`` any run of whitespace separates fields.
    """
    if delim is None:
        return value.split()
    return [part for part in value.split(delim) if part]


def _parse_bytes(column: str, token: str, line: str, row_index: int) -> SizeValue:
    if not token.isascii() or not token.isdigit():
        raise NumericParseError(column, token, "integer byte count", line=line, row_index=row_index)
    return SizeValue.from_bytes(int(token))


def _parse_ratio(column: str, token: str, line: str, row_index: int) -> float:
    if token == "-":
        return 0.0
    try:
        return float(token.rstrip("%x"))
    except ValueError as e:
        raise NumericParseError(column, token, "float", line=line, row_index=row_index) from e


def decode_list_row(line: str, row_index: int = 0, delim: Optional[str] = None,
                    alias_capacity_to_dedup: bool = True) -> ListRow:
    """Decode one summary row.

    With ``alias_capacity_to_dedup`` (the default) the capacity column is
    stored in both ``capacity_percent`` and ``deduplication_ratio``; the
    dedupratio column is still validated. Turn it off to read each figure
    from its own column.
    """
    fields = flex_split(line.strip(), delim)
    if len(fields) < len(LIST_COLUMNS):
        raise MalformedLineError(line, LIST_ROW, len(fields), row_index=row_index)

    capacity = _parse_ratio("capacity", fields[5], line, row_index)
    dedup = _parse_ratio("dedupratio", fields[6], line, row_index)

    return ListRow(
        name=fields[0],
        size=_parse_bytes("size", fields[1], line, row_index),
        allocated=_parse_bytes("allocated", fields[2], line, row_index),
        free=_parse_bytes("free", fields[3], line, row_index),
        fragmentation_percent=_parse_ratio("fragmentation", fields[4], line, row_index),
        capacity_percent=capacity,
        deduplication_ratio=capacity if alias_capacity_to_dedup else dedup,
        health=fields[7],
        alt_root=fields[8],
    )


@dataclass
class ListParseOutcome:
    """Rows that decoded, plus the errors of the rows that did not."""
    rows: List[ListRow] = field(default_factory=list)
    errors: List[ZpoolParseException] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


class ZpoolListParser(IResultParser[List[ListRow]]):
    """Parser for ``zpool list -H -p`` output, one pool per line."""

    def __init__(self, delim: Optional[str] = None, alias_capacity_to_dedup: bool = True):
        self.delim = delim
        self.alias_capacity_to_dedup = alias_capacity_to_dedup

    def can_parse(self, command_type: str) -> bool:
        return command_type == "list"

    def parse(self, raw_output: str) -> Result[List[ListRow], ZpoolParseException]:
        """Decode every row; the first bad row fails the whole parse."""
        rows = []
        for index, line in self._lines(raw_output):
            try:
                rows.append(self._decode(line, index))
            except ZpoolParseException as e:
                return Result.failure(e)
        return Result.success(rows)

    def parse_lenient(self, raw_output: str) -> ListParseOutcome:
        """Decode every row, collecting per-row errors instead of stopping."""
        outcome = ListParseOutcome()
        for index, line in self._lines(raw_output):
            try:
                outcome.rows.append(self._decode(line, index))
            except ZpoolParseException as e:
                logger.warning(f"Skipping list row {index}: {e}")
                outcome.errors.append(e)
        return outcome

    def _decode(self, line: str, index: int) -> ListRow:
        return decode_list_row(line, index, self.delim, self.alias_capacity_to_dedup)

    @staticmethod
    def _lines(raw_output: str):
        index = 0
        for line in raw_output.splitlines():
            if not line.strip():
                continue
            yield index, line
            index += 1


def parse_zpool_list(raw_output: str, alias_capacity_to_dedup: bool = True) -> Result[List[ListRow], ZpoolParseException]:
    return ZpoolListParser(alias_capacity_to_dedup=alias_capacity_to_dedup).parse(raw_output)
