"""
Assembles a PoolStatus from a ``zpool status`` report.
"""
import logging
import re
from typing import List

from ..core.entities.pool_status import PoolStatus
from ..core.exceptions.parse_exceptions import ZpoolParseException
from ..core.interfaces.result_parser import IResultParser
from ..core.result import Result, collect_results
from .field_extractor import FieldExtractor
from .topology_builder import TopologyBuilder

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("pool", "state")

_POOL_HEADER_RE = re.compile(r'^\s*pool:')


class ZpoolStatusParser(IResultParser[PoolStatus]):
    """Parser for the report of ``zpool status <pool>``."""

    def __init__(self, strict: bool = True):
        self.strict = strict

    def can_parse(self, command_type: str) -> bool:
        return command_type == "status"

    def parse(self, raw_output: str) -> Result[PoolStatus, ZpoolParseException]:
        try:
            return Result.success(self._assemble(raw_output))
        except ZpoolParseException as e:
            logger.debug(f"Failed to parse pool status: {e}")
            return Result.failure(e)

    def parse_all(self, raw_output: str) -> Result[List[PoolStatus], ZpoolParseException]:
        """Parse output holding one report per pool (plain ``zpool status``)."""
        return collect_results([self.parse(report) for report in split_reports(raw_output)])

    def _assemble(self, raw_output: str) -> PoolStatus:
        fields = FieldExtractor(raw_output)
        for key in REQUIRED_FIELDS:
            # raises SectionNotFoundError
            fields.extract(key)

        scrub = fields.get("scrub") or fields.get("scan")
        topology = TopologyBuilder(strict=self.strict).build(
            fields.get("config", keep_newlines=True),
            fields.get("spares", keep_newlines=True),
        )

        status = PoolStatus(
            name=fields.extract("pool"),
            state=fields.extract("state"),
            status=fields.get("status"),
            action=fields.get("action"),
            see=fields.get("see"),
            scrub=scrub,
            error=fields.get("errors"),
            devices=topology.devices,
            spares=topology.spares,
            parse_errors=list(topology.errors),
        )

        pool_line = topology.pool_line
        if pool_line is not None:
            status.read_errors = pool_line.read_errors
            status.write_errors = pool_line.write_errors
            status.checksum_errors = pool_line.checksum_errors
            status.message = pool_line.message

        logger.debug(f"Parsed pool {status.name}", extra={
            "pool": status.name,
            "devices": len(status.devices),
            "spares": len(status.spares),
            "parse_errors": len(status.parse_errors),
        })
        return status


def split_reports(raw_output: str) -> List[str]:
    """Split multi-pool output at each ``pool:`` header."""
    reports: List[List[str]] = []
    for line in raw_output.splitlines():
        if _POOL_HEADER_RE.match(line) or not reports:
            reports.append([])
        reports[-1].append(line)
    return ["\n".join(lines) for lines in reports if any(_POOL_HEADER_RE.match(l) for l in lines)]


def parse_zpool_status(raw_output: str, strict: bool = True) -> Result[PoolStatus, ZpoolParseException]:
    """Parse a single-pool ``zpool status`` report."""
    return ZpoolStatusParser(strict=strict).parse(raw_output)
