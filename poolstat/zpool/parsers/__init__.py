"""Parsers for zpool command output"""

from .classifiers import parse_state, parse_kind
from .line_decoder import decode_device_line, decode_spare_line
from .field_extractor import FieldExtractor, extract_field
from .topology_builder import Topology, TopologyBuilder, build_topology
from .status_parser import ZpoolStatusParser, parse_zpool_status, split_reports
from .list_parser import (
    ListParseOutcome,
    ZpoolListParser,
    decode_list_row,
    flex_split,
    parse_zpool_list
)

__all__ = [
    'parse_state',
    'parse_kind',
    'decode_device_line',
    'decode_spare_line',
    'FieldExtractor',
    'extract_field',
    'Topology',
    'TopologyBuilder',
    'build_topology',
    'ZpoolStatusParser',
    'parse_zpool_status',
    'split_reports',
    'ListParseOutcome',
    'ZpoolListParser',
    'decode_list_row',
    'flex_split',
    'parse_zpool_list'
]
