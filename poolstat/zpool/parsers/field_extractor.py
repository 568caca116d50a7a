"""
Field extraction for ``zpool status`` reports.

A report is a sequence of right-aligned ``key: value`` headers whose values
may wrap onto indented continuation lines::

      pool: tank
     state: ONLINE
    status: One or more devices could not be opened.  Sufficient replicas
            exist for the pool to continue functioning in a degraded state.
    config:

            NAME        STATE     READ WRITE CKSUM
            tank        ONLINE       0     0     0

A field ends at the first line that is not a continuation. A continuation
line is blank in its leading key-width slice and is not itself a header.
Blank lines belong to the field only when more continuation follows them.
"""
import logging
import re
from typing import List, Optional

from ..core.exceptions.parse_exceptions import SectionNotFoundError

logger = logging.getLogger(__name__)

TAB_SIZE = 8

# Headers are right-aligned so the colon never sits past column 7; values
# and continuations are indented by at least a tab.
_HEADER_RE = re.compile(r'^ {0,6}[a-z]+:(\s|$)')


def _find_header(lines: List[str], key: str) -> Optional[int]:
    """Index of the ``key:`` header, or of a bare ``key`` line such as ``spares``."""
    labelled = re.compile(r'^ {0,6}' + re.escape(key) + r':(\s|$)')
    for index, line in enumerate(lines):
        if labelled.match(line) or line.strip() == key:
            return index
    return None


def _is_continuation(line: str, width: int) -> bool:
    return (
        len(line) > width
        and not line[:width].strip()
        and not _HEADER_RE.match(line)
    )


class FieldExtractor:
    """Scans one report for named sections.

    Tabs are expanded before scanning, so the TAB-indented config block that
    zpool actually prints behaves like its space-indented rendering.
    """

    def __init__(self, report: str):
        self._lines = report.expandtabs(TAB_SIZE).splitlines()

    def has(self, key: str) -> bool:
        return _find_header(self._lines, key) is not None

    def extract(self, key: str, keep_newlines: bool = False) -> str:
        """Return the text of section ``key``.

        With ``keep_newlines`` the continuation lines are returned one per
        line, minus their key-width prefix, so relative indentation survives.
        Otherwise the pieces are trimmed and joined with single spaces.

        Raises SectionNotFoundError if no header for ``key`` exists.
        """
        start = _find_header(self._lines, key)
        if start is None:
            raise SectionNotFoundError(key)

        header = self._lines[start]
        indent = len(header) - len(header.lstrip())
        head = header.strip()[len(key):]
        pieces = [head[1:] if head.startswith(":") else head]

        # Deeper than the header itself, for indented headers like "spares".
        width = max(len(key), indent + 1)
        pending_blank = 0
        for line in self._lines[start + 1:]:
            if not line.strip():
                pending_blank += 1
                continue
            if not _is_continuation(line, width):
                break
            pieces.extend([""] * pending_blank)
            pending_blank = 0
            pieces.append(line[width:])

        logger.debug(f"Extracted section {key!r}", extra={"section": key, "lines": len(pieces)})

        if keep_newlines:
            return "\n".join(pieces)
        return " ".join(piece.strip() for piece in pieces if piece.strip())

    def get(self, key: str, keep_newlines: bool = False, default: str = "") -> str:
        """Like :meth:`extract` but returns ``default`` for an absent section."""
        if not self.has(key):
            return default
        return self.extract(key, keep_newlines)


def extract_field(report: str, key: str, keep_newlines: bool = False) -> str:
    """Extract one section of ``report``; raises SectionNotFoundError when absent."""
    return FieldExtractor(report).extract(key, keep_newlines)
