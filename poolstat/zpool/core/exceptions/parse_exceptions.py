from typing import Dict, Any, Optional


class ZpoolParseException(Exception):
    """Base exception for all zpool output parsing failures"""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization"""
        return {
            'error_type': self.__class__.__name__,
            'message': str(self),
            'error_code': self.error_code,
            'details': self.details
        }


class SectionNotFoundError(ZpoolParseException):
    """A required report section is absent"""

    def __init__(self, key: str):
        super().__init__(
            f"Section '{key}' not found in report",
            error_code="SECTION_NOT_FOUND",
            details={"key": key}
        )
        self.key = key


class MalformedLineError(ZpoolParseException):
    """A device, spare or list row does not have the expected token shape"""

    def __init__(self, line: str, expected: str, token_count: int, row_index: Optional[int] = None):
        message = f"Malformed {expected} line ({token_count} tokens): {line.strip()!r}"
        if row_index is not None:
            message = f"Row {row_index}: {message}"
        super().__init__(
            message,
            error_code="MALFORMED_LINE",
            details={
                "line": line,
                "expected": expected,
                "token_count": token_count,
                "row_index": row_index
            }
        )
        self.line = line
        self.row_index = row_index


class NumericParseError(ZpoolParseException):
    """A counter, byte quantity or percentage could not be parsed"""

    def __init__(self, field: str, value: str, expected_type: str,
                 line: str = "", row_index: Optional[int] = None):
        message = f"Cannot parse {field} value {value!r} as {expected_type}"
        if row_index is not None:
            message = f"Row {row_index}: {message}"
        super().__init__(
            message,
            error_code="NUMERIC_PARSE_FAILURE",
            details={
                "field": field,
                "value": value,
                "expected_type": expected_type,
                "line": line,
                "row_index": row_index
            }
        )
        self.field = field
        self.value = value
        self.line = line
        self.row_index = row_index
