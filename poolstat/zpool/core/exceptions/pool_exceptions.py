from typing import Dict, Any, Optional


class PoolStatusException(Exception):
    """Base exception for pool status retrieval"""

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


class PoolNotFoundError(PoolStatusException):
    """Pool not found exception"""

    def __init__(self, pool_name: str):
        super().__init__(
            f"Pool '{pool_name}' not found",
            error_code="POOL_NOT_FOUND",
            details={"pool_name": pool_name}
        )


class CommandFailedError(PoolStatusException):
    """The zpool command exited with an error and produced no output"""

    def __init__(self, command: str, exit_code: int, stderr: str = ""):
        message = f"Command failed (exit code {exit_code}): {command}"
        if stderr:
            message += f"\nError: {stderr}"
        super().__init__(
            message,
            error_code="COMMAND_FAILED",
            details={
                "command": command,
                "exit_code": exit_code,
                "stderr": stderr
            }
        )


class CommandTimeoutError(PoolStatusException):
    """The zpool command did not finish in time"""

    def __init__(self, command: str, timeout: float):
        super().__init__(
            f"Command timed out after {timeout}s: {command}",
            error_code="COMMAND_TIMEOUT",
            details={"command": command, "timeout": timeout}
        )


class ReportParseError(PoolStatusException):
    """Command output could not be parsed"""

    def __init__(self, source: str, cause: Exception):
        super().__init__(
            f"Failed to parse {source} output: {cause}",
            error_code="REPORT_PARSE_FAILED",
            details={
                "source": source,
                "cause": cause.to_dict() if hasattr(cause, 'to_dict') else str(cause)
            }
        )
        self.cause = cause


class HydrationError(PoolStatusException):
    """A list row could not be hydrated into a full pool status"""

    def __init__(self, row_index: int, row: Any, cause: Exception):
        row_repr = row.to_dict() if hasattr(row, 'to_dict') else str(row)
        name = getattr(row, 'name', '?')
        super().__init__(
            f"Failed to hydrate row {row_index} (pool '{name}'): {cause}",
            error_code="HYDRATION_FAILED",
            details={
                "row_index": row_index,
                "row": row_repr,
                "cause": cause.to_dict() if hasattr(cause, 'to_dict') else str(cause)
            }
        )
        self.row_index = row_index
        self.row = row
        self.cause = cause


class ValidationException(PoolStatusException):
    """Input validation failed"""

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None):
        super().__init__(
            message,
            error_code="VALIDATION_FAILED",
            details={"field": field, "value": value}
        )
        self.field = field
        self.value = value
