"""Error taxonomy shared by the executor, the controller and the adapters."""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    TOOL_NOT_FOUND = "tool_not_found"
    TIMEOUT = "timeout"
    NON_ZERO_EXIT = "non_zero_exit"
    IO_ERROR = "io_error"
    MALFORMED_RESPONSE = "malformed_response"
    VALIDATION = "validation"


class GatewayCtlError(Exception):
    """Base class for every failure that crosses the controller boundary.

    ``cleanup_warning`` is set when an apply failed and removing its
    temporary manifest also failed.
    """

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.cleanup_warning: Optional[str] = None

    def to_dict(self) -> dict:
        payload = {"success": False, "error": self.message, "kind": self.kind.value}
        if self.cleanup_warning:
            payload["cleanupWarning"] = self.cleanup_warning
        return payload


class ExecutionError(GatewayCtlError):
    """Raised when the cluster tool could not be run to a successful exit."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        stderr: str = "",
        returncode: Optional[int] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.stderr = stderr
        self.returncode = returncode


class MalformedResponseError(GatewayCtlError):
    """The tool exited cleanly but its output did not have the expected shape."""

    kind = ErrorKind.MALFORMED_RESPONSE


class ValidationError(GatewayCtlError):
    kind = ErrorKind.VALIDATION
