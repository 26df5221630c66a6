"""Module errors: structured error taxonomy for the traffic monitor."""
#
from enum import Enum
from typing import Dict, Any, Optional
# PURPOSE:
# Provides error codes and typed exceptions shared by the rule engine,
# the VSTS API clients and the pipeline task.
#
# ERROR CODE FORMAT:
# - ARG_XXX: Invalid or missing arguments at call boundaries
# - FORMAT_XXX: Malformed IP addresses / CIDR blocks
# - SCAN_XXX: Scan execution errors
# - API_XXX: VSTS REST API errors
# - CONFIG_XXX: Task input / configuration errors
#
# USAGE:
#   from trafficmonitor.errors import InvalidArgumentError
#
#   raise InvalidArgumentError("Invalid parameter. usageRecord cannot be null nor undefined")
#
class ErrorCode(Enum):
    # Argument Errors
    INVALID_ARGUMENT = "ARG_001"

    # Format Errors
    INVALID_FORMAT = "FORMAT_001"

    # Scan Errors
    RECORD_SCAN_FAILED = "SCAN_001"
    UNKNOWN_USER_ORIGIN = "SCAN_002"
    UNKNOWN_TIME_PERIOD = "SCAN_003"

    # API Errors
    USER_RETRIEVAL_FAILED = "API_001"
    USAGE_RETRIEVAL_FAILED = "API_002"
    API_RESPONSE_INVALID = "API_003"

    # Config Errors
    CONFIG_INVALID = "CONFIG_001"
    CONFIG_MISSING_REQUIRED = "CONFIG_002"

    # System Errors
    SYSTEM_INTERNAL_ERROR = "SYSTEM_001"


class TrafficMonitorError(Exception):
    """
    Base exception class for the traffic monitor with structured error information.

    Attributes:
        code: ErrorCode enum value (e.g., "ARG_001")
        message: Human-readable error message
        details: Optional dictionary with additional context
    """

    default_code = ErrorCode.SYSTEM_INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message and details
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(TrafficMonitorError, ValueError):
    """Raised when a required parameter is missing (None) or unusable."""

    default_code = ErrorCode.INVALID_ARGUMENT


class InvalidFormatError(TrafficMonitorError, ValueError):
    """Raised when a value is not a valid IP address or CIDR block."""

    default_code = ErrorCode.INVALID_FORMAT


class ApiError(TrafficMonitorError):
    """Raised when a call to one of the VSTS REST APIs fails."""

    default_code = ErrorCode.API_RESPONSE_INVALID

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, code=code, details=details)
        self.status_code = status_code


class ConfigurationError(TrafficMonitorError):
    """Raised when the task inputs are missing or malformed."""

    default_code = ErrorCode.CONFIG_INVALID


# ============================================================================
# Convenience Functions
# ============================================================================

def build_error_message(base_error_message: str, error: Optional[BaseException]) -> str:
    """
    Append the text of ``error`` (when present) to ``base_error_message``.

    Caught exceptions can carry an empty message; the base message is
    returned unchanged in that case.
    """
    message = base_error_message
    if error is not None:
        message += str(error)
    return message


def build_error(base_error_message: str, error: Optional[BaseException]) -> TrafficMonitorError:
    """
    Wrap a caught exception in a TrafficMonitorError with an aggregated message.

    TrafficMonitorErrors keep their code; anything else becomes SYSTEM_001.
    """
    code = error.code if isinstance(error, TrafficMonitorError) else ErrorCode.SYSTEM_INTERNAL_ERROR
    details: Dict[str, Any] = {}
    if error is not None:
        details = {
            "original_type": type(error).__name__,
            "original_message": str(error),
        }
    return TrafficMonitorError(build_error_message(base_error_message, error), code=code, details=details)


__all__ = [
    "ErrorCode",
    "TrafficMonitorError",
    "InvalidArgumentError",
    "InvalidFormatError",
    "ApiError",
    "ConfigurationError",
    "build_error_message",
    "build_error",
]
