"""
Enumeration types for the domain sifter.

These enums provide type-safe constants for verdicts, error codes,
and configuration options throughout the system.
"""

from enum import Enum


class AvailabilityStatus(Enum):
    """Outcome of a single availability check."""

    LIKELY_AVAILABLE = "likely_available"
    LIKELY_TAKEN = "likely_taken"
    CHECK_FAILED = "check_failed"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class CheckErrorCode(Enum):
    """Error codes attached to CHECK_FAILED results."""

    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    INVALID_URL = "invalid_url"
    HTTP_ERROR = "http_error"


class BootstrapErrorCode(Enum):
    """Error codes for registry session bootstrap failures."""

    FETCH_FAILED = "fetch_failed"
    HTTP_ERROR = "http_error"
    TOKEN_NOT_FOUND = "token_not_found"


class InputErrorCode(Enum):
    """Error codes for unreadable or malformed input files."""

    FILE_NOT_FOUND = "file_not_found"
    READ_FAILED = "read_failed"
    EMPTY_RECORD = "empty_record"
    MALFORMED_RECORD = "malformed_record"


class OutputErrorCode(Enum):
    """Error codes for output files that cannot be written."""

    WRITE_FAILED = "write_failed"
