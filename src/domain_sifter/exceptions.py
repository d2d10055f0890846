"""
Exception classes for the domain sifter.

All exceptions inherit from DomainSifterError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional


class DomainSifterError(Exception):
    """Base exception for all domain sifter errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainSifterError):
    """Raised when user-supplied parameters are out of range."""

    pass


class ConfigError(DomainSifterError):
    """Raised when a configuration file cannot be read or parsed."""

    pass


class InputError(DomainSifterError):
    """Raised when the input CSV is missing or structurally invalid."""

    pass


class OutputError(DomainSifterError):
    """Raised when an output file cannot be created or written."""

    pass


class ProtocolError(DomainSifterError):
    """Raised when a remote service answers outside its expected contract."""

    pass


class BootstrapError(ProtocolError):
    """Raised when the registry session token cannot be obtained."""

    pass
