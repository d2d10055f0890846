"""
Structured diagnostics for the domain sifter.

Entries go to stderr as JSON lines, as one-line text, or both. Console status
lines for the operator are handled by StatusReporter; this module is for
troubleshooting a run after the fact.

The registry session token travels in a form field named 'security', so any
key containing one of SENSITIVE_KEYS is replaced by MASK_VALUE before an
entry is stored or written.
"""

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from domain_sifter.enums import LogLevel


LEVEL_ORDER = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
}

OUTPUT_FORMATS = ("json", "text", "both")


@dataclass
class LogEntry:
    """One emitted diagnostic."""

    timestamp: str
    level: LogLevel
    component: str
    message: str
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "component": self.component,
            "message": self.message,
            "data": self.data,
        }

    def render_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def render_text(self) -> str:
        # [TIMESTAMP] LEVEL [COMPONENT] MESSAGE {data}
        line = f"[{self.timestamp}] {self.level.value.upper()} [{self.component}] {self.message}"
        if self.data:
            line += " " + json.dumps(self.data, ensure_ascii=False)
        return line


class AuditLogger:
    """
    Level-filtered structured logger.

    Every component takes an optional AuditLogger; with none they stay
    silent. Emitted entries are also kept in memory and exposed through
    `entries`.
    """

    SENSITIVE_KEYS = frozenset({
        "token", "secret", "password", "api_key", "security",
        "auth", "authorization", "credential", "credentials",
        "session_token", "cookie",
    })

    MASK_VALUE = "***MASKED***"

    def __init__(
        self,
        output_format: str = "text",
        output_stream: Optional[TextIO] = None,
        min_level: LogLevel = LogLevel.DEBUG,
    ):
        """
        Args:
            output_format: 'json', 'text' or 'both'
            output_stream: Destination (defaults to sys.stderr)
            min_level: Entries below this severity are dropped
        """
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {OUTPUT_FORMATS}, got {output_format!r}"
            )
        self._format = output_format
        self._stream = output_stream or sys.stderr
        self._min_level = min_level
        self._entries: list[LogEntry] = []

    @property
    def output_format(self) -> str:
        return self._format

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    @property
    def entries(self) -> list[LogEntry]:
        """Entries emitted so far, oldest first."""
        return list(self._entries)

    def is_enabled(self, level: LogLevel) -> bool:
        return LEVEL_ORDER[level] >= LEVEL_ORDER[self._min_level]

    def log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Emit an entry with sensitive values masked.

        Returns:
            The stored LogEntry, or None when level is below min_level
        """
        if not self.is_enabled(level):
            return None

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            component=component,
            message=message,
            data=self.mask_sensitive_data(data or {}),
        )
        self._entries.append(entry)
        self._write(entry)
        return entry

    def log_error(
        self,
        component: str,
        message: str,
        error: Optional[BaseException] = None,
        request_url: Optional[str] = None,
        response_status_code: Optional[int] = None,
        additional_data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Emit an ERROR entry carrying the failure context.

        The exception type and text, the request URL and the HTTP status
        are added to the data only when given.
        """
        data = dict(additional_data or {})
        if error is not None:
            data["error_type"] = type(error).__name__
            data["error_message"] = str(error)
        if request_url is not None:
            data["request_url"] = request_url
        if response_status_code is not None:
            data["response_status_code"] = response_status_code
        return self.log(LogLevel.ERROR, component, message, data)

    @classmethod
    def is_sensitive_key(cls, key: str) -> bool:
        lowered = key.lower()
        return any(pattern in lowered for pattern in cls.SENSITIVE_KEYS)

    def mask_sensitive_data(self, data: dict) -> dict:
        """Copy of data with sensitive values masked at any nesting depth."""
        if not isinstance(data, dict):
            return data
        return {
            key: self.MASK_VALUE if self.is_sensitive_key(key) else self._mask_value(value)
            for key, value in data.items()
        }

    def _mask_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.mask_sensitive_data(value)
        if isinstance(value, (list, tuple)):
            return [self._mask_value(item) for item in value]
        return value

    def _write(self, entry: LogEntry) -> None:
        if self._format in ("json", "both"):
            print(entry.render_json(), file=self._stream)
        if self._format in ("text", "both"):
            print(entry.render_text(), file=self._stream)
        self._stream.flush()

    def clear_entries(self) -> None:
        self._entries.clear()


def parse_log_level(value: str) -> LogLevel:
    """Map a config string such as 'info' to a LogLevel, defaulting to INFO."""
    try:
        return LogLevel(value.lower())
    except ValueError:
        return LogLevel.INFO
