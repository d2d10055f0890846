"""
Console status lines for batch runs.

One line per processed domain and a summary line at the end. These are for
the operator only; structured diagnostics go through AuditLogger.
"""

import sys
from typing import Optional, TextIO

from .enums import AvailabilityStatus
from .i18n import get_message
from .models import AvailabilityResult, BatchSummary


class StatusReporter:
    """Prints localised per-domain verdicts to a text stream."""

    def __init__(
        self,
        language: str = "en",
        stream: Optional[TextIO] = None,
        available_key: str = "status.available",
    ) -> None:
        """
        Args:
            language: Output language ('en' or 'fr')
            stream: Destination stream (defaults to sys.stdout)
            available_key: Message key used for the positive verdict
        """
        self._language = language
        self._stream = stream or sys.stdout
        self._available_key = available_key

    def report(self, result: AvailabilityResult) -> None:
        if result.status == AvailabilityStatus.CHECK_FAILED:
            line = get_message(
                "batch.domain_error",
                self._language,
                domain=result.domain,
                error=result.reason,
            )
        else:
            key = (
                self._available_key
                if result.status == AvailabilityStatus.LIKELY_AVAILABLE
                else "status.taken"
            )
            line = get_message(
                "batch.domain_status",
                self._language,
                domain=result.domain,
                verdict=get_message(key, self._language),
            )
        self.line(line)

    def summary(self, summary: BatchSummary) -> None:
        self.line(
            "\n" + get_message(
                "batch.summary",
                self._language,
                available=summary.available,
                processed=summary.processed,
                failed=summary.failed,
                skipped=summary.skipped,
            )
        )

    def message(self, key: str, **kwargs) -> None:
        self.line(get_message(key, self._language, **kwargs))

    def line(self, text: str) -> None:
        print(text, file=self._stream)
