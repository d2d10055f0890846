"""
Data models for the domain sifter.

This module defines the per-domain verdicts, scored domains, the registry
session and the batch summary shared by the checkers and the batch runner.
"""

from dataclasses import dataclass, field
from typing import Optional

from .enums import AvailabilityStatus, CheckErrorCode


@dataclass
class AvailabilityResult:
    """Tri-state outcome of one availability check."""

    domain: str
    status: AvailabilityStatus
    reason: Optional[str] = None  # Only set for CHECK_FAILED
    error_code: Optional[CheckErrorCode] = None

    @classmethod
    def available(cls, domain: str) -> "AvailabilityResult":
        return cls(domain=domain, status=AvailabilityStatus.LIKELY_AVAILABLE)

    @classmethod
    def taken(cls, domain: str) -> "AvailabilityResult":
        return cls(domain=domain, status=AvailabilityStatus.LIKELY_TAKEN)

    @classmethod
    def failed(
        cls, domain: str, code: CheckErrorCode, reason: str
    ) -> "AvailabilityResult":
        return cls(
            domain=domain,
            status=AvailabilityStatus.CHECK_FAILED,
            reason=reason,
            error_code=code,
        )

    @property
    def is_available(self) -> bool:
        return self.status == AvailabilityStatus.LIKELY_AVAILABLE

    @property
    def is_failure(self) -> bool:
        return self.status == AvailabilityStatus.CHECK_FAILED


@dataclass(frozen=True)
class ScoredDomain:
    """A domain that survived the exclusion rules, with its score."""

    domain: str
    score: int


@dataclass(frozen=True)
class RegistrySession:
    """
    Session state scraped from the registry's bootstrap page.

    Fetched once per checker and never refreshed; every query of that
    checker reads the same token.
    """

    token: str
    source_url: str
    fetched_at: str


@dataclass
class BatchFailure:
    """A domain whose check failed during a batch."""

    domain: str
    reason: str


@dataclass
class BatchSummary:
    """Counters collected while processing one batch."""

    processed: int = 0
    available: int = 0
    taken: int = 0
    failed: int = 0
    skipped: int = 0
    failures: list[BatchFailure] = field(default_factory=list)

    def record(self, result: AvailabilityResult) -> None:
        """Count a finished check."""
        self.processed += 1
        if result.is_failure:
            self.failed += 1
            self.failures.append(
                BatchFailure(domain=result.domain, reason=result.reason or "")
            )
        elif result.is_available:
            self.available += 1
        else:
            self.taken += 1
