"""
Heuristic availability checker.

Infers whether a domain is registered from plain web reachability: if
anything answers an HTTPS GET, the domain is taken; if the connection cannot
be made at all, it is likely available.

Known imprecision: a registered domain with no web server, a dead server, or
broken DNS looks exactly like an unregistered one. The result is a cheap
first-pass filter, not an authoritative registry answer.
"""

import asyncio
from collections.abc import Iterable
from typing import Optional

import httpx

from .audit_logger import AuditLogger
from .config import HeuristicConfig
from .enums import CheckErrorCode, LogLevel
from .models import AvailabilityResult, BatchSummary
from .reporting import StatusReporter
from .csv_io import DomainSink


class HeuristicAvailabilityChecker:
    """
    Reachability probe over a single async HTTP client.

    Can be used as an async context manager, in which case it owns and
    closes its client. An externally created client may be passed instead;
    the caller then remains responsible for closing it.
    """

    def __init__(
        self,
        config: Optional[HeuristicConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the checker.

        Args:
            config: Probe configuration (timeout, user agent)
            client: Optional pre-built HTTP client (e.g. with a mock transport)
            logger: Optional audit logger
        """
        self._config = config or HeuristicConfig()
        self._client = client
        self._owns_client = client is None
        self._logger = logger

    async def __aenter__(self) -> "HeuristicAvailabilityChecker":
        """Async context manager entry."""
        if self._client is None:
            self._client = self._build_client()
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def _build_client(self) -> httpx.AsyncClient:
        headers = {}
        if self._config.user_agent:
            headers["User-Agent"] = self._config.user_agent
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.timeout_seconds),
            follow_redirects=False,
            headers=headers,
        )

    @staticmethod
    def to_url(domain: str) -> str:
        """Prefix https:// unless the string already starts with 'http'."""
        if domain.startswith("http"):
            return domain
        return f"https://{domain}"

    async def check(self, domain: str) -> AvailabilityResult:
        """
        Probe a domain once.

        Any HTTP response (whatever its status) means LIKELY_TAKEN. A
        transport failure (DNS, refused, timeout, TLS) means
        LIKELY_AVAILABLE, and so does a response whose headers have not
        arrived within timeout_seconds of the start of the check.
        A URL that cannot be turned into a request is a CHECK_FAILED.
        """
        if self._client is None:
            self._client = self._build_client()
            self._owns_client = True

        url = self.to_url(domain)
        deadline = self._config.timeout_seconds

        try:
            status_code = await asyncio.wait_for(self._probe(url), deadline)
        except asyncio.TimeoutError:
            self._log_debug(
                f"No response from {url} within {deadline}s",
                {"domain": domain, "error_type": "deadline_exceeded"},
            )
            return AvailabilityResult.available(domain)
        except httpx.TransportError as e:
            self._log_debug(
                f"No response from {url}",
                {"domain": domain, "error_type": type(e).__name__, "error": str(e)},
            )
            return AvailabilityResult.available(domain)
        except httpx.InvalidURL as e:
            return self._failure(domain, url, CheckErrorCode.INVALID_URL, e)
        except httpx.RequestError as e:
            return self._failure(domain, url, CheckErrorCode.NETWORK_ERROR, e)

        self._log_debug(
            f"Response from {url}",
            {"domain": domain, "http_status_code": status_code},
        )
        return AvailabilityResult.taken(domain)

    async def _probe(self, url: str) -> int:
        # Only the status line matters; the body is never downloaded
        async with self._client.stream("GET", url) as response:
            return response.status_code

    async def process_batch(
        self,
        domains: Iterable[str],
        sink: DomainSink,
        reporter: Optional[StatusReporter] = None,
    ) -> BatchSummary:
        """
        Check domains one after another, in input order.

        Likely-available domains are written to the sink. A failed check is
        reported and skipped; it never stops the batch.

        Args:
            domains: Domains to check
            sink: Receives every likely-available domain
            reporter: Console status output (defaults to stdout, English)

        Returns:
            BatchSummary with per-verdict counts
        """
        reporter = reporter or StatusReporter(available_key="status.likely_available")
        summary = BatchSummary()

        for domain in domains:
            result = await self.check(domain)
            if result.is_available:
                sink.write_domain(domain)
            reporter.report(result)
            summary.record(result)

        return summary

    def _failure(
        self,
        domain: str,
        url: str,
        code: CheckErrorCode,
        error: Exception,
    ) -> AvailabilityResult:
        if self._logger:
            self._logger.log_error(
                "HeuristicAvailabilityChecker",
                f"Check failed for {domain}",
                error=error,
                request_url=url,
            )
        return AvailabilityResult.failed(domain, code, str(error) or type(error).__name__)

    def _log_debug(self, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(LogLevel.DEBUG, "HeuristicAvailabilityChecker", message, data)

    async def close(self) -> None:
        """Close the HTTP client if this checker created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
        self._client = None
