"""
Authenticated registry checker for AFNIC (.fr).

The registry's public WHOIS page embeds a security token in a hidden form
field. The checker scrapes that token once, at construction, and sends it
with every lookup to the site's internal AJAX endpoint.

Both the page markup and the endpoint's answers are undocumented. When they
change, the checker fails loudly: a missing token aborts construction, an
HTTP error answer becomes a CHECK_FAILED result.

Lifecycle:
- construction fetches the token (failure raises BootstrapError)
- every check reuses the same token; it is never refreshed, and a token the
  server starts rejecting only produces per-domain failures
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional, Protocol

import httpx
from bs4 import BeautifulSoup

from .audit_logger import AuditLogger
from .config import RegistryConfig
from .csv_io import DomainSink
from .enums import BootstrapErrorCode, CheckErrorCode, LogLevel
from .exceptions import BootstrapError
from .models import AvailabilityResult, BatchSummary, RegistrySession
from .rate_limiter import RequestPacer, SleepFunc
from .reporting import StatusReporter


# Body returned by the endpoint for a rejected or malformed query
REJECTED_QUERY_BODY = "0"


class TokenSource(Protocol):
    """Provides the session token a registry checker is built around."""

    async def fetch(self) -> RegistrySession:
        ...


def build_registry_client(config: RegistryConfig) -> httpx.AsyncClient:
    """Create the HTTP client used for both the bootstrap page and lookups."""
    if config.timeout_seconds is None:
        return httpx.AsyncClient(follow_redirects=True)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout_seconds),
        follow_redirects=True,
    )


class ScrapedTokenSource:
    """
    Scrapes the security token from the registry's WHOIS page.

    The token is the value attribute of the element matched by
    config.token_selector (by default the hidden input '#security').
    """

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        self._config = config or RegistryConfig()
        self._client = client
        self._logger = logger

    async def fetch(self) -> RegistrySession:
        """
        Download the bootstrap page and extract the token.

        Raises:
            BootstrapError: If the page cannot be fetched, answers with an
                HTTP error, or does not contain the token
        """
        url = self._config.bootstrap_url

        if self._client is None:
            async with build_registry_client(self._config) as client:
                html = await self._download(client, url)
        else:
            html = await self._download(self._client, url)

        token = self.extract_token(html)
        if not token:
            raise BootstrapError(
                code=BootstrapErrorCode.TOKEN_NOT_FOUND.value,
                message=(
                    f"Security token not found: no '{self._config.token_attribute}' "
                    f"attribute on '{self._config.token_selector}' at {url}"
                ),
                details={
                    "url": url,
                    "selector": self._config.token_selector,
                    "attribute": self._config.token_attribute,
                },
            )

        if self._logger:
            self._logger.log(
                LogLevel.INFO,
                "ScrapedTokenSource",
                "Registry security token acquired",
                {"url": url, "security": token},
            )

        return RegistrySession(
            token=token,
            source_url=url,
            fetched_at=datetime.now(timezone.utc).isoformat(),
        )

    async def _download(self, client: httpx.AsyncClient, url: str) -> str:
        try:
            response = await client.get(url)
        except httpx.RequestError as e:
            raise BootstrapError(
                code=BootstrapErrorCode.FETCH_FAILED.value,
                message=f"Unable to fetch registry bootstrap page: {url}",
                details={"url": url, "error_type": type(e).__name__},
            ) from e

        if response.status_code >= 400:
            raise BootstrapError(
                code=BootstrapErrorCode.HTTP_ERROR.value,
                message=(
                    f"Registry bootstrap page answered HTTP {response.status_code}: {url}"
                ),
                details={"url": url, "http_status_code": response.status_code},
            )

        return response.text

    def extract_token(self, html: str) -> Optional[str]:
        """Return the token from a bootstrap page, or None if absent."""
        soup = BeautifulSoup(html, "html.parser")
        element = soup.select_one(self._config.token_selector)
        if element is None:
            return None
        value = element.get(self._config.token_attribute)
        # Multi-valued attributes come back as lists
        if isinstance(value, list):
            value = " ".join(value)
        return value or None


class AuthenticatedRegistryChecker:
    """
    Availability lookups against the registry's internal endpoint.

    Build instances with create(), which fetches the session token first;
    the constructor itself takes an already fetched session.
    """

    def __init__(
        self,
        session: RegistrySession,
        client: httpx.AsyncClient,
        config: Optional[RegistryConfig] = None,
        logger: Optional[AuditLogger] = None,
        owns_client: bool = False,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        """
        Args:
            session: Token scraped from the bootstrap page
            client: HTTP client used for lookups
            config: Registry endpoints and form constants
            logger: Optional audit logger
            owns_client: Close the client in close()
            sleep: Awaitable sleep used for pacing (defaults to asyncio.sleep)
        """
        self._session = session
        self._client = client
        self._config = config or RegistryConfig()
        self._logger = logger
        self._owns_client = owns_client
        self._sleep = sleep

    @classmethod
    async def create(
        cls,
        config: Optional[RegistryConfig] = None,
        token_source: Optional[TokenSource] = None,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[AuditLogger] = None,
        sleep: Optional[SleepFunc] = None,
    ) -> "AuthenticatedRegistryChecker":
        """
        Fetch a session token and build a ready checker.

        Args:
            config: Registry configuration (defaults to AFNIC .fr)
            token_source: Where the token comes from (defaults to scraping
                the bootstrap page with the same client)
            client: Optional pre-built HTTP client
            logger: Optional audit logger
            sleep: Awaitable sleep used for pacing

        Raises:
            BootstrapError: If the token cannot be obtained
        """
        config = config or RegistryConfig()
        owns_client = client is None
        if client is None:
            client = build_registry_client(config)

        if token_source is None:
            token_source = ScrapedTokenSource(config, client=client, logger=logger)

        try:
            session = await token_source.fetch()
        except BaseException:
            if owns_client:
                await client.aclose()
            raise

        return cls(
            session=session,
            client=client,
            config=config,
            logger=logger,
            owns_client=owns_client,
            sleep=sleep,
        )

    async def __aenter__(self) -> "AuthenticatedRegistryChecker":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def session(self) -> RegistrySession:
        return self._session

    @property
    def suffix(self) -> str:
        return self._config.suffix

    def handles_suffix(self, domain: str) -> bool:
        """True if the domain ends with this registry's suffix."""
        return domain.endswith(f".{self._config.suffix}")

    def split_domain(self, domain: str) -> Optional[tuple[str, str]]:
        """
        Split 'label.suffix' into its two parts.

        Returns None for anything this registry does not handle: another
        suffix, or more or fewer than two dot-separated parts.
        """
        parts = domain.split(".")
        if len(parts) != 2 or parts[1] != self._config.suffix:
            return None
        return parts[0], parts[1]

    def build_form(self, label: str, suffix: str) -> dict[str, str]:
        """Form fields expected by the lookup endpoint."""
        return {
            "action": self._config.action,
            "d": label,
            "tld": suffix,
            "lang": self._config.language_tag,
            "security": self._session.token,
            "name": self._config.name_flag,
        }

    async def check(self, domain: str) -> AvailabilityResult:
        """
        Look up one domain.

        Domains outside this registry are LIKELY_TAKEN without any request.
        Transport errors and HTTP error answers are CHECK_FAILED.
        """
        parts = self.split_domain(domain)
        if parts is None:
            return AvailabilityResult.taken(domain)

        label, suffix = parts
        form = self.build_form(label, suffix)
        url = self._config.endpoint_url

        if self._logger:
            self._logger.log(
                LogLevel.DEBUG,
                "AuthenticatedRegistryChecker",
                f"Querying registry for {domain}",
                {"url": url, "form": form},
            )

        try:
            response = await self._client.post(url, data=form)
        except httpx.TimeoutException as e:
            return self._failure(domain, CheckErrorCode.TIMEOUT, f"Request timed out: {e}", e)
        except httpx.RequestError as e:
            return self._failure(
                domain,
                CheckErrorCode.NETWORK_ERROR,
                str(e) or type(e).__name__,
                e,
            )

        return self.interpret_response(domain, response.status_code, response.text)

    def interpret_response(
        self, domain: str, status_code: int, body: str
    ) -> AvailabilityResult:
        """
        Map an endpoint answer to a verdict.

        - body exactly "0": rejected query, LIKELY_TAKEN
        - HTTP status >= 400: CHECK_FAILED
        - body contains the availability marker: LIKELY_AVAILABLE
        - anything else: LIKELY_TAKEN
        """
        if body == REJECTED_QUERY_BODY:
            return AvailabilityResult.taken(domain)

        if status_code >= 400:
            return self._failure(
                domain,
                CheckErrorCode.HTTP_ERROR,
                f"Registry answered HTTP {status_code}",
            )

        if self._config.availability_marker in body:
            return AvailabilityResult.available(domain)
        return AvailabilityResult.taken(domain)

    async def process_batch(
        self,
        domains: Iterable[str],
        sink: DomainSink,
        reporter: Optional[StatusReporter] = None,
    ) -> BatchSummary:
        """
        Check every domain of this registry's suffix, paced.

        Domains with another suffix are skipped without a status line. A
        fixed delay is awaited between two consecutive lookups.

        Args:
            domains: Domains to check
            sink: Receives every likely-available domain
            reporter: Console status output (defaults to stdout, English)

        Returns:
            BatchSummary with per-verdict and skip counts
        """
        reporter = reporter or StatusReporter()
        pacer = RequestPacer(
            self._config.request_delay_seconds,
            sleep=self._sleep,
            logger=self._logger,
        )
        summary = BatchSummary()

        for domain in domains:
            if not self.handles_suffix(domain):
                summary.skipped += 1
                continue

            await pacer.wait()
            result = await self.check(domain)
            if result.is_available:
                sink.write_domain(domain)
            reporter.report(result)
            summary.record(result)

        return summary

    def _failure(
        self,
        domain: str,
        code: CheckErrorCode,
        reason: str,
        error: Optional[Exception] = None,
    ) -> AvailabilityResult:
        if self._logger:
            self._logger.log_error(
                "AuthenticatedRegistryChecker",
                f"Check failed for {domain}: {reason}",
                error=error,
                request_url=self._config.endpoint_url,
            )
        return AvailabilityResult.failed(domain, code, reason)

    async def close(self) -> None:
        """Close the HTTP client if this checker created it."""
        if self._owns_client:
            await self._client.aclose()
            self._owns_client = False
