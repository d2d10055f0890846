"""
Request pacing for the domain sifter.

The registry endpoint has an implicit rate limit, so consecutive checks are
separated by a fixed delay. The delay is awaited in full before the next
check may start; it is not shortened by the time the previous request took.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from domain_sifter.audit_logger import AuditLogger
from domain_sifter.enums import LogLevel


SleepFunc = Callable[[float], Awaitable[None]]


class RequestPacer:
    """
    Enforces a fixed pause between successive requests.

    Usage:
        pacer = RequestPacer(1.0)
        for domain in domains:
            await pacer.wait()
            await check(domain)

    The first call returns immediately; every later call sleeps for
    delay_seconds.
    """

    def __init__(
        self,
        delay_seconds: float,
        sleep: Optional[SleepFunc] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the pacer.

        Args:
            delay_seconds: Pause inserted between two requests
            sleep: Awaitable sleep function (defaults to asyncio.sleep)
            logger: Optional audit logger
        """
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {delay_seconds}")
        self._delay = delay_seconds
        self._sleep = sleep or asyncio.sleep
        self._logger = logger
        self._requests = 0

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @property
    def request_count(self) -> int:
        """Number of times wait() has been passed."""
        return self._requests

    async def wait(self) -> None:
        if self._requests > 0 and self._delay > 0:
            if self._logger:
                self._logger.log(
                    LogLevel.DEBUG,
                    "RequestPacer",
                    f"Delaying {self._delay:.2f}s before next request",
                )
            await self._sleep(self._delay)
        self._requests += 1
