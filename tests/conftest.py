"""Shared test helpers."""


class ListSink:
    """In-memory DomainSink."""

    def __init__(self) -> None:
        self.domains: list[str] = []

    def write_domain(self, domain: str) -> None:
        self.domains.append(domain)


class SleepRecorder:
    """Awaitable stand-in for asyncio.sleep that records the requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
