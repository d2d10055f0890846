"""
Batch runners wiring CSV files to the checkers and the scorer.

Each runner opens its input before doing any work, so missing files and
unwritable outputs fail fast. Checks run strictly one after another.
"""

from pathlib import Path
from typing import Optional

import httpx

from .audit_logger import AuditLogger
from .config import SystemConfig
from .csv_io import CsvDomainSink, read_domains, write_scores
from .enums import LogLevel
from .heuristic_checker import HeuristicAvailabilityChecker
from .models import BatchSummary, ScoredDomain
from .rate_limiter import SleepFunc
from .registry_checker import AuthenticatedRegistryChecker, TokenSource
from .reporting import StatusReporter
from .scorer import LexicalScorer


DEFAULT_TOP_COUNT = 10


async def run_heuristic(
    input_path: Path,
    output_path: Path,
    config: Optional[SystemConfig] = None,
    reporter: Optional[StatusReporter] = None,
    logger: Optional[AuditLogger] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> BatchSummary:
    """
    Probe every domain of input_path and write likely-available ones.

    Raises:
        InputError: Missing input file or malformed row
        OutputError: Output file cannot be created or written
    """
    config = config or SystemConfig()
    reporter = reporter or StatusReporter(
        config.language, available_key="status.likely_available"
    )

    domains = read_domains(input_path)
    with CsvDomainSink(output_path) as sink:
        async with HeuristicAvailabilityChecker(
            config=config.heuristic,
            client=client,
            logger=logger,
        ) as checker:
            summary = await checker.process_batch(domains, sink, reporter)

    _log_summary(logger, "heuristic", summary)
    reporter.summary(summary)
    reporter.message("batch.results_saved", path=output_path)
    return summary


async def run_registry(
    input_path: Path,
    output_path: Path,
    config: Optional[SystemConfig] = None,
    reporter: Optional[StatusReporter] = None,
    logger: Optional[AuditLogger] = None,
    token_source: Optional[TokenSource] = None,
    client: Optional[httpx.AsyncClient] = None,
    sleep: Optional[SleepFunc] = None,
) -> BatchSummary:
    """
    Look up every domain of the registry's suffix and write available ones.

    The session token is fetched before any file is touched, so a bootstrap
    failure leaves no output behind.

    Raises:
        BootstrapError: Session token cannot be obtained
        InputError: Missing input file or malformed row
        OutputError: Output file cannot be created or written
    """
    config = config or SystemConfig()
    reporter = reporter or StatusReporter(config.language)

    reporter.message("registry.fetching_token")
    checker = await AuthenticatedRegistryChecker.create(
        config=config.registry,
        token_source=token_source,
        client=client,
        logger=logger,
        sleep=sleep,
    )

    async with checker:
        domains = read_domains(input_path)
        with CsvDomainSink(output_path) as sink:
            summary = await checker.process_batch(domains, sink, reporter)

    _log_summary(logger, "registry", summary)
    reporter.summary(summary)
    reporter.message("batch.results_saved", path=output_path)
    return summary


def run_ranking(
    input_path: Path,
    output_path: Path,
    config: Optional[SystemConfig] = None,
    reporter: Optional[StatusReporter] = None,
    top: int = DEFAULT_TOP_COUNT,
) -> list[ScoredDomain]:
    """
    Score every domain of input_path and write them best first.

    Raises:
        InputError: Missing input file or malformed row
        OutputError: Output file cannot be written
    """
    config = config or SystemConfig()
    reporter = reporter or StatusReporter(config.language)
    scorer = LexicalScorer(config.scorer)

    reporter.message("rank.loading")
    ranked = scorer.rank_all(read_domains(input_path))

    reporter.message("rank.saving")
    write_scores(output_path, ranked)

    reporter.message("rank.top_header", count=top)
    for position, entry in enumerate(ranked[:top], start=1):
        reporter.message(
            "rank.top_entry", rank=position, domain=entry.domain, score=entry.score
        )

    reporter.line("")
    reporter.message("rank.total", count=len(ranked))
    reporter.message("batch.results_saved", path=output_path)
    return ranked


def _log_summary(
    logger: Optional[AuditLogger], mode: str, summary: BatchSummary
) -> None:
    if logger:
        logger.log(
            LogLevel.INFO,
            "BatchRunner",
            f"{mode} batch finished",
            {
                "processed": summary.processed,
                "available": summary.available,
                "taken": summary.taken,
                "failed": summary.failed,
                "skipped": summary.skipped,
            },
        )
