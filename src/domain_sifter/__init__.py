"""
Domain Sifter - batch availability checks and brandability ranking.

This package reads candidate domains from CSV, checks them with a cheap
HTTPS reachability probe or an authenticated AFNIC registry lookup, ranks
them with a lexical scorer, and writes the results back to CSV.
"""

__version__ = "0.1.0"
__author__ = "Domain Sifter Team"

from domain_sifter.exceptions import (
    DomainSifterError,
    ValidationError,
    ConfigError,
    InputError,
    OutputError,
    ProtocolError,
    BootstrapError,
)
from domain_sifter.enums import (
    AvailabilityStatus,
    LogLevel,
    CheckErrorCode,
    BootstrapErrorCode,
    InputErrorCode,
    OutputErrorCode,
)
from domain_sifter.config import (
    HeuristicConfig,
    RegistryConfig,
    ScorerConfig,
    LoggingConfig,
    SystemConfig,
)
from domain_sifter.models import (
    AvailabilityResult,
    ScoredDomain,
    RegistrySession,
    BatchFailure,
    BatchSummary,
)
from domain_sifter.audit_logger import (
    AuditLogger,
    LogEntry,
)
from domain_sifter.i18n import (
    get_message,
    TRANSLATIONS,
    SUPPORTED_LANGUAGES,
    DEFAULT_LANGUAGE,
)
from domain_sifter.csv_io import (
    DomainSink,
    CsvDomainSink,
    read_domains,
    write_scores,
)
from domain_sifter.reporting import StatusReporter
from domain_sifter.rate_limiter import RequestPacer
from domain_sifter.scorer import LexicalScorer
from domain_sifter.heuristic_checker import HeuristicAvailabilityChecker
from domain_sifter.registry_checker import (
    TokenSource,
    ScrapedTokenSource,
    AuthenticatedRegistryChecker,
)
from domain_sifter.generator import (
    generate_domains,
    write_domain_archive,
)
from domain_sifter.batch import (
    run_heuristic,
    run_registry,
    run_ranking,
)
from domain_sifter.cli import (
    main as cli_main,
    create_parser,
    create_default_config,
    load_config_from_file,
    save_config_to_file,
)

__all__ = [
    # Exceptions
    "DomainSifterError",
    "ValidationError",
    "ConfigError",
    "InputError",
    "OutputError",
    "ProtocolError",
    "BootstrapError",
    # Enums
    "AvailabilityStatus",
    "LogLevel",
    "CheckErrorCode",
    "BootstrapErrorCode",
    "InputErrorCode",
    "OutputErrorCode",
    # Configuration
    "HeuristicConfig",
    "RegistryConfig",
    "ScorerConfig",
    "LoggingConfig",
    "SystemConfig",
    # Models
    "AvailabilityResult",
    "ScoredDomain",
    "RegistrySession",
    "BatchFailure",
    "BatchSummary",
    # Logging
    "AuditLogger",
    "LogEntry",
    # I18n
    "get_message",
    "TRANSLATIONS",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    # CSV
    "DomainSink",
    "CsvDomainSink",
    "read_domains",
    "write_scores",
    # Checkers and scorer
    "StatusReporter",
    "RequestPacer",
    "LexicalScorer",
    "HeuristicAvailabilityChecker",
    "TokenSource",
    "ScrapedTokenSource",
    "AuthenticatedRegistryChecker",
    # Generator
    "generate_domains",
    "write_domain_archive",
    # Batch
    "run_heuristic",
    "run_registry",
    "run_ranking",
    # CLI
    "cli_main",
    "create_parser",
    "create_default_config",
    "load_config_from_file",
    "save_config_to_file",
]
