"""
Command-line interface for the domain sifter.

This module provides the main CLI entry point with commands for:
- check-all: Reachability probe over a CSV of domains
- check-registry: Authenticated AFNIC lookups for .fr domains
- rank: Brandability ranking
- generate: Exhaustive candidate generation into a zip of CSV files
- config: Configuration management
"""

import argparse
import asyncio
import json
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from . import __version__
from .audit_logger import AuditLogger, parse_log_level
from .batch import DEFAULT_TOP_COUNT, run_heuristic, run_ranking, run_registry
from .config import (
    HeuristicConfig,
    LoggingConfig,
    RegistryConfig,
    ScorerConfig,
    SystemConfig,
)
from .enums import LogLevel
from .exceptions import ConfigError, DomainSifterError
from .generator import (
    DEFAULT_MAX_ROWS_PER_FILE,
    count_domains,
    normalize_tlds,
    validate_parameters,
    write_domain_archive,
)
from .i18n import SUPPORTED_LANGUAGES, get_message
from .reporting import StatusReporter


DEFAULT_CONFIG_PATH = Path.home() / ".domain_sifter" / "config.json"


def create_default_config(language: str = "en") -> SystemConfig:
    """
    Create a default system configuration.

    Args:
        language: Output language ('en' or 'fr')

    Returns:
        SystemConfig with default settings
    """
    return SystemConfig(
        heuristic=HeuristicConfig(),
        registry=RegistryConfig(),
        scorer=ScorerConfig(),
        logging=LoggingConfig(),
        language=language,
    )


def _section(data: dict, name: str, cls):
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise TypeError(f"'{name}' must be an object")
    return cls(**section)


def load_config_from_file(config_path: Path) -> Optional[SystemConfig]:
    """
    Load configuration from a JSON file.

    Missing sections and keys fall back to their defaults.

    Args:
        config_path: Path to the configuration file

    Returns:
        SystemConfig, or None if the file does not exist

    Raises:
        ConfigError: If the file is not valid JSON or has unknown keys
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(
            code="invalid_config",
            message=f"Could not read config from {config_path}",
            details={"path": str(config_path)},
        ) from e

    try:
        if not isinstance(data, dict):
            raise TypeError("top level must be an object")
        return SystemConfig(
            heuristic=_section(data, "heuristic", HeuristicConfig),
            registry=_section(data, "registry", RegistryConfig),
            scorer=_section(data, "scorer", ScorerConfig),
            logging=_section(data, "logging", LoggingConfig),
            language=data.get("language", "en"),
        )
    except TypeError as e:
        raise ConfigError(
            code="invalid_config",
            message=f"Invalid configuration in {config_path}: {e}",
            details={"path": str(config_path)},
        ) from e


def save_config_to_file(config: SystemConfig, config_path: Path) -> bool:
    """
    Save configuration to a JSON file.

    Args:
        config: SystemConfig to save
        config_path: Path to save the configuration

    Returns:
        True if successful, False otherwise
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(asdict(config), f, indent=2, ensure_ascii=False)
        return True
    except (OSError, TypeError) as e:
        print(f"Error saving config: {e}", file=sys.stderr)
        return False


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def apply_env_overrides(config: SystemConfig) -> SystemConfig:
    """
    Apply DOMAIN_SIFTER_* environment variables on top of a config.

    Malformed numeric values are ignored.
    """
    language = (os.getenv("DOMAIN_SIFTER_LANG", "") or "").strip().lower()
    if language in SUPPORTED_LANGUAGES:
        config.language = language

    config.heuristic.timeout_seconds = _float_env(
        "DOMAIN_SIFTER_HTTP_TIMEOUT", config.heuristic.timeout_seconds
    )
    config.registry.request_delay_seconds = max(
        0.0,
        _float_env("DOMAIN_SIFTER_REQUEST_DELAY", config.registry.request_delay_seconds),
    )
    return config


def resolve_config(args: argparse.Namespace) -> SystemConfig:
    """Config file (or defaults), then environment, then --language."""
    config = None
    if getattr(args, "config", None):
        config = load_config_from_file(Path(args.config))
        if config is None:
            raise ConfigError(
                code="config_not_found",
                message=f"Could not load config from {args.config}",
                details={"path": args.config},
            )
    if config is None:
        config = create_default_config()

    config = apply_env_overrides(config)
    if getattr(args, "language", None):
        config.language = args.language
    return config


def create_logger(config: SystemConfig, verbose: bool) -> AuditLogger:
    level = LogLevel.DEBUG if verbose else parse_log_level(config.logging.level)
    return AuditLogger(output_format=config.logging.output_format, min_level=level)


def format_error_chain(error: BaseException, language: str) -> list[str]:
    """The error message followed by one line per chained cause."""
    lines = [get_message("error.fatal", language, message=str(error))]
    cause = error.__cause__
    while cause is not None:
        lines.append(
            get_message(
                "error.caused_by",
                language,
                cause=f"{type(cause).__name__}: {cause}",
            )
        )
        cause = cause.__cause__
    return lines


def report_fatal(
    error: BaseException,
    language: str,
    logger: Optional[AuditLogger] = None,
) -> int:
    """Print the error chain to stderr and log the structured error."""
    for line in format_error_chain(error, language):
        print(line, file=sys.stderr)
    if logger and isinstance(error, DomainSifterError):
        logger.log(LogLevel.ERROR, "CLI", "Run aborted", error.to_dict())
    return 1


def cmd_check_all(args: argparse.Namespace) -> int:
    """Handle the 'check-all' command."""
    config = resolve_config(args)
    logger = create_logger(config, args.verbose)
    try:
        asyncio.run(run_heuristic(
            input_path=Path(args.input),
            output_path=Path(args.output),
            config=config,
            logger=logger,
        ))
    except DomainSifterError as e:
        return report_fatal(e, config.language, logger)
    return 0


def cmd_check_registry(args: argparse.Namespace) -> int:
    """Handle the 'check-registry' command."""
    config = resolve_config(args)
    logger = create_logger(config, args.verbose)
    try:
        asyncio.run(run_registry(
            input_path=Path(args.input),
            output_path=Path(args.output),
            config=config,
            logger=logger,
        ))
    except DomainSifterError as e:
        return report_fatal(e, config.language, logger)
    return 0


def cmd_rank(args: argparse.Namespace) -> int:
    """Handle the 'rank' command."""
    config = resolve_config(args)
    try:
        run_ranking(
            input_path=Path(args.input),
            output_path=Path(args.output),
            config=config,
            top=args.top,
        )
    except DomainSifterError as e:
        return report_fatal(e, config.language, create_logger(config, args.verbose))
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    """Handle the 'generate' command."""
    config = resolve_config(args)
    reporter = StatusReporter(config.language)
    tlds = normalize_tlds(args.tlds.split(","))

    def show_progress(file_index: int, done: int, total: int) -> None:
        reporter.message("generate.progress", index=file_index, done=done, total=total)

    try:
        validate_parameters(args.length, tlds)
        reporter.message("generate.started", total=count_domains(args.length, tlds))
        total = write_domain_archive(
            path=Path(args.output),
            length=args.length,
            tlds=tlds,
            max_rows_per_file=args.max_rows,
            progress=show_progress,
        )
    except DomainSifterError as e:
        return report_fatal(e, config.language, create_logger(config, args.verbose))

    reporter.message("generate.done", count=total)
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH
    language = args.language or "en"

    if args.action == "init":
        if config_path.exists() and not args.force:
            print(f"Configuration already exists at: {config_path}")
            print("Use --force to overwrite.")
            return 1

        if save_config_to_file(create_default_config(language=language), config_path):
            print(f"Configuration created at: {config_path}")
            return 0
        return 1

    try:
        config = load_config_from_file(config_path)
    except ConfigError as e:
        return report_fatal(e, language)

    if config is None:
        print(f"No configuration found at: {config_path}")
        print("Use 'config init' to create a default configuration.")
        return 1

    if args.action == "show":
        print(f"Configuration from: {config_path}")
        print(f"  Language: {config.language}")
        print(f"  Probe timeout: {config.heuristic.timeout_seconds}s")
        print(f"  Registry suffix: .{config.registry.suffix}")
        print(f"  Registry delay: {config.registry.request_delay_seconds}s")
        print(f"  Lexicon size: {len(config.scorer.lexicon)}")
        print(f"  Log level: {config.logging.level}")
        return 0

    print(f"Configuration at {config_path} is valid.")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--language", "-l",
        choices=sorted(SUPPORTED_LANGUAGES),
        default=None,
        help="Output language (default: en)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="domain-sifter",
        description="Batch domain availability checks and brandability ranking",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'check-all' command
    check_all_parser = subparsers.add_parser(
        "check-all",
        help="Probe domains over HTTPS and keep the unreachable ones",
    )
    check_all_parser.add_argument("input", nargs="?", default="domains.csv")
    check_all_parser.add_argument("output", nargs="?", default="potential_domains.csv")
    _add_common_arguments(check_all_parser)
    check_all_parser.set_defaults(func=cmd_check_all)

    # 'check-registry' command
    registry_parser = subparsers.add_parser(
        "check-registry",
        help="Look up .fr domains with the AFNIC registry",
    )
    registry_parser.add_argument("input", nargs="?", default="domains.csv")
    registry_parser.add_argument("output", nargs="?", default="available_fr_domains.csv")
    _add_common_arguments(registry_parser)
    registry_parser.set_defaults(func=cmd_check_registry)

    # 'rank' command
    rank_parser = subparsers.add_parser(
        "rank",
        help="Rank domains by brandability",
    )
    rank_parser.add_argument("input", nargs="?", default="domains.csv")
    rank_parser.add_argument("output", nargs="?", default="best_domains.csv")
    rank_parser.add_argument(
        "--top", "-t",
        type=int,
        default=DEFAULT_TOP_COUNT,
        help=f"Number of domains to print (default: {DEFAULT_TOP_COUNT})",
    )
    _add_common_arguments(rank_parser)
    rank_parser.set_defaults(func=cmd_rank)

    # 'generate' command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate every label of a given length into a zip of CSV files",
    )
    generate_parser.add_argument("length", type=int, help="Label length (1-6)")
    generate_parser.add_argument("tlds", help="Comma-separated TLDs, e.g. 'fr,com'")
    generate_parser.add_argument(
        "--output", "-o",
        default="domains.zip",
        help="Archive to write (default: domains.zip)",
    )
    generate_parser.add_argument(
        "--max-rows",
        type=int,
        default=DEFAULT_MAX_ROWS_PER_FILE,
        help=f"Domains per CSV file (default: {DEFAULT_MAX_ROWS_PER_FILE})",
    )
    _add_common_arguments(generate_parser)
    generate_parser.set_defaults(func=cmd_generate)

    # 'config' command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
    )
    config_parser.add_argument(
        "action",
        choices=["show", "init", "validate"],
        help="Configuration action",
    )
    config_parser.add_argument(
        "--path", "-p",
        help="Path to configuration file",
    )
    config_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.add_argument(
        "--language", "-l",
        choices=sorted(SUPPORTED_LANGUAGES),
        default=None,
        help="Default language for new configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except ConfigError as e:
        return report_fatal(e, getattr(args, "language", None) or "en")


if __name__ == "__main__":
    sys.exit(main())
