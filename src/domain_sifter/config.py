"""
Configuration dataclasses for the domain sifter.

This module defines all configuration structures used throughout the system,
including the heuristic probe, the registry checker's scraped endpoints,
the scorer's rule set, and logging configuration.
"""

from dataclasses import dataclass, field
from typing import Optional


DEFAULT_LEXICON = [
    "web", "vip", "dev", "box", "pix", "fun", "max", "zip", "top", "biz",
    "app", "tech", "lab", "hub", "pro", "net", "cloud", "smart", "digital",
    "code", "data", "ai", "io", "eco", "cyber", "meta", "crypto",
]


@dataclass
class HeuristicConfig:
    """Configuration for the reachability probe."""

    timeout_seconds: float = 10.0
    user_agent: Optional[str] = None


@dataclass
class RegistryConfig:
    """Configuration for the AFNIC registry checker."""

    bootstrap_url: str = (
        "https://www.afnic.fr/en/domain-names-and-support/"
        "everything-there-is-to-know-about-domain-names/"
        "find-a-domain-name-or-a-holder-using-whois/"
    )
    endpoint_url: str = "https://www.afnic.fr/wp-admin/admin-ajax.php"
    suffix: str = "fr"
    token_selector: str = "#security"
    token_attribute: str = "value"
    action: str = "ajax_get_whois_info"
    language_tag: str = "en"
    name_flag: str = "1"
    availability_marker: str = "available"
    request_delay_seconds: float = 1.0
    timeout_seconds: Optional[float] = None  # None keeps the client default


@dataclass
class ScorerConfig:
    """Rule set for the lexical scorer."""

    lexicon: list[str] = field(default_factory=lambda: list(DEFAULT_LEXICON))
    vowels: str = "aeiouy"
    exclusion_patterns: list[str] = field(
        default_factory=lambda: [
            r"[bcdfghjklmnpqrstvwxz]{4,}",  # 4+ consecutive consonants
            r"[^a-zA-Z]",  # anything but Latin letters
            r".{16,}",  # more than 15 characters
        ]
    )
    consonant_cluster_pattern: str = r"[bcdfghjklmnpqrstvwxz]{3,}"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass
class SystemConfig:
    """Main system configuration combining all sub-configurations."""

    heuristic: HeuristicConfig = field(default_factory=HeuristicConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    scorer: ScorerConfig = field(default_factory=ScorerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    language: str = "en"  # 'en' or 'fr'
