"""mustachio configuration data models."""

from dataclasses import dataclass, field

from mustachio.types import EscapeMode, LogFormat, LogLevel


@dataclass
class DelimitersConfig:
    """Default tag delimiters used at the start of every lexing pass."""

    open: str = "{{"
    close: str = "}}"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    truncate_at: int = 200


@dataclass
class EngineConfig:
    """Root configuration for TemplateEngine."""

    delimiters: DelimitersConfig = field(default_factory=DelimitersConfig)
    escape: EscapeMode = EscapeMode.HTML
    max_depth: int = 64  # Nested partial / lambda expansions per render
    logging: LoggingConfig = field(default_factory=LoggingConfig)
