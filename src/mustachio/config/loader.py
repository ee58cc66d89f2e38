"""mustachio configuration loader."""

import os
import re
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from mustachio.errors import create_error
from mustachio.logging import get_logger
from mustachio.types import EscapeMode, LogFormat, LogLevel, ValidationIssue, ValidationResult

from .models import DelimitersConfig, EngineConfig, LoggingConfig

logger = get_logger("config")

CONFIG_PATH_ENV = "MUSTACHIO_CONFIG_PATH"
DEFAULT_CONFIG_FILE = "mustachio.yaml"

_TOP_LEVEL_KEYS = {"delimiters", "escape", "max_depth", "logging"}


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        ConfigError: If required var not set
    """
    # Pattern: ${VAR}, ${VAR:-default}, ${VAR:?error}
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)

        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        elif operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        else:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Required environment variable {var_name} not set",
            )

    return re.sub(pattern, replacer, value)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _resolve_env_vars_recursive(data: Any) -> Any:
    """Recursively resolve env vars in data structure."""
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


def _enum_values(enum_type: Any) -> set[str]:
    return {member.value for member in enum_type}


def _raw(value: Any) -> Any:
    """Unwrap enum members so validation sees their plain values."""
    return value.value if isinstance(value, Enum) else value


def _coerce_int(value: Any) -> Any:
    """Accept integer strings, which is what env var substitution produces."""
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    return value


class ConfigLoader:
    """Load and validate engine configuration."""

    def __init__(self) -> None:
        """Initialize config loader."""
        self._config: EngineConfig | None = None
        self._config_path: Path | None = None

    def load(self, path: str | Path | None = None, use_defaults: bool = True) -> EngineConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. MUSTACHIO_CONFIG_PATH environment variable
        2. ./mustachio.yaml
        3. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found (default: True)

        Returns:
            Loaded EngineConfig instance

        Raises:
            ConfigError: If file not found (when use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                logger.info("No config file found, using default configuration")
                return self.load_defaults()
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration root must be a mapping",
            )

        data = _resolve_env_vars_recursive(data)

        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> EngineConfig:
        """Load default configuration without a file.

        Returns:
            EngineConfig with default values
        """
        return self.load_from_dict({})

    def load_from_dict(self, data: dict[str, Any], config_path: Path | None = None) -> EngineConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded EngineConfig instance

        Raises:
            ConfigError: If configuration is invalid
        """
        validation = self.validate(data)
        for warning in validation.warnings:
            logger.warning(warning.message, path=warning.path)

        if not validation.valid:
            error_messages = [f"- {issue}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        config = self._dict_to_config(data)

        self._config = config
        self._config_path = config_path

        logger.debug(
            "Configuration loaded",
            config_path=str(config_path) if config_path else None,
        )

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for key in data:
            if key not in _TOP_LEVEL_KEYS:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        if "delimiters" in data:
            delimiters = data["delimiters"]
            if not isinstance(delimiters, dict):
                errors.append(
                    ValidationIssue(path="delimiters", message="delimiters must be a dictionary")
                )
            else:
                for side in ("open", "close"):
                    if side not in delimiters:
                        continue
                    marker = delimiters[side]
                    if not isinstance(marker, str) or not marker or any(c.isspace() for c in marker):
                        errors.append(
                            ValidationIssue(
                                path=f"delimiters.{side}",
                                message=f"delimiters.{side} must be a non-empty string without whitespace",
                            )
                        )

        if "escape" in data and str(_raw(data["escape"])) not in _enum_values(EscapeMode):
            errors.append(
                ValidationIssue(
                    path="escape",
                    message=f"escape must be one of: {', '.join(sorted(_enum_values(EscapeMode)))}",
                )
            )

        if "max_depth" in data:
            max_depth = _coerce_int(data["max_depth"])
            if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth <= 0:
                errors.append(
                    ValidationIssue(path="max_depth", message="max_depth must be a positive integer")
                )

        if "logging" in data:
            logging_data = data["logging"]
            if not isinstance(logging_data, dict):
                errors.append(
                    ValidationIssue(path="logging", message="logging must be a dictionary")
                )
            else:
                level = _raw(logging_data.get("level"))
                if level is not None and str(level).upper() not in _enum_values(LogLevel):
                    errors.append(
                        ValidationIssue(
                            path="logging.level",
                            message=f"logging.level must be one of: {', '.join(sorted(_enum_values(LogLevel)))}",
                        )
                    )
                log_format = _raw(logging_data.get("format"))
                if log_format is not None and str(log_format) not in _enum_values(LogFormat):
                    errors.append(
                        ValidationIssue(
                            path="logging.format",
                            message=f"logging.format must be one of: {', '.join(sorted(_enum_values(LogFormat)))}",
                        )
                    )
                truncate_at = _coerce_int(logging_data.get("truncate_at", 200))
                if isinstance(truncate_at, bool) or not isinstance(truncate_at, int) or truncate_at <= 0:
                    errors.append(
                        ValidationIssue(
                            path="logging.truncate_at",
                            message="logging.truncate_at must be a positive integer",
                        )
                    )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def get(self) -> EngineConfig:
        """Get current configuration.

        Returns:
            Current EngineConfig instance

        Raises:
            ConfigError: If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def _resolve_config_path(self) -> Path:
        """Resolve config file path using resolution order."""
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)
        return Path(DEFAULT_CONFIG_FILE)

    def _dict_to_config(self, data: dict[str, Any]) -> EngineConfig:
        """Convert a validated dictionary to EngineConfig.

        The data is merged over the default configuration, so partial
        sections such as ``logging: {level: DEBUG}`` keep the other defaults.
        """
        merged = deep_merge(asdict(EngineConfig()), data)
        delimiters_data = merged["delimiters"]
        logging_data = merged["logging"]

        return EngineConfig(
            delimiters=DelimitersConfig(
                open=delimiters_data["open"],
                close=delimiters_data["close"],
            ),
            escape=EscapeMode(_raw(merged["escape"])),
            max_depth=_coerce_int(merged["max_depth"]),
            logging=LoggingConfig(
                level=LogLevel(str(_raw(logging_data["level"])).upper()),
                format=LogFormat(_raw(logging_data["format"])),
                truncate_at=_coerce_int(logging_data["truncate_at"]),
            ),
        )


# Convenience singleton
_default_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get default config loader singleton.

    Returns:
        Default ConfigLoader instance
    """
    global _default_loader  # noqa: PLW0603
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def load_config(path: str | Path | None = None, use_defaults: bool = True) -> EngineConfig:
    """Load configuration using the default loader.

    Args:
        path: Optional path to config file
        use_defaults: If True, use default config when no file found

    Returns:
        Loaded EngineConfig instance
    """
    return get_config_loader().load(path, use_defaults=use_defaults)
