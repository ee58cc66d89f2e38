"""Config validation results."""

from dataclasses import dataclass, field
from typing import Literal


@dataclass
class ValidationIssue:
    """One problem found while validating configuration data."""

    path: str  # Dotted key, e.g. "delimiters.open"
    message: str
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class ValidationResult:
    """Errors and warnings from ConfigLoader.validate().

    ``valid`` is forced to False whenever errors are present.
    """

    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.errors:
            self.valid = False

    def messages(self) -> list[str]:
        """Error messages followed by warnings, each prefixed with its path."""
        return [str(issue) for issue in (*self.errors, *self.warnings)]
