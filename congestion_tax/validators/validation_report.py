"""Validation report for collecting tariff configuration issues."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ValidationSeverity(IntEnum):
    """Severity levels for validation issues."""

    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """A single validation finding.

    Attributes:
        severity: How serious the issue is
        field: The tariff field the issue refers to (e.g. "segments")
        message: Human-readable description
        value: The offending value
        context: Optional extra information (e.g. segment id)
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        context_str = ""
        if self.context:
            context_str = " (" + ", ".join(f"{k}={v}" for k, v in self.context.items()) + ")"
        return f"[{self.severity.name}] {self.field}: {self.message}{context_str}"


class ValidationReport:
    """Collects validation issues.

    Example:
        >>> report = ValidationReport()
        >>> report.add_error("segments", "No segment covers 05:00-05:59", "05:00")
        >>> report.is_valid()
        False
        >>> report.summary()
        '1 error(s)'
    """

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def count(self, severity: ValidationSeverity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    @property
    def error_count(self) -> int:
        return self.count(ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return self.count(ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return self.count(ValidationSeverity.INFO)

    def is_valid(self) -> bool:
        """True if there are no errors; warnings and info do not count."""
        return self.error_count == 0

    def add(
        self,
        severity: ValidationSeverity,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                field=field,
                message=message,
                value=value,
                context=context,
            )
        )

    def add_error(self, field: str, message: str, value: Any, context=None) -> None:
        self.add(ValidationSeverity.ERROR, field, message, value, context)

    def add_warning(self, field: str, message: str, value: Any, context=None) -> None:
        self.add(ValidationSeverity.WARNING, field, message, value, context)

    def add_info(self, field: str, message: str, value: Any, context=None) -> None:
        self.add(ValidationSeverity.INFO, field, message, value, context)

    def filter(self, min_severity: ValidationSeverity) -> List[ValidationIssue]:
        """Issues at or above the given severity, most severe first."""
        selected = [i for i in self.issues if i.severity >= min_severity]
        return sorted(selected, key=lambda i: i.severity, reverse=True)

    def merge(self, other: "ValidationReport") -> None:
        """Append the issues of another report."""
        self.issues.extend(other.issues)

    def summary(self) -> str:
        """Counts of errors, warnings and info messages."""
        parts = []
        if self.error_count > 0:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count > 0:
            parts.append(f"{self.warning_count} warning(s)")
        if self.info_count > 0:
            parts.append(f"{self.info_count} info message(s)")

        if not parts:
            return "No issues found"

        return ", ".join(parts)

    def format(self, min_severity: ValidationSeverity = ValidationSeverity.INFO) -> str:
        """Render the report for display, grouped by severity."""
        if not self.issues:
            return "Validation successful - no issues found"

        lines = [f"Validation Report - {self.summary()}", "=" * 60]
        for severity in sorted(ValidationSeverity, reverse=True):
            if severity < min_severity:
                continue
            issues = [i for i in self.issues if i.severity == severity]
            if issues:
                lines.append(f"\n{severity.name}S:")
                lines.extend(f"  - {issue}" for issue in issues)

        return "\n".join(lines)
