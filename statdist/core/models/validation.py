"""Validation result models shared by the feasibility gate and the CLI."""

from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Severity of a validation issue."""

    ERROR = "error"  # Blocks the closed-form analysis
    WARNING = "warning"  # Analysis proceeds
    INFO = "info"


class ValidationIssue(BaseModel):
    """A single problem found in a progression."""

    severity: Severity
    category: str
    message: str
    step: int | None = Field(default=None, description="Index of the offending stat change")
    suggestion: str | None = None

    def __str__(self) -> str:
        location = f"step {self.step}" if self.step is not None else "progression"
        text = f"[{self.category}] {location}: {self.message}"
        if self.suggestion:
            text += f" ({self.suggestion})"
        return text


class ValidationResult(BaseModel):
    """Outcome of validating a progression."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    def add_error(
        self,
        category: str,
        message: str,
        step: int | None = None,
        suggestion: str | None = None,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=Severity.ERROR,
                category=category,
                message=message,
                step=step,
                suggestion=suggestion,
            )
        )

    def add_warning(
        self,
        category: str,
        message: str,
        step: int | None = None,
        suggestion: str | None = None,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=Severity.WARNING,
                category=category,
                message=message,
                step=step,
                suggestion=suggestion,
            )
        )
