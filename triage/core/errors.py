"""
Errors
======
Error taxonomy for the triage core.

Expected failures are returned to the caller inside result objects:
    ValidationFailure     - a wizard gate failed (returned, never raised)
    NotFoundError         - unknown issue id (returned by vote, raised by direct lookups)

Integrity / misuse faults are raised:
    TaxonomyMismatchError - a record references an identifier absent from the registry
    WizardMisuseError     - a transition the caller should never attempt
"""
from dataclasses import dataclass, field
from typing import List


class TriageError(Exception):
    """Base class for every error raised by the triage core."""


class NotFoundError(TriageError):
    def __init__(self, identifier: str, kind: str = "Issue") -> None:
        self.identifier = identifier
        self.kind = kind
        super().__init__(f"{kind} '{identifier}' not found")


class TaxonomyMismatchError(TriageError):
    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"Unknown {kind} identifier '{identifier}'")


class WizardMisuseError(TriageError):
    """Raised when the caller drives the wizard through an illegal transition."""


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class ValidationFailure:
    """Which field(s) blocked a step gate, and why."""
    step: int
    errors: List[FieldError] = field(default_factory=list)

    @property
    def fields(self) -> List[str]:
        return [e.field for e in self.errors]

    def to_dict(self) -> dict:
        return {
            "step": self.step,
            "errors": [{"field": e.field, "message": e.message} for e in self.errors],
        }


class DuplicateIssueError(TriageError):
    def __init__(self, issue_id: str) -> None:
        self.issue_id = issue_id
        super().__init__(f"Issue '{issue_id}' already exists")
