"""
Submission Wizard
=================
Four-step stepper that assembles one IssueReport.

    BASICS → ENVIRONMENT → DIAGNOSTICS → CONTACT → SUBMITTED

Transition rules:
    advance()  - only when the current step validates; otherwise a no-op
                 returning ValidationFailure
    retreat()  - always allowed; a no-op on BASICS; never loses draft values
    submit()   - only from CONTACT; re-checks all four steps, then hands the
                 draft to the IssueStore
    reset()    - fresh draft, back to BASICS

Expected validation failures are returned. Programmer misuse (submit from a
non-final step, any transition after SUBMITTED, unknown field names) raises
WizardMisuseError.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from triage.core import taxonomy
from triage.core.errors import ValidationFailure, WizardMisuseError
from triage.models.issue_draft import IssueDraft
from triage.models.issue_report import IssueReport
from triage.services.issue_store import IssueStore
from triage.wizard.steps import STEPS, WizardStepId, step_for

logger = logging.getLogger(__name__)

_NESTED = ("environment", "author")


@dataclass(frozen=True)
class StepResult:
    ok: bool
    step: WizardStepId
    failure: Optional[ValidationFailure] = None


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    issue: Optional[IssueReport] = None
    failure: Optional[ValidationFailure] = None


def _set_nested(draft: IssueDraft, parent: str, child: str, value: Any) -> None:
    if parent not in _NESTED:
        raise WizardMisuseError(f"Unknown draft field '{parent}.{child}'")
    target = getattr(draft, parent)
    if child not in type(target).model_fields:
        raise WizardMisuseError(f"Unknown draft field '{parent}.{child}'")
    setattr(target, child, value)


class SubmissionWizard:
    """Drives one draft from BASICS to SUBMITTED against a single store."""

    def __init__(self, store: IssueStore) -> None:
        self.store = store
        self.draft = IssueDraft()
        self.step = WizardStepId.BASICS
        self.issue: Optional[IssueReport] = None

    @property
    def is_submitted(self) -> bool:
        return self.step == WizardStepId.SUBMITTED

    def _require_open(self, action: str) -> None:
        if self.is_submitted:
            raise WizardMisuseError(f"Cannot {action}: draft was already submitted, call reset()")

    # ------------------------------------------------------------------
    # Draft editing
    # ------------------------------------------------------------------
    def update(self, **fields: Any) -> IssueDraft:
        """
        Set draft fields.

        Accepts top-level names ("title"), dotted nested names
        ("environment.os", "author.name") and nested dicts
        (environment={"os": "Linux"}).

        All fields are applied to a copy first; on any error the draft is
        left as it was.
        """
        self._require_open("update")
        candidate = self.draft.model_copy(deep=True)
        for key, value in fields.items():
            if "." in key:
                parent, child = key.split(".", 1)
                _set_nested(candidate, parent, child, value)
            elif key in _NESTED and isinstance(value, dict):
                for child, child_value in value.items():
                    _set_nested(candidate, key, child, child_value)
            elif key in IssueDraft.model_fields and key not in _NESTED:
                setattr(candidate, key, value)
            else:
                raise WizardMisuseError(f"Unknown draft field '{key}'")
        self.draft = candidate
        return self.draft

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def validate_step(self, step_id: WizardStepId) -> Optional[ValidationFailure]:
        errors = step_for(step_id).validate(self.draft)
        if errors:
            return ValidationFailure(step=int(step_id), errors=errors)
        return None

    def advance(self) -> StepResult:
        self._require_open("advance")
        if self.step == WizardStepId.CONTACT:
            raise WizardMisuseError("CONTACT is the last step, call submit()")

        failure = self.validate_step(self.step)
        if failure is not None:
            logger.debug("Step %d rejected: %s", self.step, failure.fields)
            return StepResult(ok=False, step=self.step, failure=failure)

        self.step = WizardStepId(self.step + 1)
        return StepResult(ok=True, step=self.step)

    def retreat(self) -> WizardStepId:
        self._require_open("retreat")
        if self.step > WizardStepId.BASICS:
            self.step = WizardStepId(self.step - 1)
        return self.step

    def submit(self) -> SubmitResult:
        self._require_open("submit")
        if self.step != WizardStepId.CONTACT:
            raise WizardMisuseError(f"submit() called from step {int(self.step)}, expected CONTACT")

        # Re-check every gate; the draft may have been edited after its step was left
        for step in STEPS:
            failure = self.validate_step(step.id)
            if failure is not None:
                logger.info("Submit rejected at step %d: %s", step.number, failure.fields)
                return SubmitResult(ok=False, failure=failure)

        self.issue = self.store.create(self._report_fields())
        self.step = WizardStepId.SUBMITTED
        return SubmitResult(ok=True, issue=self.issue)

    def reset(self) -> None:
        self.draft = IssueDraft()
        self.step = WizardStepId.BASICS
        self.issue = None

    def _report_fields(self) -> dict:
        """
        Draft values as IssueReport fields. Tags are already normalised on the
        draft; the one translation is an empty email, which is stored as None.
        """
        d = self.draft
        return {
            "title": d.title,
            "category": d.category,
            "priority": d.priority,
            "description": d.description,
            "error_message": d.error_message,
            "steps_to_reproduce": d.steps_to_reproduce,
            "attempted_solutions": d.attempted_solutions,
            "code": d.code,
            "environment": d.environment.model_dump(),
            "author": {"name": d.author.name, "email": d.author.email or None},
            "tags": list(d.tags),
        }

    # ------------------------------------------------------------------
    # Review helpers
    # ------------------------------------------------------------------
    def summary(self) -> dict:
        """The review block shown on the contact step."""
        d = self.draft
        category = taxonomy.CATEGORIES.get(d.category)
        priority = taxonomy.PRIORITIES.get(d.priority)
        return {
            "title": d.title,
            "category": category.label if category else "Not selected",
            "priority": priority.label if priority else "Not selected",
            "environment": f"SDK {d.environment.sdk_version} on {d.environment.os}",
        }

    def progress(self) -> list[dict]:
        items = []
        for step in STEPS:
            if self.step > step.id:
                state = "completed"
            elif self.step == step.id:
                state = "active"
            else:
                state = "pending"
            items.append({
                "step": step.number,
                "title": step.title,
                "fields": list(step.fields),
                "state": state,
            })
        return items
