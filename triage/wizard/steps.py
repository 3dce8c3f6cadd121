"""
Wizard Steps
============
One class per wizard step. Each step owns its gate predicate and the
messages shown next to the failing fields.

    Step 1  BasicsStep       - title, category, priority, description
    Step 2  EnvironmentStep  - sdk_version, os (language_version, ide optional)
    Step 3  DiagnosticsStep  - error_message (code, steps, attempts optional)
    Step 4  ContactStep      - author.name (email optional)

validate() returns an empty list when the step may be left.
"""
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import List

from triage.core import taxonomy
from triage.core.constants import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    ERROR_MESSAGE_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)
from triage.core.errors import FieldError
from triage.models.issue_draft import IssueDraft


class WizardStepId(IntEnum):
    BASICS = 1
    ENVIRONMENT = 2
    DIAGNOSTICS = 3
    CONTACT = 4
    SUBMITTED = 5


class WizardStep(ABC):
    id: WizardStepId
    title: str
    fields: tuple[str, ...]

    @property
    def number(self) -> int:
        return int(self.id)

    @abstractmethod
    def validate(self, draft: IssueDraft) -> List[FieldError]:
        ...

    def is_valid(self, draft: IssueDraft) -> bool:
        return not self.validate(draft)


class BasicsStep(WizardStep):
    id = WizardStepId.BASICS
    title = "Basic information"
    fields = ("title", "category", "priority", "description")

    def validate(self, draft: IssueDraft) -> List[FieldError]:
        errors: List[FieldError] = []
        if len(draft.title) < TITLE_MIN_LENGTH:
            errors.append(FieldError("title", f"Title must be at least {TITLE_MIN_LENGTH} characters"))
        elif len(draft.title) > TITLE_MAX_LENGTH:
            errors.append(FieldError("title", f"Title must be at most {TITLE_MAX_LENGTH} characters"))

        if not draft.category:
            errors.append(FieldError("category", "Select a category"))
        elif not taxonomy.is_valid("category", draft.category):
            errors.append(FieldError("category", f"Unknown category '{draft.category}'"))

        if not taxonomy.is_valid("priority", draft.priority):
            errors.append(FieldError("priority", f"Unknown priority '{draft.priority}'"))

        if len(draft.description) < DESCRIPTION_MIN_LENGTH:
            errors.append(FieldError(
                "description", f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters"
            ))
        elif len(draft.description) > DESCRIPTION_MAX_LENGTH:
            errors.append(FieldError(
                "description", f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
            ))
        return errors


class EnvironmentStep(WizardStep):
    id = WizardStepId.ENVIRONMENT
    title = "Environment"
    fields = (
        "environment.sdk_version",
        "environment.language_version",
        "environment.os",
        "environment.ide",
    )

    def validate(self, draft: IssueDraft) -> List[FieldError]:
        errors: List[FieldError] = []
        if draft.environment.sdk_version == "":
            errors.append(FieldError("environment.sdk_version", "SDK version is required"))
        if draft.environment.os == "":
            errors.append(FieldError("environment.os", "Operating system is required"))
        return errors


class DiagnosticsStep(WizardStep):
    id = WizardStepId.DIAGNOSTICS
    title = "Code and error message"
    fields = ("code", "error_message", "steps_to_reproduce", "attempted_solutions")

    def validate(self, draft: IssueDraft) -> List[FieldError]:
        if len(draft.error_message) < ERROR_MESSAGE_MIN_LENGTH:
            return [FieldError(
                "error_message",
                f"Error message must be at least {ERROR_MESSAGE_MIN_LENGTH} characters",
            )]
        return []


class ContactStep(WizardStep):
    id = WizardStepId.CONTACT
    title = "Contact information"
    fields = ("author.name", "author.email", "tags")

    def validate(self, draft: IssueDraft) -> List[FieldError]:
        if draft.author.name == "":
            return [FieldError("author.name", "Name is required")]
        return []


# Ordered, one instance per step
STEPS: tuple[WizardStep, ...] = (BasicsStep(), EnvironmentStep(), DiagnosticsStep(), ContactStep())

_STEP_BY_ID: dict[WizardStepId, WizardStep] = {step.id: step for step in STEPS}


def step_for(step_id: WizardStepId) -> WizardStep:
    return _STEP_BY_ID[step_id]
