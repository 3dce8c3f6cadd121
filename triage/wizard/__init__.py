from triage.wizard.steps import STEPS, WizardStep, WizardStepId
from triage.wizard.submission_wizard import StepResult, SubmissionWizard, SubmitResult

__all__ = [
    "STEPS",
    "StepResult",
    "SubmissionWizard",
    "SubmitResult",
    "WizardStep",
    "WizardStepId",
]
