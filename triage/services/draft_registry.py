"""
Draft Registry
==============
Keeps live SubmissionWizard instances between HTTP calls, keyed by a handle.

The module-level helpers (start_draft / advance / retreat / submit) are the
handle-based entry points used by callers that do not want to hold the
wizard object directly.
"""
import logging
import threading
from dataclasses import dataclass

from triage.core.errors import NotFoundError
from triage.services.issue_store import IssueStore
from triage.utils.id_factory import new_id
from triage.wizard import StepResult, SubmissionWizard, SubmitResult, WizardStepId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DraftHandle:
    draft_id: str
    wizard: SubmissionWizard


class DraftRegistry:
    def __init__(self, store: IssueStore) -> None:
        self.store = store
        self._drafts: dict[str, SubmissionWizard] = {}
        self._lock = threading.Lock()

    def start(self) -> DraftHandle:
        wizard = SubmissionWizard(self.store)
        with self._lock:
            draft_id = new_id()
            while draft_id in self._drafts:
                draft_id = new_id()
            self._drafts[draft_id] = wizard
        logger.debug("Started draft %s", draft_id)
        return DraftHandle(draft_id=draft_id, wizard=wizard)

    def get(self, draft_id: str) -> DraftHandle:
        with self._lock:
            wizard = self._drafts.get(draft_id)
        if wizard is None:
            raise NotFoundError(draft_id, kind="Draft")
        return DraftHandle(draft_id=draft_id, wizard=wizard)

    def discard(self, draft_id: str) -> None:
        """Forget a draft. Submitted drafts are discarded by the HTTP surface."""
        with self._lock:
            self._drafts.pop(draft_id, None)
        logger.debug("Discarded draft %s", draft_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._drafts)


def start_draft(registry: DraftRegistry) -> DraftHandle:
    return registry.start()


def advance(handle: DraftHandle) -> StepResult:
    return handle.wizard.advance()


def retreat(handle: DraftHandle) -> WizardStepId:
    return handle.wizard.retreat()


def submit(handle: DraftHandle) -> SubmitResult:
    return handle.wizard.submit()
