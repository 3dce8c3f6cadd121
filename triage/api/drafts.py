"""
Submission wizard endpoints
===========================
POST  /api/drafts                      - start a draft
GET   /api/drafts/{draft_id}           - draft values, step, progress, summary
PATCH /api/drafts/{draft_id}           - edit fields ("environment.os" style keys allowed)
POST  /api/drafts/{draft_id}/advance   - next step, 422 with field errors when gated
POST  /api/drafts/{draft_id}/retreat   - previous step
POST  /api/drafts/{draft_id}/submit    - create the IssueReport, 422 when gated;
                                         the draft is discarded once submitted
POST  /api/drafts/{draft_id}/reset     - start over with an empty draft

Status codes:
    404 - unknown draft
    409 - wizard misuse (e.g. submit before the contact step, edit after submit)
    422 - validation failure; detail = {"step": n, "errors": [{field, message}]}
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from triage.core.config import EXPORT_PATH
from triage.core.errors import NotFoundError, WizardMisuseError
from triage.core.presenter import IssueCard, present_issue
from triage.services.draft_registry import DraftHandle, DraftRegistry, advance, retreat, submit
from triage.services.issue_store import IssueStore
from triage.services.report_exporter import ReportExporter
from triage.state.app_state import get_drafts, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/drafts", tags=["Wizard"])


class DraftState(BaseModel):
    draft_id: str
    step: int
    submitted: bool
    draft: Dict[str, Any]
    progress: List[Dict[str, Any]]
    summary: Dict[str, str]
    issue_id: Optional[str] = None


class SubmitResponse(BaseModel):
    draft_id: str
    issue: IssueCard


def _state(handle: DraftHandle) -> DraftState:
    wizard = handle.wizard
    return DraftState(
        draft_id=handle.draft_id,
        step=int(wizard.step),
        submitted=wizard.is_submitted,
        draft=wizard.draft.model_dump(),
        progress=wizard.progress(),
        summary=wizard.summary(),
        issue_id=wizard.issue.id if wizard.issue else None,
    )


def _handle(drafts: DraftRegistry, draft_id: str) -> DraftHandle:
    try:
        return drafts.get(draft_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=DraftState, status_code=201)
async def start_draft(drafts: DraftRegistry = Depends(get_drafts)):
    handle = drafts.start()
    logger.info("[API] Draft %s started", handle.draft_id)
    return _state(handle)


@router.get("/{draft_id}", response_model=DraftState)
async def get_draft(draft_id: str, drafts: DraftRegistry = Depends(get_drafts)):
    return _state(_handle(drafts, draft_id))


@router.patch("/{draft_id}", response_model=DraftState)
async def update_draft(
    draft_id: str,
    fields: Dict[str, Any] = Body(...),
    drafts: DraftRegistry = Depends(get_drafts),
):
    handle = _handle(drafts, draft_id)
    try:
        handle.wizard.update(**fields)
    except WizardMisuseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    return _state(handle)


@router.post("/{draft_id}/advance", response_model=DraftState)
async def advance_draft(draft_id: str, drafts: DraftRegistry = Depends(get_drafts)):
    handle = _handle(drafts, draft_id)
    try:
        result = advance(handle)
    except WizardMisuseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not result.ok:
        raise HTTPException(status_code=422, detail=result.failure.to_dict())
    return _state(handle)


@router.post("/{draft_id}/retreat", response_model=DraftState)
async def retreat_draft(draft_id: str, drafts: DraftRegistry = Depends(get_drafts)):
    handle = _handle(drafts, draft_id)
    try:
        retreat(handle)
    except WizardMisuseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(handle)


@router.post("/{draft_id}/submit", response_model=SubmitResponse, status_code=201)
async def submit_draft(
    draft_id: str,
    drafts: DraftRegistry = Depends(get_drafts),
    store: IssueStore = Depends(get_store),
):
    handle = _handle(drafts, draft_id)
    try:
        result = submit(handle)
    except WizardMisuseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not result.ok:
        raise HTTPException(status_code=422, detail=result.failure.to_dict())

    logger.info("[API] Draft %s submitted as issue %s", draft_id, result.issue.id)
    drafts.discard(draft_id)
    if EXPORT_PATH:
        ReportExporter.write_reports(store, EXPORT_PATH)
    return SubmitResponse(draft_id=draft_id, issue=present_issue(result.issue))


@router.post("/{draft_id}/reset", response_model=DraftState)
async def reset_draft(draft_id: str, drafts: DraftRegistry = Depends(get_drafts)):
    handle = _handle(drafts, draft_id)
    handle.wizard.reset()
    return _state(handle)
