"""
Issue browsing endpoints
========================
GET    /api/issues                     - query(store, criteria) rendered as cards
GET    /api/issues/{issue_id}          - one card
POST   /api/issues/{issue_id}/vote     - +1 vote; ?view= starts that view's vote animation
POST   /api/views/{view_id}/toggle/{issue_id}      - expand / collapse a card in one view
DELETE /api/views/{view_id}/animations/{issue_id}  - vote animation finished

View state is created by toggle and vote only. Listing with an unknown
?view= renders every card collapsed and creates nothing.

The rendering layer calls GET /api/issues on every criteria change.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from triage.core.errors import NotFoundError, TaxonomyMismatchError
from triage.core.presenter import IssueCard, present_issue, present_issues
from triage.models.query_criteria import QueryCriteria
from triage.services.interactions import vote
from triage.services.issue_store import IssueStore
from triage.services.query_engine import query
from triage.state.app_state import get_store, get_views
from triage.state.view_state import ViewState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Issues"])


class IssueListResponse(BaseModel):
    total: int
    count: int
    no_results: bool
    has_active_filters: bool
    issues: List[IssueCard]


class VoteResponse(BaseModel):
    issue_id: str
    votes: int


class ToggleResponse(BaseModel):
    view_id: str
    expanded_id: Optional[str]


class AnimationResponse(BaseModel):
    view_id: str
    issue_id: str
    voting: bool


@router.get("/issues", response_model=IssueListResponse)
async def list_issues(
    search: str = "",
    category: str = "all",
    status: str = "all",
    priority: str = "all",
    sort: str = "date",
    view: Optional[str] = None,
    store: IssueStore = Depends(get_store),
    views: dict[str, ViewState] = Depends(get_views),
):
    try:
        criteria = QueryCriteria(
            search_term=search, category=category, status=status, priority=priority, sort_key=sort
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    result = query(store, criteria)
    view_state = views.get(view) if view else None
    if view_state is None:
        cards = present_issues(result.issues)
    else:
        cards = present_issues(result.issues, view_state.expanded_id, view_state.vote_animations)
    return IssueListResponse(
        total=result.total,
        count=len(cards),
        no_results=not cards,
        has_active_filters=result.has_active_filters,
        issues=cards,
    )


@router.get("/issues/{issue_id}", response_model=IssueCard)
async def get_issue(issue_id: str, store: IssueStore = Depends(get_store)):
    try:
        return present_issue(store.get(issue_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TaxonomyMismatchError as e:
        logger.warning("Issue %s cannot be rendered: %s", issue_id, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/issues/{issue_id}/vote", response_model=VoteResponse)
async def vote_issue(
    issue_id: str,
    view: Optional[str] = None,
    store: IssueStore = Depends(get_store),
    views: dict[str, ViewState] = Depends(get_views),
):
    result = vote(store, issue_id)
    if not result.ok:
        raise HTTPException(status_code=404, detail=str(result.error))
    if view:
        views.setdefault(view, ViewState()).start_vote_animation(issue_id)
    return VoteResponse(issue_id=result.issue_id, votes=result.votes)


@router.post("/views/{view_id}/toggle/{issue_id}", response_model=ToggleResponse)
async def toggle_issue(
    view_id: str,
    issue_id: str,
    store: IssueStore = Depends(get_store),
    views: dict[str, ViewState] = Depends(get_views),
):
    if issue_id not in store:
        raise HTTPException(status_code=404, detail=str(NotFoundError(issue_id)))
    expanded = views.setdefault(view_id, ViewState()).toggle(issue_id)
    return ToggleResponse(view_id=view_id, expanded_id=expanded)


@router.delete("/views/{view_id}/animations/{issue_id}", response_model=AnimationResponse)
async def finish_vote_animation(
    view_id: str,
    issue_id: str,
    views: dict[str, ViewState] = Depends(get_views),
):
    view_state = views.get(view_id)
    if view_state is not None:
        view_state.finish_vote_animation(issue_id)
    return AnimationResponse(view_id=view_id, issue_id=issue_id, voting=False)
