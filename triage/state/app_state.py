"""
App State
=========
Process-wide IssueStore and DraftRegistry used by the HTTP surface.

Routers receive them through FastAPI dependencies (get_store / get_drafts /
get_view_state) so tests can swap in fresh instances with
app.dependency_overrides.
"""
import logging
from typing import Optional

from triage.core.config import SAMPLE_DATA_PATH, SEED_SAMPLE_DATA
from triage.services.draft_registry import DraftRegistry
from triage.services.issue_store import IssueStore
from triage.services.sample_data import seed_store
from triage.state.view_state import ViewState

logger = logging.getLogger(__name__)

_store: Optional[IssueStore] = None
_drafts: Optional[DraftRegistry] = None
_views: dict[str, ViewState] = {}


def init_state(seed: bool = SEED_SAMPLE_DATA, sample_path: str = SAMPLE_DATA_PATH) -> IssueStore:
    """Create the store (optionally seeded) and its draft registry."""
    global _store, _drafts
    _store = IssueStore()
    if seed:
        seed_store(_store, sample_path)
    _drafts = DraftRegistry(_store)
    _views.clear()
    return _store


def get_store() -> IssueStore:
    if _store is None:
        init_state()
    return _store


def get_drafts() -> DraftRegistry:
    if _drafts is None:
        init_state()
    return _drafts


def get_views() -> dict[str, ViewState]:
    return _views
