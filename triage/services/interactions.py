"""
Interactions
============
Per-record vote counter.

Votes are not de-duplicated per user. Rate limiting and anti-abuse rules
belong at the server boundary, outside this core.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from triage.core.errors import NotFoundError
from triage.services.issue_store import IssueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoteResult:
    ok: bool
    issue_id: str
    votes: int = 0
    error: Optional[NotFoundError] = None


def vote(store: IssueStore, issue_id: str) -> VoteResult:
    """Add exactly one vote. Unknown ids leave the store untouched."""
    try:
        updated = store.increment_votes(issue_id)
    except NotFoundError as e:
        logger.info("Vote ignored: %s", e)
        return VoteResult(ok=False, issue_id=issue_id, error=e)
    return VoteResult(ok=True, issue_id=issue_id, votes=updated.votes)
