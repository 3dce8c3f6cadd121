"""
Presenter
=========
Turns IssueReport records into display cards for the rendering layer.

This is where taxonomy integrity is enforced at render time: a record whose
category / priority / status is missing from the registry is logged at
WARNING and left out of the rendered list. One malformed record never takes
the whole view down.
"""
import logging
from typing import Collection, Iterable, List, Optional

from pydantic import BaseModel

from triage.core import taxonomy
from triage.core.errors import TaxonomyMismatchError
from triage.models.issue_report import IssueReport

logger = logging.getLogger(__name__)


class Badge(BaseModel):
    id: str
    label: str
    icon: str
    color: str


class IssueCard(BaseModel):
    id: str
    title: str
    description: str
    category: Badge
    priority: Badge
    status: Badge
    votes: int
    solution_count: int
    tags: List[str]
    author: str
    date: str
    environment: str
    # detail fields, shown when the card is expanded
    error_message: str = ""
    steps_to_reproduce: str = ""
    attempted_solutions: str = ""
    code: str = ""
    expanded: bool = False
    voting: bool = False


def _badge(entry: taxonomy.TaxonomyEntry) -> Badge:
    return Badge(id=entry.id, label=entry.label, icon=entry.icon, color=entry.color)


def environment_line(issue: IssueReport) -> str:
    env = issue.environment
    return f"SDK {env.sdk_version} • {env.os}"


def present_issue(
    issue: IssueReport, expanded_id: Optional[str] = None, animating: Collection[str] = ()
) -> IssueCard:
    """
    Build the card for one record.

    Raises
    ------
    TaxonomyMismatchError
        If the record references an unregistered identifier.
    """
    return IssueCard(
        id=issue.id,
        title=issue.title,
        description=issue.description,
        category=_badge(taxonomy.lookup_category(issue.category)),
        priority=_badge(taxonomy.lookup_priority(issue.priority)),
        status=_badge(taxonomy.lookup_status(issue.status)),
        votes=issue.votes,
        solution_count=issue.solution_count,
        tags=list(issue.tags),
        author=issue.author.name,
        date=issue.created_at.date().isoformat(),
        environment=environment_line(issue),
        error_message=issue.error_message,
        steps_to_reproduce=issue.steps_to_reproduce,
        attempted_solutions=issue.attempted_solutions,
        code=issue.code,
        expanded=issue.id == expanded_id,
        voting=issue.id in animating,
    )


def present_issues(
    issues: Iterable[IssueReport],
    expanded_id: Optional[str] = None,
    animating: Collection[str] = (),
) -> List[IssueCard]:
    """Cards for every renderable record, order preserved, mismatches dropped."""
    cards: List[IssueCard] = []
    for issue in issues:
        try:
            cards.append(present_issue(issue, expanded_id, animating))
        except TaxonomyMismatchError as e:
            logger.warning("Skipping issue %s: %s", issue.id, e)
    return cards
