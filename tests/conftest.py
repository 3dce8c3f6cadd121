import pytest
from datetime import datetime, timezone

from triage.models.issue_report import IssueReport
from triage.services.issue_store import IssueStore


def make_issue(issue_id="1", day=1, votes=0, solutions=0, **overrides) -> IssueReport:
    """Build a valid IssueReport created on 2025-08-<day>."""
    data = {
        "id": issue_id,
        "title": f"Issue number {issue_id} title",
        "category": "ui-widgets",
        "priority": "medium",
        "status": "open",
        "description": "A description that is long enough to pass.",
        "error_message": "Something bad happened",
        "environment": {"sdk_version": "3.16.5", "os": "macOS"},
        "author": {"name": "Tester"},
        "tags": [],
        "votes": votes,
        "solution_count": solutions,
        "created_at": datetime(2025, 8, day, 10, 0, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return IssueReport(**data)


@pytest.fixture
def store():
    return IssueStore()


@pytest.fixture
def seeded_store():
    return IssueStore([
        make_issue("1", day=28, votes=8, solutions=2, title="RenderFlex overflowed in ListView",
                   tags=["ListView", "Overflow"], status="solved"),
        make_issue("2", day=27, votes=5, solutions=1, title="Firebase auth listener stops",
                   category="firebase", priority="high", status="in-progress", tags=["Firebase"]),
        make_issue("3", day=26, votes=7, solutions=1, title="Could not resolve dependencies",
                   category="dependencies", priority="critical", tags=["Setup"]),
    ])
