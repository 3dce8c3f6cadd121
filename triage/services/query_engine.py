"""
Query Engine
============
Pure function of (store, criteria) → ordered view.

Filtering:
    search_term - case-insensitive substring of title, description or any tag
    category / status / priority - exact match, "all" disables the filter
    All active predicates are ANDed.

Sorting (after filtering):
    date      - newest created_at first
    votes     - most votes first
    solutions - most solutions first
Python's sort is stable, and reverse=True keeps equal keys in store order,
so ties always come back in insertion order.

The store is read through snapshot(); it is never mutated here.
"""
from dataclasses import dataclass
from typing import Callable, Tuple

from triage.core.constants import FILTER_ALL
from triage.models.issue_report import IssueReport
from triage.models.query_criteria import QueryCriteria
from triage.services.issue_store import IssueStore

_SORT_KEYS: dict[str, Callable[[IssueReport], object]] = {
    "date": lambda issue: issue.created_at,
    "votes": lambda issue: issue.votes,
    "solutions": lambda issue: issue.solution_count,
}


@dataclass(frozen=True)
class QueryResult:
    issues: Tuple[IssueReport, ...]
    total: int                  # records considered before filtering
    has_active_filters: bool

    @property
    def no_results(self) -> bool:
        return not self.issues

    @property
    def ids(self) -> list[str]:
        return [issue.id for issue in self.issues]

    def __len__(self) -> int:
        return len(self.issues)


def matches_search(issue: IssueReport, search_term: str) -> bool:
    if not search_term:
        return True
    needle = search_term.lower()
    return (
        needle in issue.title.lower()
        or needle in issue.description.lower()
        or any(needle in tag.lower() for tag in issue.tags)
    )


def _matches_exact(value: str, wanted: str) -> bool:
    return wanted == FILTER_ALL or value == wanted


def matches(issue: IssueReport, criteria: QueryCriteria) -> bool:
    return (
        matches_search(issue, criteria.search_term)
        and _matches_exact(issue.category, criteria.category)
        and _matches_exact(issue.status, criteria.status)
        and _matches_exact(issue.priority, criteria.priority)
    )


def sort_issues(issues, sort_key: str) -> list[IssueReport]:
    return sorted(issues, key=_SORT_KEYS[sort_key], reverse=True)


def query(store: IssueStore, criteria: QueryCriteria = QueryCriteria()) -> QueryResult:
    """
    Filter, search and sort the store.

    Parameters
    ----------
    store : IssueStore
        Source records, read once via snapshot().
    criteria : QueryCriteria
        Defaults to no constraints and date ordering.

    Returns
    -------
    QueryResult
        Ordered issues; .no_results is True when nothing matched.
    """
    records = store.snapshot()
    filtered = [issue for issue in records if matches(issue, criteria)]
    return QueryResult(
        issues=tuple(sort_issues(filtered, criteria.sort_key)),
        total=len(records),
        has_active_filters=criteria.has_active_filters,
    )
