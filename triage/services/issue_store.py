"""
Issue Store
===========
In-memory record set every other component operates on.

Guarantees:
    - ids are unique across the store
    - insertion order is the "store order" used to break sort ties
    - every record passes taxonomy.ensure_known before it is stored
    - votes / solution_count / status are the only mutable fields; each
      mutation swaps in a model_copy under a single lock, so concurrent
      increments never lose an update

Deletion is not supported; archival belongs to the persistence collaborator.
"""
import logging
import threading
from datetime import datetime, timezone
from typing import Iterable, Iterator, Optional

from triage.core import taxonomy
from triage.core.errors import DuplicateIssueError, NotFoundError
from triage.models.issue_report import IssueReport, as_utc
from triage.utils.id_factory import new_id

logger = logging.getLogger(__name__)


class IssueStore:
    """
    Thread-safe, insertion-ordered collection of IssueReport records.

    Usage:
        store = IssueStore()
        issue = store.create({...draft fields...})
        store.increment_votes(issue.id)
    """

    def __init__(self, issues: Iterable[IssueReport] = ()) -> None:
        # dicts keep insertion order, which doubles as the tie-break order
        self._issues: dict[str, IssueReport] = {}
        self._lock = threading.Lock()
        for issue in issues:
            self.add(issue)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------
    def add(self, issue: IssueReport) -> IssueReport:
        """
        Store an already-built record.

        Raises
        ------
        TaxonomyMismatchError
            If category / priority / status are not registered.
        DuplicateIssueError
            If the id is already taken.
        """
        taxonomy.ensure_known(issue.category, issue.priority, issue.status)
        with self._lock:
            if issue.id in self._issues:
                raise DuplicateIssueError(issue.id)
            self._issues[issue.id] = issue
        logger.debug("Stored issue %s (%s)", issue.id, issue.category)
        return issue

    def create(self, fields: dict, created_at: Optional[datetime] = None) -> IssueReport:
        """
        Build and store a new record with a fresh id and creation timestamp.

        Parameters
        ----------
        fields : dict
            Every IssueReport field except id / created_at / status / counters.
        created_at : datetime, optional
            Defaults to now (UTC). A naive value is taken to be UTC.
        """
        stamp = as_utc(created_at) if created_at else datetime.now(timezone.utc)
        with self._lock:
            issue_id = new_id()
            while issue_id in self._issues:
                issue_id = new_id()
            issue = IssueReport(id=issue_id, created_at=stamp, **fields)
            taxonomy.ensure_known(issue.category, issue.priority, issue.status)
            self._issues[issue_id] = issue
        logger.info("Created issue %s: %s", issue.id, issue.title)
        return issue

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, issue_id: str) -> IssueReport:
        issue = self.find(issue_id)
        if issue is None:
            raise NotFoundError(issue_id)
        return issue

    def find(self, issue_id: str) -> Optional[IssueReport]:
        with self._lock:
            return self._issues.get(issue_id)

    def snapshot(self) -> tuple[IssueReport, ...]:
        """All records in store order. Records are frozen, so the tuple is safe to share."""
        with self._lock:
            return tuple(self._issues.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._issues)

    def __contains__(self, issue_id: object) -> bool:
        with self._lock:
            return issue_id in self._issues

    def __iter__(self) -> Iterator[IssueReport]:
        return iter(self.snapshot())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def _replace(self, issue_id: str, **changes) -> IssueReport:
        with self._lock:
            current = self._issues.get(issue_id)
            if current is None:
                raise NotFoundError(issue_id)
            updated = current.model_copy(update=changes)
            self._issues[issue_id] = updated
            return updated

    def _increment(self, issue_id: str, counter: str) -> IssueReport:
        with self._lock:
            current = self._issues.get(issue_id)
            if current is None:
                raise NotFoundError(issue_id)
            updated = current.model_copy(update={counter: getattr(current, counter) + 1})
            self._issues[issue_id] = updated
            return updated

    def increment_votes(self, issue_id: str) -> IssueReport:
        return self._increment(issue_id, "votes")

    def add_solution(self, issue_id: str) -> IssueReport:
        """Count one more proposed solution. Called by the triage collaborator."""
        return self._increment(issue_id, "solution_count")

    def update_status(self, issue_id: str, status: str) -> IssueReport:
        """Move an issue to another status. Called by the triage collaborator only."""
        taxonomy.lookup_status(status)
        updated = self._replace(issue_id, status=status)
        logger.info("Issue %s status -> %s", issue_id, status)
        return updated
