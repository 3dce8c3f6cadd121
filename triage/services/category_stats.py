"""
Category Stats
==============
Category catalog for the browse page: per-category counts over the store
and a free-text search over category labels and descriptions.
"""
from typing import List

from triage.core import taxonomy
from triage.core.taxonomy import TaxonomyEntry
from triage.services.issue_store import IssueStore


def category_counts(store: IssueStore) -> List[dict]:
    """One row per registered category, in registry order, including zero counts."""
    counts = {category_id: 0 for category_id in taxonomy.CATEGORIES}
    for issue in store.snapshot():
        if issue.category in counts:
            counts[issue.category] += 1
    return [
        {**entry.to_dict(), "count": counts[entry.id]}
        for entry in taxonomy.CATEGORIES.values()
    ]


def search_categories(term: str) -> List[TaxonomyEntry]:
    needle = term.lower()
    return [
        entry
        for entry in taxonomy.CATEGORIES.values()
        if needle in entry.label.lower() or needle in entry.description.lower()
    ]
