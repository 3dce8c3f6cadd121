"""
Sample Data
===========
Seeds an IssueStore from a YAML file of documented cases.

Expected layout:
    issues:
      - id: "1"
        title: ...
        category: ui-widgets
        ...

Entries that fail model validation or reference an unknown taxonomy id are
skipped with a warning; the rest still load.
"""
import logging
from typing import List

import yaml
from pydantic import ValidationError

from triage.core.errors import DuplicateIssueError, TaxonomyMismatchError
from triage.models.issue_report import IssueReport
from triage.services.issue_store import IssueStore

logger = logging.getLogger(__name__)


def load_sample_issues(path: str) -> List[dict]:
    """Read the raw issue entries from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict) or not isinstance(data.get("issues", []), list):
        raise ValueError(f"{path}: expected a mapping with an 'issues' list")
    return data.get("issues", [])


def seed_store(store: IssueStore, path: str) -> int:
    """
    Add every valid entry from the YAML file to the store.

    Returns
    -------
    int
        Number of records added.
    """
    added = 0
    for index, raw in enumerate(load_sample_issues(path)):
        try:
            store.add(IssueReport.model_validate(raw))
        except (ValidationError, TaxonomyMismatchError, DuplicateIssueError) as e:
            logger.warning("Skipping sample entry #%d in %s: %s", index, path, e)
            continue
        added += 1
    logger.info("Seeded %d sample issue(s) from %s", added, path)
    return added
