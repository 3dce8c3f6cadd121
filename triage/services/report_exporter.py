"""
Report Exporter
===============
Default persistence collaborator: serializes the whole store to a JSON file.

Output shape:
    {
        "generated_at": ISO-8601 timestamp,
        "total": number of issues,
        "issues": [IssueReport.model_dump(mode="json"), ...]   # store order
    }
"""
import json
import logging
import os
from datetime import datetime, timezone

from triage.services.issue_store import IssueStore

logger = logging.getLogger(__name__)


class ReportExporter:
    """Writes the store to disk. Failures are logged and reported, never raised."""

    @staticmethod
    def write_reports(store: IssueStore, output_path: str = "issues.json") -> bool:
        issues = store.snapshot()
        data = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "total": len(issues),
            "issues": [issue.model_dump(mode="json") for issue in issues],
        }

        abs_output = os.path.abspath(output_path)
        try:
            parent = os.path.dirname(abs_output)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(abs_output, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error("Failed to write %s: %s", abs_output, e, exc_info=True)
            return False

        logger.info("Exported %d issue(s) to %s", len(issues), abs_output)
        return True
