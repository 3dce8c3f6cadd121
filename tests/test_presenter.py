"""
Presenter Tests
===============
Cards carry taxonomy metadata; records with unknown identifiers are logged and dropped.
"""
import logging

import pytest

from triage.core.errors import TaxonomyMismatchError
from triage.core.presenter import present_issue, present_issues
from tests.conftest import make_issue


def test_card_uses_registry_metadata():
    card = present_issue(make_issue("1", day=28, category="firebase", priority="critical", status="solved"))
    assert card.category.label == "Firebase"
    assert card.category.icon == "🔥"
    assert card.priority.color == "#ef4444"
    assert card.status.label == "Solved"
    assert card.date == "2025-08-28"
    assert card.environment == "SDK 3.16.5 • macOS"
    assert card.expanded is False


def test_expanded_flag():
    card = present_issue(make_issue("1"), expanded_id="1")
    assert card.expanded is True


def test_voting_flag():
    cards = present_issues([make_issue("1"), make_issue("2")], animating={"2"})
    assert [c.voting for c in cards] == [False, True]

def test_present_issue_raises_on_mismatch():
    with pytest.raises(TaxonomyMismatchError):
        present_issue(make_issue("1", status="closed"))


def test_mismatched_record_excluded_and_logged(caplog):
    issues = [
        make_issue("ok-1"),
        make_issue("bad", category="kotlin"),
        make_issue("ok-2"),
    ]
    with caplog.at_level(logging.WARNING, logger="triage.core.presenter"):
        cards = present_issues(issues)

    assert [c.id for c in cards] == ["ok-1", "ok-2"]
    assert "bad" in caplog.text
    assert "kotlin" in caplog.text
