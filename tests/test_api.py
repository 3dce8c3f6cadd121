"""
HTTP API Tests
==============
Routers are exercised through TestClient with a fresh store and draft
registry injected via dependency_overrides.
"""
import json

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from main import app
from triage.services.draft_registry import DraftRegistry
from triage.state.app_state import get_drafts, get_store, get_views


@pytest.fixture
def drafts(seeded_store):
    return DraftRegistry(seeded_store)


@pytest.fixture
def views():
    return {}


@pytest.fixture
def client(seeded_store, drafts, views):
    app.dependency_overrides[get_store] = lambda: seeded_store
    app.dependency_overrides[get_drafts] = lambda: drafts
    app.dependency_overrides[get_views] = lambda: views
    yield TestClient(app)
    app.dependency_overrides.clear()


def _fill_and_submit(client, draft_id):
    client.patch(f"/api/drafts/{draft_id}", json={
        "title": "Hot restart loses state",
        "category": "architecture",
        "priority": "high",
        "description": "After a hot restart every Cubit is back to its initial state",
    })
    assert client.post(f"/api/drafts/{draft_id}/advance").status_code == 200
    client.patch(f"/api/drafts/{draft_id}", json={
        "environment.sdk_version": "3.16.5", "environment.os": "Windows",
    })
    assert client.post(f"/api/drafts/{draft_id}/advance").status_code == 200
    client.patch(f"/api/drafts/{draft_id}", json={"error_message": "State reset to initial"})
    assert client.post(f"/api/drafts/{draft_id}/advance").status_code == 200
    client.patch(f"/api/drafts/{draft_id}", json={"author": {"name": "Diego"}, "tags": ["Cubit"]})
    return client.post(f"/api/drafts/{draft_id}/submit")


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# Taxonomy / catalog
# ---------------------------------------------------------------------------
def test_taxonomy(client):
    data = client.get("/api/taxonomy").json()
    assert len(data["category"]) == 10
    assert data["priority"][3]["id"] == "critical"
    assert "Linux" in data["os_options"]
    assert "VS Code" in data["ide_options"]


def test_categories_with_counts_and_search(client):
    data = client.get("/api/categories").json()
    assert data["total"] == 3
    assert data["category_count"] == 10
    assert len(data["categories"]) == 10

    data = client.get("/api/categories", params={"search": "firebase"}).json()
    assert [c["id"] for c in data["categories"]] == ["firebase"]
    assert data["categories"][0]["count"] == 1
    assert data["total"] == 3


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------
def test_list_issues_defaults(client):
    data = client.get("/api/issues").json()
    assert [i["id"] for i in data["issues"]] == ["1", "2", "3"]
    assert data["count"] == data["total"] == 3
    assert data["no_results"] is False
    assert data["has_active_filters"] is False
    assert data["issues"][0]["category"]["icon"] == "🎨"


def test_list_issues_filters_and_sort(client):
    data = client.get("/api/issues", params={"sort": "votes"}).json()
    assert [i["id"] for i in data["issues"]] == ["1", "3", "2"]

    data = client.get("/api/issues", params={"search": "overflow"}).json()
    assert [i["id"] for i in data["issues"]] == ["1"]
    assert data["has_active_filters"] is True

    data = client.get("/api/issues", params={"priority": "low"}).json()
    assert data["no_results"] is True
    assert data["issues"] == []


def test_list_issues_bad_sort(client):
    assert client.get("/api/issues", params={"sort": "title"}).status_code == 422


def test_get_issue(client):
    assert client.get("/api/issues/2").json()["title"] == "Firebase auth listener stops"
    assert client.get("/api/issues/999").status_code == 404


def test_vote(client, seeded_store):
    resp = client.post("/api/issues/2/vote")
    assert resp.status_code == 200
    assert resp.json() == {"issue_id": "2", "votes": 6}
    assert seeded_store.get("2").votes == 6


def test_vote_unknown(client, seeded_store):
    before = seeded_store.snapshot()
    assert client.post("/api/issues/nope/vote").status_code == 404
    assert seeded_store.snapshot() == before


def test_toggle_view_marks_card_expanded(client):
    resp = client.post("/api/views/main/toggle/3")
    assert resp.json() == {"view_id": "main", "expanded_id": "3"}

    cards = client.get("/api/issues", params={"view": "main"}).json()["issues"]
    assert [c["id"] for c in cards if c["expanded"]] == ["3"]

    # other views are unaffected
    cards = client.get("/api/issues", params={"view": "other"}).json()["issues"]
    assert not any(c["expanded"] for c in cards)

    assert client.post("/api/views/main/toggle/3").json()["expanded_id"] is None
    assert client.post("/api/views/main/toggle/missing").status_code == 404


# ---------------------------------------------------------------------------
# Wizard
# ---------------------------------------------------------------------------
def test_start_draft(client):
    resp = client.post("/api/drafts")
    assert resp.status_code == 201
    data = resp.json()
    assert data["step"] == 1
    assert data["submitted"] is False
    assert data["draft"]["priority"] == "medium"
    assert data["progress"][0]["state"] == "active"


def test_unknown_draft(client):
    assert client.get("/api/drafts/nope").status_code == 404
    assert client.post("/api/drafts/nope/advance").status_code == 404


def test_advance_rejected_with_field_errors(client):
    draft_id = client.post("/api/drafts").json()["draft_id"]
    client.patch(f"/api/drafts/{draft_id}", json={
        "title": "123456789", "category": "testing", "description": "d" * 20,
    })
    resp = client.post(f"/api/drafts/{draft_id}/advance")
    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["step"] == 1
    assert [e["field"] for e in detail["errors"]] == ["title"]
    assert client.get(f"/api/drafts/{draft_id}").json()["step"] == 1


def test_patch_unknown_field_conflict(client):
    draft_id = client.post("/api/drafts").json()["draft_id"]
    assert client.patch(f"/api/drafts/{draft_id}", json={"severity": "x"}).status_code == 409


def test_patch_wrong_type(client):
    draft_id = client.post("/api/drafts").json()["draft_id"]
    assert client.patch(f"/api/drafts/{draft_id}", json={"title": 12}).status_code == 422


def test_submit_too_early_conflict(client):
    draft_id = client.post("/api/drafts").json()["draft_id"]
    assert client.post(f"/api/drafts/{draft_id}/submit").status_code == 409


def test_retreat_keeps_values(client):
    draft_id = client.post("/api/drafts").json()["draft_id"]
    client.patch(f"/api/drafts/{draft_id}", json={
        "title": "Long enough title", "category": "others", "description": "d" * 25,
    })
    client.post(f"/api/drafts/{draft_id}/advance")
    data = client.post(f"/api/drafts/{draft_id}/retreat").json()
    assert data["step"] == 1
    assert data["draft"]["title"] == "Long enough title"


def test_full_submission_flow(client, seeded_store):
    draft_id = client.post("/api/drafts").json()["draft_id"]
    with patch("triage.api.drafts.EXPORT_PATH", ""):
        resp = _fill_and_submit(client, draft_id)

    assert resp.status_code == 201
    issue = resp.json()["issue"]
    assert issue["title"] == "Hot restart loses state"
    assert issue["status"]["id"] == "open"
    assert issue["tags"] == ["Cubit"]
    assert len(seeded_store) == 4

    # newest first, so the fresh report leads the default view
    listing = client.get("/api/issues").json()
    assert listing["issues"][0]["id"] == issue["id"]

    # submitted drafts are discarded
    assert client.get(f"/api/drafts/{draft_id}").status_code == 404
    assert client.post(f"/api/drafts/{draft_id}/submit").status_code == 404


def test_submission_is_exported(client, tmp_path):
    out = tmp_path / "issues.json"
    draft_id = client.post("/api/drafts").json()["draft_id"]
    with patch("triage.api.drafts.EXPORT_PATH", str(out)):
        assert _fill_and_submit(client, draft_id).status_code == 201

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["total"] == 4


def test_reset_clears_draft(client):
    draft_id = client.post("/api/drafts").json()["draft_id"]
    client.patch(f"/api/drafts/{draft_id}", json={"title": "Long enough title"})
    state = client.post(f"/api/drafts/{draft_id}/reset").json()
    assert state["step"] == 1
    assert state["draft"]["title"] == ""


def test_rejected_patch_leaves_draft_unchanged(client):
    draft_id = client.post("/api/drafts").json()["draft_id"]
    client.patch(f"/api/drafts/{draft_id}", json={"title": "Original title here"})

    resp = client.patch(f"/api/drafts/{draft_id}", json={"title": "Changed title here", "tags": "notalist"})
    assert resp.status_code == 422
    assert client.get(f"/api/drafts/{draft_id}").json()["draft"]["title"] == "Original title here"


def test_submitted_drafts_do_not_accumulate(client, drafts):
    with patch("triage.api.drafts.EXPORT_PATH", ""):
        for _ in range(3):
            draft_id = client.post("/api/drafts").json()["draft_id"]
            assert _fill_and_submit(client, draft_id).status_code == 201
    assert len(drafts) == 0


def test_listing_with_unknown_view_creates_no_state(client, views):
    for name in ("a", "b", "c"):
        assert client.get("/api/issues", params={"view": name}).status_code == 200
    assert views == {}


# ---------------------------------------------------------------------------
# Vote animation
# ---------------------------------------------------------------------------
def test_vote_with_view_marks_card_voting(client, views):
    assert client.post("/api/issues/2/vote", params={"view": "main"}).status_code == 200
    assert views["main"].is_animating("2")

    cards = client.get("/api/issues", params={"view": "main"}).json()["issues"]
    assert [c["id"] for c in cards if c["voting"]] == ["2"]

    # other views never see it
    cards = client.get("/api/issues", params={"view": "other"}).json()["issues"]
    assert not any(c["voting"] for c in cards)

    resp = client.delete("/api/views/main/animations/2")
    assert resp.json() == {"view_id": "main", "issue_id": "2", "voting": False}
    cards = client.get("/api/issues", params={"view": "main"}).json()["issues"]
    assert not any(c["voting"] for c in cards)


def test_vote_without_view_creates_no_state(client, views):
    client.post("/api/issues/2/vote")
    client.post("/api/issues/missing/vote", params={"view": "main"})
    assert views == {}
