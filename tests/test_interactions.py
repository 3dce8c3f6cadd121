"""
Interaction Tests
=================
Vote counter and per-view expansion / animation state.
"""
from triage.core.errors import NotFoundError
from triage.services.interactions import vote
from triage.state.view_state import ViewState
from tests.conftest import make_issue


def test_vote_increments_by_one(store):
    store.add(make_issue("a", votes=4))
    result = vote(store, "a")
    assert result.ok
    assert result.votes == 5
    assert store.get("a").votes == 5


def test_n_votes_add_n(store):
    store.add(make_issue("a"))
    for _ in range(7):
        vote(store, "a")
    assert store.get("a").votes == 7


def test_vote_unknown_id_returns_error(seeded_store):
    before = seeded_store.snapshot()
    result = vote(seeded_store, "nope")
    assert not result.ok
    assert isinstance(result.error, NotFoundError)
    assert result.error.identifier == "nope"
    assert seeded_store.snapshot() == before


def test_vote_leaves_other_fields_untouched(store):
    original = store.add(make_issue("a", votes=1, solutions=2, tags=["X"]))
    vote(store, "a")
    updated = store.get("a")
    assert updated.model_dump(exclude={"votes"}) == original.model_dump(exclude={"votes"})


class TestViewState:

    def test_toggle_expands_and_collapses(self):
        view = ViewState()
        assert view.toggle("1") == "1"
        assert view.is_expanded("1")
        assert view.toggle("1") is None
        assert not view.is_expanded("1")

    def test_toggle_switches_target(self):
        view = ViewState()
        view.toggle("1")
        assert view.toggle("2") == "2"
        assert not view.is_expanded("1")

    def test_views_are_independent(self):
        left, right = ViewState(), ViewState()
        left.toggle("1")
        assert right.expanded_id is None

    def test_collapse(self):
        view = ViewState()
        view.toggle("1")
        view.collapse()
        assert view.expanded_id is None

    def test_vote_animation(self):
        view = ViewState()
        view.start_vote_animation("1")
        assert view.is_animating("1")
        view.finish_vote_animation("1")
        view.finish_vote_animation("1")
        assert not view.is_animating("1")
