"""
View State
==========
Ephemeral, per-view UI state keyed by issue id. Never stored on IssueReport
and never persisted.

    expanded_id      - the one record whose details are open, or None
    vote_animations  - ids whose vote animation is still running
"""
from typing import Optional, Set


class ViewState:
    def __init__(self) -> None:
        self.expanded_id: Optional[str] = None
        self.vote_animations: Set[str] = set()

    def toggle(self, issue_id: str) -> Optional[str]:
        """Expand issue_id, or collapse it if it is already expanded. Returns the new target."""
        self.expanded_id = None if self.expanded_id == issue_id else issue_id
        return self.expanded_id

    def is_expanded(self, issue_id: str) -> bool:
        return self.expanded_id == issue_id

    def collapse(self) -> None:
        self.expanded_id = None

    def start_vote_animation(self, issue_id: str) -> None:
        self.vote_animations.add(issue_id)

    def finish_vote_animation(self, issue_id: str) -> None:
        self.vote_animations.discard(issue_id)

    def is_animating(self, issue_id: str) -> bool:
        return issue_id in self.vote_animations
