"""
Query Criteria Model
====================
Search term, exact-match filters and sort key for one view over the store.

"all" (or an empty value) on category / status / priority means no constraint.
"""
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from triage.core.constants import DEFAULT_SORT_KEY, FILTER_ALL

SortKey = Literal["date", "votes", "solutions"]


class QueryCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    category: str = FILTER_ALL
    status: str = FILTER_ALL
    priority: str = FILTER_ALL
    sort_key: SortKey = DEFAULT_SORT_KEY

    @field_validator("category", "status", "priority", mode="before")
    @classmethod
    def blank_means_all(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return FILTER_ALL
        return v

    @property
    def has_active_filters(self) -> bool:
        return bool(self.search_term) or any(
            value != FILTER_ALL for value in (self.category, self.status, self.priority)
        )

    def cleared(self) -> "QueryCriteria":
        """Drop search and filters, keep the sort key."""
        return QueryCriteria(sort_key=self.sort_key)
