"""
Issue Report Model
==================
Pydantic model for one learner-submitted error report.
This is the contract between the submission wizard, the store and the query engine.

Fields:
    id                  - unique, stable identifier assigned at creation
    title / description - free text gated by the wizard (min lengths in constants.py)
    category            - key into taxonomy.CATEGORIES
    priority            - key into taxonomy.PRIORITIES (default "medium")
    status              - key into taxonomy.STATUSES (starts "open")
    environment         - sdk_version, language_version, os, ide
    author              - name (required), email (optional)
    tags                - ordered, de-duplicated
    votes               - non-negative, mutated by the interaction layer
    solution_count      - non-negative, mutated by the triage collaborator
    created_at          - set once at submission, always timezone-aware (naive = UTC)

The model is frozen. The store applies the three allowed mutations
(votes, solution_count, status) by swapping in a model_copy.
"""
from datetime import date, datetime, time, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from triage.core.constants import DEFAULT_PRIORITY, DEFAULT_STATUS


def normalize_tags(tags: List[str]) -> List[str]:
    """Strip tags, drop empty ones and duplicates, keep first-seen order."""
    seen: dict[str, None] = {}
    for tag in tags:
        tag = tag.strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Environment(BaseModel):
    model_config = ConfigDict(frozen=True)

    sdk_version: str
    language_version: str = ""
    os: str
    ide: str = ""


class Author(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: Optional[str] = None


class IssueReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    category: str
    priority: str = DEFAULT_PRIORITY
    status: str = DEFAULT_STATUS
    description: str
    error_message: str = ""
    steps_to_reproduce: str = ""
    attempted_solutions: str = ""
    code: str = ""
    environment: Environment
    author: Author
    tags: List[str] = []
    votes: int = Field(default=0, ge=0)
    solution_count: int = Field(default=0, ge=0)
    created_at: datetime

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: List[str]) -> List[str]:
        return normalize_tags(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def date_to_midnight(cls, v: Any) -> Any:
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time())
        return v

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
