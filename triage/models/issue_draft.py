"""
Issue Draft Model
=================
Mutable, partially filled IssueReport as it moves through the wizard.

Every field defaults to an empty value so a draft can be created before the
user has typed anything. Step gates live in the wizard; the model only
checks types and normalises tags the same way IssueReport does.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from triage.core.constants import DEFAULT_PRIORITY
from triage.models.issue_report import normalize_tags


class DraftEnvironment(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    sdk_version: str = ""
    language_version: str = ""
    os: str = ""
    ide: str = ""


class DraftAuthor(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    email: str = ""


class IssueDraft(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    title: str = ""
    category: str = ""
    priority: str = DEFAULT_PRIORITY
    description: str = ""
    environment: DraftEnvironment = Field(default_factory=DraftEnvironment)
    code: str = ""
    error_message: str = ""
    steps_to_reproduce: str = ""
    attempted_solutions: str = ""
    author: DraftAuthor = Field(default_factory=DraftAuthor)
    tags: List[str] = []

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: List[str]) -> List[str]:
        return normalize_tags(v)
