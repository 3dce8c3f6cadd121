"""
ID Factory
==========
Short random identifiers for issues and drafts.
"""
import uuid

from triage.core.constants import ID_LENGTH


def new_id() -> str:
    return uuid.uuid4().hex[:ID_LENGTH]
