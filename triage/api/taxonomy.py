"""
GET /api/taxonomy   - every category / priority / status entry plus form options
GET /api/categories - category catalog with per-category counts, optional search
"""
from fastapi import APIRouter, Depends

from triage.core import taxonomy
from triage.core.constants import IDE_OPTIONS, OS_OPTIONS
from triage.services.category_stats import category_counts, search_categories
from triage.services.issue_store import IssueStore
from triage.state.app_state import get_store

router = APIRouter(prefix="/api", tags=["Taxonomy"])


@router.get("/taxonomy")
async def get_taxonomy():
    data = taxonomy.as_dict()
    data["os_options"] = OS_OPTIONS
    data["ide_options"] = IDE_OPTIONS
    return data


@router.get("/categories")
async def get_categories(search: str = "", store: IssueStore = Depends(get_store)):
    rows = category_counts(store)
    total = sum(row["count"] for row in rows)
    if search:
        wanted = {entry.id for entry in search_categories(search)}
        rows = [row for row in rows if row["id"] in wanted]
    return {"total": total, "category_count": len(taxonomy.CATEGORIES), "categories": rows}
