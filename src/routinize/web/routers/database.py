"""Database structure inspection routes."""

from fastapi import APIRouter

from ...config import STORAGE_BUCKETS
from ...db.engine import describe_structure, fix_structure, missing_items

router = APIRouter(prefix="/api/database", tags=["database"])


@router.get("/structure")
async def structure():
    """Compare the live database with the declared schema."""
    tables = await describe_structure()
    missing = missing_items(tables)
    return {
        "tables": tables,
        "missing": missing,
        "healthy": not missing,
        "storageBuckets": list(STORAGE_BUCKETS.values()),
    }


@router.post("/fix-structure")
async def fix():
    """Create missing tables and columns."""
    applied = await fix_structure()
    remaining = missing_items(await describe_structure())
    return {"success": not remaining, "applied": applied, "missing": remaining}
