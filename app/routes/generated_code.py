"""Generated-code record retrieval endpoint."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_repository
from app.repositories import GeneratedCodeRepository
from figma_extractor.errors import NotFoundError

router = APIRouter(prefix="/api/v1", tags=["generated-code"])


@router.get("/generated-code")
async def get_generated_code(
    id: Optional[str] = Query(default=None),
    fileKey: Optional[str] = Query(default=None),
    framework: Optional[str] = Query(default=None),
    repository: GeneratedCodeRepository = Depends(get_repository),
):
    """Fetch one record by id, or list records filtered by fileKey or framework."""
    if id:
        record = await repository.find_by_id(id)
        if record is None:
            raise NotFoundError(
                "Generated code not found", details=f"No record found with id: {id}"
            )
        return {"success": True, "data": record}

    if fileKey:
        records = await repository.find_by_file_key(fileKey)
    elif framework:
        records = await repository.find_by_framework(framework)
    else:
        records = await repository.find_all()

    return {"success": True, "count": len(records), "data": records}
