# app/api/buyers.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, StreamingResponse
from tortoise.expressions import Q

from app.core.auth import get_current_user
from app.core.config import settings
from app.core.exceptions import CommitFailure
from app.core.importer import build_preview, commit_buyers
from app.models.db import Buyer, User
from app.schemas.validation import ImportConfirm, ImportPreview, ImportResult
from app.utils.export import EXPORT_FIELDS, buyers_to_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/buyers", tags=["buyers"])


def get_committer():
    return commit_buyers


@router.post("/import/preview", response_model=ImportPreview)
async def preview_import(
    file: UploadFile = File(...),
    user: User = Depends(get_current_user),
):
    content = await file.read(settings.IMPORT_MAX_BYTES + 1)
    if len(content) > settings.IMPORT_MAX_BYTES:
        raise HTTPException(413, f"File too large. Max {settings.IMPORT_MAX_BYTES} bytes allowed.")

    logger.info(f"Preview requested for {file.filename} ({len(content)} bytes) by {user.clerk_id}")
    # pandas parsing is blocking
    return await run_in_threadpool(
        build_preview, content, owner_id=user.clerk_id, limit=settings.IMPORT_MAX_ROWS
    )


@router.post("/import", response_model=ImportResult)
async def confirm_import(
    payload: ImportConfirm,
    user: User = Depends(get_current_user),
    committer=Depends(get_committer),
):
    if not payload.rows:
        raise HTTPException(400, "No valid rows to import")

    try:
        inserted = await committer(user.clerk_id, payload.rows)
    except CommitFailure as e:
        return JSONResponse(
            status_code=500,
            content={"errors": [{"row": 0, "messages": [e.message]}]},
        )
    return ImportResult(inserted=inserted)


@router.get("/export")
async def export_buyers(
    city: Optional[str] = None,
    propertyType: Optional[str] = None,
    status: Optional[str] = None,
    timeline: Optional[str] = None,
    search: Optional[str] = None,
    user: User = Depends(get_current_user),
):
    query = Buyer.filter(owner_id=user.clerk_id)
    if city:
        query = query.filter(city=city)
    if propertyType:
        query = query.filter(property_type=propertyType)
    if status:
        query = query.filter(status=status)
    if timeline:
        query = query.filter(timeline=timeline)
    if search:
        query = query.filter(
            Q(full_name__icontains=search) | Q(email__icontains=search) | Q(phone__icontains=search)
        )

    records = await query.order_by("-updated_at").values(*EXPORT_FIELDS.values())

    return StreamingResponse(
        iter([buyers_to_csv(records)]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=buyers.csv"}
    )
