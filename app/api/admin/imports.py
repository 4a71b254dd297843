"""
People Profile — Admin bulk import API

  - POST /          upload a workbook and import its rows
  - GET  /template  download the import template
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_db
from app.excel.reader import ExcelParseError, parse_excel_file
from app.excel.template import (
    TEMPLATE_FILENAME,
    TEMPLATE_UPDATED_DATE,
    TEMPLATE_VERSION,
    build_template_workbook,
)
from app.schemas.imports import ImportResponse
from app.services.import_service import ImportService
from app.utils import cache
from app.utils.storage import XLSX_CONTENT_TYPE, archive_import_file

logger = structlog.get_logger("people_profile.api.admin.imports")

router = APIRouter()

ALLOWED_EXTENSIONS = (".xlsx", ".xlsm")


# ──────────────────────────────────────────────────────────────────────────────
# POST / — Import users from a workbook
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=ImportResponse,
    summary="Bulk import profiles from an Excel workbook",
)
async def import_users(
    file: Optional[UploadFile] = File(None, description="Excel workbook (.xlsx)"),
    reset_database: Optional[str] = Form(None, description='"true" deletes profiles missing from the file'),
    db: AsyncSession = Depends(get_db),
) -> ImportResponse:
    """Import every row of the uploaded workbook.

    Rows are processed independently: failures are reported per row in
    ``errors`` and do not stop the import.  With ``reset_database=true``
    every profile whose email is not in the file (and not protected by
    ``IMPORT_PROTECTED_EMAILS``) is deleted first.
    """
    settings = get_settings()
    reset = (reset_database or "").strip().lower() == "true"

    if file is None or not file.filename:
        logger.warning("import_no_file")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    log = logger.bind(filename=file.filename, reset_database=reset)

    if not file.filename.lower().endswith(ALLOWED_EXTENSIONS):
        log.warning("import_invalid_file_type")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Please upload an Excel file (.xlsx)",
        )

    content = await file.read(settings.IMPORT_MAX_FILE_BYTES + 1)
    if len(content) > settings.IMPORT_MAX_FILE_BYTES:
        log.warning("import_file_too_large", max_bytes=settings.IMPORT_MAX_FILE_BYTES)
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {settings.IMPORT_MAX_FILE_BYTES} byte limit",
        )

    try:
        rows = parse_excel_file(content)
    except ExcelParseError as exc:
        log.warning("import_unreadable_file", error=str(exc))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not read the Excel file",
        )

    if not rows:
        log.warning("import_empty_file")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Excel file is empty or has no valid data",
        )

    log.info("import_file_parsed", rows=len(rows), size=len(content))

    if settings.GCS_BUCKET_NAME:
        await asyncio.to_thread(archive_import_file, file.filename, content)

    result = await ImportService().import_rows(db, rows, reset_database=reset)
    await db.flush()
    await cache.invalidate_profiles()

    message = (
        f"Successfully imported {result.success_count} users"
        if result.success
        else f"Import completed with {result.error_count} errors"
    )
    return ImportResponse(
        success=result.success,
        message=message,
        success_count=result.success_count,
        error_count=result.error_count,
        deleted_count=result.deleted_count,
        total_rows=len(rows),
        details=result.details,
        errors=result.errors,
    )


# ──────────────────────────────────────────────────────────────────────────────
# GET /template — Import template download
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/template",
    summary="Download the bulk import template",
    response_class=Response,
)
async def download_template() -> Response:
    content = build_template_workbook()
    return Response(
        content=content,
        media_type=XLSX_CONTENT_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"',
            "X-Template-Version": TEMPLATE_VERSION,
            "X-Template-Updated": TEMPLATE_UPDATED_DATE,
            "Cache-Control": "no-cache, no-store, must-revalidate",
        },
    )
