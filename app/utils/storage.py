"""
People Profile — Google Cloud Storage helpers

Uploaded import workbooks are archived to ``GCS_BUCKET_NAME`` under
``GCS_IMPORT_ARCHIVE_PREFIX`` when a bucket is configured.
"""

import hashlib
import re
from datetime import datetime, timezone
from typing import Optional

import structlog
from google.cloud import storage as gcs_storage

from app.config import get_settings

logger = structlog.get_logger("people_profile.storage")

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def get_storage_client():
    return gcs_storage.Client(project=get_settings().GCP_PROJECT_ID or None)


def get_bucket():
    client = get_storage_client()
    return client.bucket(get_settings().GCS_BUCKET_NAME)


def upload_file(path: str, file_bytes: bytes, content_type: str = "application/octet-stream") -> str:
    """Upload file to GCS bucket. Returns the GCS URI."""
    bucket = get_bucket()
    blob = bucket.blob(path)
    blob.metadata = {"sha256": hashlib.sha256(file_bytes).hexdigest()}
    blob.upload_from_string(file_bytes, content_type=content_type)
    return f"gs://{bucket.name}/{path}"


def archive_path(filename: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    safe_name = _UNSAFE_CHARS.sub("_", filename).strip("_") or "import.xlsx"
    return f"{get_settings().GCS_IMPORT_ARCHIVE_PREFIX}{now:%Y%m%dT%H%M%SZ}-{safe_name}"


def archive_import_file(filename: str, file_bytes: bytes) -> Optional[str]:
    """Archive an uploaded workbook; returns the GCS URI or ``None``.

    Blocking (the GCS SDK is synchronous); call through ``asyncio.to_thread``.
    Failures are logged and swallowed so an import never fails on archival.
    """
    if not get_settings().GCS_BUCKET_NAME:
        return None

    path = archive_path(filename)
    try:
        uri = upload_file(path, file_bytes, content_type=XLSX_CONTENT_TYPE)
    except Exception:
        logger.exception("import_archive_failed", path=path)
        return None

    logger.info("import_archived", uri=uri)
    return uri
