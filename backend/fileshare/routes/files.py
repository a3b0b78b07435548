"""Upload and download routes."""
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, UploadFile, File as FastAPIFile
from fastapi.responses import FileResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from fileshare.database import get_db
from fileshare.models.file_record import FileRecord
from fileshare.services.file_access import AccessDecision, resolve_access
from fileshare.services.file_storage import FileStorageService, get_file_storage
from fileshare.services.passwords import hash_password, normalize_password
from fileshare.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])

UPLOAD_ERROR = "An error occurred while uploading the file."
DOWNLOAD_ERROR = "An error occurred while downloading the file."
NOT_FOUND = "File not found."


def _request_origin(request: Request) -> str:
    """Origin header if the browser sent one, else scheme+host of the request."""
    origin = request.headers.get("origin")
    if origin and origin != "null":
        return origin.rstrip("/")
    return str(request.base_url).rstrip("/")


@router.post("/upload")
async def upload_file(
    request: Request,
    file: Optional[UploadFile] = FastAPIFile(None),
    password: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
    storage: FileStorageService = Depends(get_file_storage),
):
    """Store the upload, create its record and render the share link."""
    try:
        stored = await storage.save(file)

        record = FileRecord(
            path=stored.path,
            original_name=stored.original_name,
            mime_type=stored.mime_type,
            size_bytes=stored.size_bytes,
        )
        plain = normalize_password(password)
        if plain is not None:
            record.password = await hash_password(plain)

        db.add(record)
        await db.commit()
        await db.refresh(record)
    except Exception:
        # a blob already written by storage.save() stays on disk
        logger.exception("File upload error")
        return PlainTextResponse(UPLOAD_ERROR, status_code=500)

    file_link = f"{_request_origin(request)}/file/{record.id}"
    logger.debug(f"Created file {record.id} (protected={record.is_protected})")
    return templates.TemplateResponse(request, "index.html", {"file_link": file_link})


@router.get("/file/{file_id}")
async def download_file(
    request: Request,
    file_id: str,
    db: AsyncSession = Depends(get_db),
    storage: FileStorageService = Depends(get_file_storage),
):
    """First visit to a share link."""
    return await _handle_download(request, file_id, None, db, storage)


@router.post("/file/{file_id}")
async def download_file_with_password(
    request: Request,
    file_id: str,
    password: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
    storage: FileStorageService = Depends(get_file_storage),
):
    """Password resubmission from the prompt page."""
    return await _handle_download(request, file_id, password, db, storage)


async def _handle_download(
    request: Request,
    file_id: str,
    password: Optional[str],
    db: AsyncSession,
    storage: FileStorageService,
):
    try:
        try:
            record_id = uuid.UUID(file_id)
        except ValueError:
            return PlainTextResponse(NOT_FOUND, status_code=404)

        record = await db.get(FileRecord, record_id)
        if not record:
            return PlainTextResponse(NOT_FOUND, status_code=404)

        decision = await resolve_access(record, password)
        if decision is not AccessDecision.AUTHORIZED:
            return templates.TemplateResponse(
                request,
                "password.html",
                {"error": decision is AccessDecision.PROMPT_ERROR},
            )

        # Read-increment-write with no row lock: concurrent downloads of the
        # same file can lose increments.
        record.download_count += 1
        await db.commit()
        logger.info(f"File {record.id} downloaded {record.download_count} times")

        if not storage.exists(record.path):
            raise FileNotFoundError(record.path)

        return FileResponse(
            path=record.path,
            filename=record.original_name,
            media_type=record.mime_type or "application/octet-stream",
        )
    except Exception:
        logger.exception(f"File download error for {file_id}")
        return PlainTextResponse(DOWNLOAD_ERROR, status_code=500)
