"""Files API routes."""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from imagehost.config import Settings
from imagehost.database import get_db
from imagehost.dependencies import get_file_storage, get_settings
from imagehost.errors import MalformedRequestError, PayloadTooLargeError
from imagehost.schemas.file import FileInfoResponse
from imagehost.services.file_storage import FileStorageService
from imagehost.services.ingestion import ingest_file
from imagehost.services.listing import list_file_info

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/file", tags=["files"])
legacy_router = APIRouter(tags=["files"])


async def _upload_files(
    request: Request,
    db: AsyncSession,
    storage: FileStorageService,
    settings: Settings,
) -> PlainTextResponse:
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise MalformedRequestError(f"Expected multipart/form-data, got {content_type!r}")

    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > settings.MAX_UPLOAD_BYTES:
        raise PayloadTooLargeError(
            f"Request body is {content_length} bytes, limit is {settings.MAX_UPLOAD_BYTES}"
        )

    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        raise MalformedRequestError(f"Could not parse multipart body: {e}") from e

    try:
        files = form.getlist("files")
        if not files:
            raise MalformedRequestError("No 'files' entries in the form")
        if not all(isinstance(f, UploadFile) for f in files):
            raise MalformedRequestError("A 'files' entry is not a file")

        logger.info("Consuming %d uploaded file(s).", len(files))
        for index, upload in enumerate(files, start=1):
            logger.info(
                "Consuming file %d of %d with name = %s to be saved.",
                index, len(files), upload.filename,
            )
            if upload.size is not None and upload.size > settings.MAX_UPLOAD_BYTES:
                raise PayloadTooLargeError(
                    f"File {upload.filename} is {upload.size} bytes, limit is {settings.MAX_UPLOAD_BYTES}"
                )
            content = await upload.read()
            await ingest_file(
                db,
                storage,
                upload.filename,
                content,
                content_type=upload.content_type,
                max_bytes=settings.MAX_UPLOAD_BYTES,
            )
    finally:
        await form.close()

    return PlainTextResponse("Successfully uploaded file(s).")


@router.post("/upload", response_class=PlainTextResponse)
async def upload_files(
    request: Request,
    db: AsyncSession = Depends(get_db),
    storage: FileStorageService = Depends(get_file_storage),
    settings: Settings = Depends(get_settings),
):
    """Upload one or more files sent under the multipart field 'files'."""
    return await _upload_files(request, db, storage, settings)


@legacy_router.post("/upload", response_class=PlainTextResponse)
async def upload_files_legacy(
    request: Request,
    db: AsyncSession = Depends(get_db),
    storage: FileStorageService = Depends(get_file_storage),
    settings: Settings = Depends(get_settings),
):
    """Same as /api/v1/file/upload, kept at its original path."""
    return await _upload_files(request, db, storage, settings)


@router.get("/getAllFileInfo", response_model=list[FileInfoResponse])
async def get_all_file_info(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """List every stored file with its static URL. Order is whatever the store returns."""
    return await list_file_info(db, settings.STATIC_BASE_URL)
