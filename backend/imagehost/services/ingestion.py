"""File ingestion: sanitize the name, reject duplicates, then persist.

Metadata goes to the image_file table, bytes go to the static directory.
The row is flushed before the file is written and committed after, so a
failed write rolls the row back. A failed commit after a successful write
leaves the file on disk without a record; that case is logged and raised,
not repaired.
"""
import logging
import posixpath

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from imagehost.errors import (
    ConnectivityError,
    DuplicateFileError,
    ImageHostError,
    MalformedRequestError,
    PayloadTooLargeError,
    PersistenceError,
)
from imagehost.models.file_record import FileRecord
from imagehost.services.file_storage import FileStorageService

logger = logging.getLogger(__name__)


def sanitize_filename(filename: str) -> str:
    """Reduce a client-supplied filename to its base name.

    Both ``/`` and ``\\`` count as separators, so ``../../etc/passwd`` and
    ``..\\..\\boot.ini`` become ``passwd`` and ``boot.ini``.
    """
    name = posixpath.basename((filename or "").replace("\\", "/")).strip()
    if name in ("", ".", ".."):
        raise MalformedRequestError(f"Unusable filename {filename!r}")
    return name


def store_error(e: SQLAlchemyError, action: str) -> ImageHostError:
    """Map a SQLAlchemy failure onto the domain error taxonomy."""
    if isinstance(e, OperationalError) or (
        isinstance(e, DBAPIError) and e.connection_invalidated
    ):
        return ConnectivityError(f"Metadata store unreachable while {action}: {e}")
    return PersistenceError(f"Metadata store failure while {action}: {e}")


async def file_exists(db: AsyncSession, name: str) -> bool:
    try:
        result = await db.execute(
            select(func.count()).select_from(FileRecord).where(FileRecord.name == name)
        )
    except SQLAlchemyError as e:
        raise store_error(e, f"checking for {name}") from e
    return result.scalar_one() > 0


async def ingest_file(
    db: AsyncSession,
    storage: FileStorageService,
    filename: str,
    content: bytes,
    content_type: str | None = None,
    max_bytes: int | None = None,
) -> FileRecord:
    """Store one uploaded file and its record. Raises an ImageHostError on failure."""
    name = sanitize_filename(filename)

    if max_bytes is not None and len(content) > max_bytes:
        raise PayloadTooLargeError(
            f"File {name} is {len(content)} bytes, limit is {max_bytes}"
        )

    if await file_exists(db, name):
        raise DuplicateFileError(name)

    record = FileRecord(
        name=name,
        is_favorite=False,
        mime_type=content_type,
        size_bytes=len(content),
    )
    db.add(record)
    try:
        await db.flush()
    except IntegrityError as e:
        # Lost the race against a concurrent upload of the same name
        await db.rollback()
        raise DuplicateFileError(name) from e
    except SQLAlchemyError as e:
        await db.rollback()
        raise store_error(e, f"inserting {name}") from e

    try:
        storage_path = await storage.save(content, name)
    except FileExistsError as e:
        await db.rollback()
        raise DuplicateFileError(name) from e
    except ImageHostError:
        await db.rollback()
        raise
    except OSError as e:
        await db.rollback()
        raise PersistenceError(f"Could not write {name} to storage: {e}") from e

    try:
        await db.commit()
    except SQLAlchemyError as e:
        logger.error(
            "File %s was written to %s but its record was not committed; "
            "storage and metadata store are now inconsistent",
            name, storage_path,
        )
        await db.rollback()
        raise store_error(e, f"committing {name}") from e

    logger.info("Saved file with name = %s to %s.", name, storage_path)
    return record
