"""Listing of stored file metadata with derived static URLs."""
from urllib.parse import quote

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from imagehost.models.file_record import FileRecord
from imagehost.services.ingestion import store_error


def static_url(static_base_url: str, name: str) -> str:
    return f"{static_base_url.rstrip('/')}/{quote(name)}"


async def list_file_info(db: AsyncSession, static_base_url: str) -> list[dict]:
    """Return name, favorite flag and static URL for every stored file, in store order."""
    try:
        result = await db.execute(select(FileRecord.name, FileRecord.is_favorite))
        rows = result.all()
    except SQLAlchemyError as e:
        err = store_error(e, "listing files")
        err.public_message = "Error retrieving file info."
        raise err from e

    return [
        {
            "name": name,
            "is_favorite": bool(is_favorite),
            "file_path": static_url(static_base_url, name),
        }
        for name, is_favorite in rows
    ]
