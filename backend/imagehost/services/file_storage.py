"""File storage on local disk. Uploaded files are written under their own name
into the static directory so they can be served as plain static assets."""
from pathlib import Path

import aiofiles

from imagehost.errors import MalformedRequestError


class FileStorageService:
    """Handles file writes into the static directory."""

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path).resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        """Resolve ``name`` inside the storage root. Anything escaping the root is rejected."""
        path = (self.base_path / name).resolve()
        if path.parent != self.base_path:
            raise MalformedRequestError(f"Refusing to store {name!r} outside {self.base_path}")
        return path

    async def save(self, file_bytes: bytes, name: str) -> str:
        """Save file bytes under ``name``. Returns the written path.

        Raises FileExistsError if a file with that name is already on disk.
        """
        file_path = self.path_for(name)
        async with aiofiles.open(file_path, "xb") as f:
            await f.write(file_bytes)
        return str(file_path)
