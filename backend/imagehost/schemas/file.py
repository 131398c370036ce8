"""File response schemas."""
from imagehost.schemas.base import CamelORMModel


class FileInfoResponse(CamelORMModel):
    name: str
    is_favorite: bool = False
    file_path: str
