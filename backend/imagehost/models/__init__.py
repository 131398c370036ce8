"""Import all models so SQLAlchemy metadata knows about them."""
from imagehost.models.base import Base
from imagehost.models.file_record import FileRecord

__all__ = ["Base", "FileRecord"]
