"""FileRecord model - uploaded file metadata (bytes live in the static directory)."""
from sqlalchemy import BigInteger, Boolean, String, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column
from imagehost.models.base import Base, TimestampMixin


class FileRecord(Base, TimestampMixin):
    __tablename__ = "image_file"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    mime_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    size_bytes: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    __table_args__ = (
        UniqueConstraint("name", name="uq_image_file_name"),
    )
