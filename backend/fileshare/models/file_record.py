"""FileRecord model - one row per shared upload (bytes live in the uploads dir)."""
import uuid
from sqlalchemy import String, Integer, BigInteger, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from fileshare.models.base import Base, TimestampMixin


class FileRecord(Base, TimestampMixin):
    __tablename__ = "files"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    path: Mapped[str] = mapped_column(String(1000), nullable=False)
    original_name: Mapped[str] = mapped_column(String(500), nullable=False)
    # bcrypt hash; NULL means the file is not protected
    password: Mapped[str | None] = mapped_column(String(100), nullable=True)
    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    mime_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    size_bytes: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    @property
    def is_protected(self) -> bool:
        return self.password is not None
