"""File storage on the local filesystem.

Uploaded parts are streamed to ``FILE_STORAGE_PATH`` under a random hex name
with no extension. The original filename only lives on the FileRecord.
"""
import os
import secrets
import aiofiles
from pathlib import Path
from fastapi import UploadFile
from fileshare.config import settings
from fileshare.schemas.file import StoredUpload

CHUNK_SIZE = 1024 * 1024


class FileStorageService:
    """Writes blobs into the uploads directory."""

    def __init__(self, base_path: str | None = None):
        self.base_path = Path(base_path or settings.FILE_STORAGE_PATH)
        self.base_path.mkdir(parents=True, exist_ok=True)

    async def save(self, upload: UploadFile) -> StoredUpload:
        """Stream an uploaded part to disk. Returns where it landed."""
        if upload is None or not upload.filename:
            raise ValueError("No file was uploaded")

        file_path = self.base_path / secrets.token_hex(16)
        size = 0
        try:
            async with aiofiles.open(file_path, "wb") as f:
                while chunk := await upload.read(CHUNK_SIZE):
                    await f.write(chunk)
                    size += len(chunk)
        finally:
            await upload.close()

        return StoredUpload(
            path=str(file_path),
            original_name=upload.filename,
            mime_type=upload.content_type,
            size_bytes=size,
        )

    def exists(self, storage_path: str) -> bool:
        return os.path.isfile(storage_path)


_file_storage: FileStorageService | None = None


def get_file_storage() -> FileStorageService:
    """FastAPI dependency returning the process-wide storage service."""
    global _file_storage
    if _file_storage is None:
        _file_storage = FileStorageService()
    return _file_storage
