"""File upload schemas."""
from pydantic import BaseModel
from typing import Optional


class StoredUpload(BaseModel):
    """What the blob store hands back once an uploaded part is on disk."""
    path: str
    original_name: str
    mime_type: Optional[str] = None
    size_bytes: int = 0
