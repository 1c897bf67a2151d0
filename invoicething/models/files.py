# invoicething/models/files.py

from typing import Optional

from pydantic import BaseModel


class UploadUrlOut(BaseModel):
    storage_id: str
    upload_url: str


class FileUrlOut(BaseModel):
    storage_id: str
    url: Optional[str] = None
