from enum import Enum

from pydantic import BaseModel, Field


class FileType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class UploadUrlRequest(BaseModel):
    file_type: FileType
    file_name: str = Field(..., min_length=1, max_length=255)
    content_type: str = Field(..., min_length=1)
    size: int


class UploadUrlResponse(BaseModel):
    upload_url: str
    token: str
    file_path: str
    public_url: str


class UploadResponse(BaseModel):
    file_path: str
    url: str
    thumbnail_url: str | None = None
