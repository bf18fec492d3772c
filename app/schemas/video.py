from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Transformation(BaseModel):
    """Playback rendering hints forwarded to the media service."""

    height: int = Field(1920, gt=0)
    width: int = Field(1080, gt=0)
    quality: int | None = Field(None, ge=1, le=100)


class VideoCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    description: str = Field(..., min_length=1, max_length=5000)
    video_url: str = Field(..., min_length=1)

    thumbnail_url: str | None = None
    controls: bool = True
    transformation: Transformation = Field(default_factory=Transformation)

    model_config = ConfigDict(str_strip_whitespace=True)


class VideoUpdate(BaseModel):
    # video_url, thumbnail_url and user_id are fixed at creation
    title: str | None = Field(None, min_length=1, max_length=300)
    description: str | None = Field(None, min_length=1, max_length=5000)

    controls: bool | None = None
    transformation: Transformation | None = None

    model_config = ConfigDict(str_strip_whitespace=True)


class VideoResponse(BaseModel):
    id: UUID
    title: str
    description: str
    video_url: str
    thumbnail_url: str | None = None
    controls: bool = True
    transformation: Transformation = Field(default_factory=Transformation)
    user_id: UUID
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class VideoListResponse(BaseModel):
    videos: list[VideoResponse]
    total: int


class VideoDeleteResponse(BaseModel):
    message: str
