import logging
import re

from fastapi import APIRouter, Query, status
from postgrest import CountMethod
from supabase import Client

from app.core.deps import AuthenticatedUser, CurrentUser, Database, OptionalUser
from app.core.errors import (
    Forbidden,
    InvalidArgument,
    NotFound,
    Unauthenticated,
    UpstreamFailure,
)
from app.schemas.video import (
    VideoCreate,
    VideoDeleteResponse,
    VideoListResponse,
    VideoResponse,
    VideoUpdate,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/videos", tags=["videos"])

_ID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def _parse_video_id(video_id: str) -> str:
    """Reject ids that cannot be a database id before any lookup is made."""
    if not _ID_PATTERN.fullmatch(video_id):
        raise InvalidArgument("Invalid video ID format")
    return video_id.lower()


def _fetch_video_row(db: Client, video_id: str) -> dict | None:
    result = db.table("videos").select("*").eq("id", video_id).limit(1).execute()
    return result.data[0] if result.data else None


def _require_owner(
    db: Client, video_id: str, session: CurrentUser | None, operation: str
) -> dict:
    """Existence, then session, then ownership. The order is part of the API."""
    try:
        row = _fetch_video_row(db, video_id)
    except Exception:
        log.exception("%s lookup failed id=%s", operation, video_id)
        raise UpstreamFailure(f"Failed to {operation} video")

    if row is None:
        raise NotFound("Video not found")

    if session is None:
        raise Unauthenticated()

    if str(row["user_id"]) != str(session.id):
        raise Forbidden("You can only modify your own videos")

    return row


def _list_videos(
    db: Client, limit: int, offset: int, user_id: str | None = None
) -> VideoListResponse:
    query = db.table("videos").select("*", count=CountMethod.exact)
    if user_id is not None:
        query = query.eq("user_id", user_id)

    result = (
        query.order("created_at", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )

    videos = [VideoResponse(**row) for row in result.data or []]
    total = result.count if result.count is not None else len(videos)
    return VideoListResponse(videos=videos, total=total)


@router.get("", response_model=VideoListResponse)
async def get_videos(
    db: Database,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    """Get all videos, newest first."""
    try:
        return _list_videos(db, limit, offset)
    except Exception:
        log.exception("list videos failed offset=%s", offset)
        raise UpstreamFailure("Failed to fetch videos")


@router.get("/mine", response_model=VideoListResponse)
async def get_my_videos(
    db: Database,
    user: AuthenticatedUser,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    """Get the current user's videos, newest first."""
    try:
        return _list_videos(db, limit, offset, user_id=str(user.id))
    except Exception:
        log.exception("list my videos failed user=%s", user.id)
        raise UpstreamFailure("Failed to fetch videos")


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(video_id: str, db: Database):
    video_id = _parse_video_id(video_id)

    try:
        row = _fetch_video_row(db, video_id)
    except Exception:
        log.exception("get video failed id=%s", video_id)
        raise UpstreamFailure("Failed to fetch video")

    if row is None:
        raise NotFound("Video not found")

    return VideoResponse(**row)


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def create_video(video: VideoCreate, db: Database, user: AuthenticatedUser):
    data = video.model_dump(mode="json")
    data["user_id"] = str(user.id)

    try:
        result = db.table("videos").insert(data).execute()
    except Exception:
        log.exception("create video failed user=%s", user.id)
        raise UpstreamFailure("Failed to create video")

    if not result.data:
        log.error("create video returned no row user=%s", user.id)
        raise UpstreamFailure("Failed to create video")

    created = VideoResponse(**result.data[0])
    log.info("Video %s created by %s", created.id, user.id)
    return created


@router.put("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: str, updates: VideoUpdate, db: Database, session: OptionalUser
):
    video_id = _parse_video_id(video_id)
    row = _require_owner(db, video_id, session, "update")

    update_data = updates.model_dump(
        mode="json", exclude_unset=True, exclude_none=True
    )
    if updates.transformation is not None:
        # stored as a whole so unset keys get their defaults, not dropped
        update_data["transformation"] = updates.transformation.model_dump(mode="json")
    if not update_data:
        raise InvalidArgument("No fields to update")

    try:
        result = db.table("videos").update(update_data).eq("id", video_id).execute()
    except Exception:
        log.exception("update video failed id=%s", video_id)
        raise UpstreamFailure("Failed to update video")

    if not result.data:
        # Deleted between the ownership check and the write
        raise NotFound("Video not found")

    log.info(
        "Video %s updated by %s (%s)", video_id, row["user_id"], ", ".join(update_data)
    )
    return VideoResponse(**result.data[0])


@router.delete("/{video_id}", response_model=VideoDeleteResponse)
async def delete_video(video_id: str, db: Database, session: OptionalUser):
    video_id = _parse_video_id(video_id)
    _require_owner(db, video_id, session, "delete")

    try:
        result = db.table("videos").delete().eq("id", video_id).execute()
    except Exception:
        log.exception("delete video failed id=%s", video_id)
        raise UpstreamFailure("Failed to delete video")

    if not result.data:
        raise NotFound("Video not found")

    log.info("Video %s deleted by %s", video_id, session.id)
    return VideoDeleteResponse(message="Video deleted successfully")
