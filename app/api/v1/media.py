from fastapi import APIRouter, File, Form, UploadFile, status

from app.core.deps import AuthenticatedUser, Database
from app.core.media import (
    build_file_path,
    create_upload_url,
    public_url,
    upload_file,
    validate_upload,
)
from app.schemas.media import (
    FileType,
    UploadResponse,
    UploadUrlRequest,
    UploadUrlResponse,
)

router = APIRouter(prefix="/media", tags=["media"])


@router.post("/upload-url", response_model=UploadUrlResponse)
async def get_upload_url(
    request: UploadUrlRequest, db: Database, user: AuthenticatedUser
):
    """Signed URL the browser uploads to directly.

    The returned file_path is what goes into video_url when the video is
    published.
    """
    validate_upload(request.file_type, request.content_type, request.size)

    file_path = build_file_path(request.file_type, request.file_name)
    signed = create_upload_url(db, file_path)

    return UploadUrlResponse(
        upload_url=signed["signed_url"],
        token=signed["token"],
        file_path=file_path,
        public_url=public_url(db, file_path),
    )


@router.post(
    "/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED
)
async def upload(
    db: Database,
    user: AuthenticatedUser,
    file: UploadFile = File(...),
    file_type: FileType = Form(FileType.VIDEO),
):
    """Upload through the API instead of directly to storage."""
    # Reject by declared size before the body is pulled into memory
    if file.size is not None:
        validate_upload(file_type, file.content_type, file.size)

    content = await file.read()
    validate_upload(file_type, file.content_type, len(content))

    file_path = build_file_path(file_type, file.filename)
    upload_file(db, file_path, content, file.content_type)

    url = public_url(db, file_path)
    return UploadResponse(
        file_path=file_path,
        url=url,
        thumbnail_url=url if file_type == FileType.IMAGE else None,
    )
