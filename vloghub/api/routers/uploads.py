from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from vloghub.api.deps import get_current_user_id, get_storage_service
from vloghub.schemas.vlog import UploadedFile
from vloghub.services.storage import StorageService

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("", response_model=UploadedFile, status_code=status.HTTP_201_CREATED)
async def upload_media(
    file: UploadFile = File(...),
    kind: str = Form("video"),
    user_id: int = Depends(get_current_user_id),
    storage_service: StorageService = Depends(get_storage_service),
):
    """
    Upload a video or thumbnail for a vlog.

    The returned url goes into video_url or thumbnail_url when the vlog is
    created or updated.
    """
    return await storage_service.save_upload(user_id, kind, file)
