from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File
from typing import Any
from core.config import settings
from schemas.auth import AdminUser
from api.deps import get_current_admin_user, get_image_storage
from services.image_storage import ImageStorage
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def upload_image(
        file: UploadFile = File(...),
        image_storage: ImageStorage = Depends(get_image_storage),
        current_user: AdminUser = Depends(get_current_admin_user),
) -> Any:
    """
    Store a menu item image and return the path to put in the item (admin only)
    """
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image uploads are allowed")

    file_content = await file.read()
    if len(file_content) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Image is too large")

    try:
        url = await image_storage.save(file_content, file.filename, file.content_type)
    except Exception as e:
        logger.error(f"Error saving upload {file.filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error saving file"
        )

    return {"success": True, "url": url}
