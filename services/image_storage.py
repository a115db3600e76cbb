import logging
import os
import random
import re
import time

from core.config import settings
from services.cloudinary_service import cloudinary_service

logger = logging.getLogger(__name__)


def safe_filename(filename: str, now: float = None) -> str:
    """Unique, filesystem safe name: '<epoch millis>-<random>-<name>'"""
    millis = int((now if now is not None else time.time()) * 1000)
    cleaned = re.sub(r"[^a-zA-Z0-9.-]", "", os.path.basename(filename or "")) or "image"
    return f"{millis}-{random.randint(0, 10 ** 9)}-{cleaned}"


class ImageStorage:
    """
    Stores uploaded menu images and returns the string kept in MenuItem.image.

    "local" writes under UPLOAD_DIR and returns a path in the uploads
    namespace; "cloudinary" returns the hosted URL.
    """

    def __init__(self, backend: str = None, upload_dir: str = None, url_prefix: str = None):
        self.backend = backend or settings.IMAGE_STORAGE
        self.upload_dir = upload_dir or settings.UPLOAD_DIR
        self.url_prefix = (url_prefix or settings.UPLOAD_URL_PREFIX).rstrip("/")

    async def save(self, file_data: bytes, filename: str, content_type: str) -> str:
        if self.backend == "cloudinary":
            result = await cloudinary_service.upload_image(
                file_data=file_data,
                folder=settings.CLOUDINARY_FOLDER,
                content_type=content_type,
            )
            logger.info(f"Uploaded image {result['public_id']} to Cloudinary")
            return result["url"]

        name = safe_filename(filename)
        os.makedirs(self.upload_dir, exist_ok=True)
        path = os.path.join(self.upload_dir, name)
        with open(path, "wb") as f:
            f.write(file_data)
        logger.info(f"Saved image {path}")
        return f"{self.url_prefix}/{name}"
