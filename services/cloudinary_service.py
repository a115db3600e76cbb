import cloudinary
import cloudinary.uploader
from core.config import settings
import logging
from typing import Optional, Dict, Any
import base64

logger = logging.getLogger(__name__)

# Configure Cloudinary
cloudinary.config(
    cloud_name=settings.CLOUDINARY_CLOUD_NAME,
    api_key=settings.CLOUDINARY_API_KEY,
    api_secret=settings.CLOUDINARY_API_SECRET,
    secure=True
)


class CloudinaryService:
    @staticmethod
    async def upload_image(file_data: bytes, folder: str, content_type: str = "image/png",
                           public_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Upload a menu item image to Cloudinary

        Args:
            file_data: The image file data
            folder: The folder to upload to
            content_type: MIME type of the upload, used for the data URI
            public_id: Optional public ID for the image

        Returns:
            Dict with the public id and secure URL of the stored image
        """
        try:
            base64_data = base64.b64encode(file_data).decode("utf-8")

            upload_result = cloudinary.uploader.upload(
                f"data:{content_type};base64,{base64_data}",
                folder=folder,
                public_id=public_id,
                overwrite=True,
                resource_type="image"
            )

            return {
                "public_id": upload_result["public_id"],
                "url": upload_result["secure_url"],
            }
        except Exception as e:
            logger.error(f"Error uploading image to Cloudinary: {e}")
            raise e


cloudinary_service = CloudinaryService()
