from typing import List, Union, Optional
from pydantic import AnyHttpUrl, validator
from pydantic_settings import BaseSettings
import os
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Dimaa Digital Menu API"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # JSON documents
    DATA_DIR: str = os.getenv("DATA_DIR", "data")
    MENU_FILE: str = "menu.json"
    CATEGORIES_FILE: str = "categories.json"

    # Locales
    DEFAULT_LANGUAGE: str = os.getenv("DEFAULT_LANGUAGE", "fa")

    @validator("DEFAULT_LANGUAGE")
    def default_language_supported(cls, v: str) -> str:
        if v not in ("en", "fa"):
            raise ValueError(f"Unsupported default language: {v}")
        return v

    # JWT
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your-secret-key")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 1 day

    # Static admin credential
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "dimaa2024")

    # Image storage: "local" or "cloudinary"
    IMAGE_STORAGE: str = os.getenv("IMAGE_STORAGE", "local")
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", os.path.join("public", "uploads"))
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # Cloudinary
    CLOUDINARY_CLOUD_NAME: Optional[str] = os.getenv("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY: Optional[str] = os.getenv("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET: Optional[str] = os.getenv("CLOUDINARY_API_SECRET")
    CLOUDINARY_FOLDER: str = "menu_items"

    @property
    def menu_path(self) -> str:
        return os.path.join(self.DATA_DIR, self.MENU_FILE)

    @property
    def categories_path(self) -> str:
        return os.path.join(self.DATA_DIR, self.CATEGORIES_FILE)

    class Config:
        case_sensitive = True


settings = Settings()
