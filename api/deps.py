from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from core.config import settings
from core.database import get_menu_document, get_categories_document
from schemas.auth import AdminUser
from services.category_service import CategoryService
from services.image_storage import ImageStorage
from services.menu_query_service import MenuQueryService
from services.menu_service import MenuService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


async def get_current_admin_user(token: str = Depends(oauth2_scheme)) -> AdminUser:
    """
    Validate token and return the admin user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        username: str = payload.get("sub")
    except JWTError:
        raise credentials_exception

    if username is None or username != settings.ADMIN_USERNAME:
        raise credentials_exception

    return AdminUser(username=username)


def get_menu_query_service(menu_document=Depends(get_menu_document)) -> MenuQueryService:
    return MenuQueryService(menu_document)


def get_menu_service(
        menu_document=Depends(get_menu_document),
        categories_document=Depends(get_categories_document),
) -> MenuService:
    return MenuService(menu_document, categories_document)


def get_category_service(
        categories_document=Depends(get_categories_document),
        menu_document=Depends(get_menu_document),
) -> CategoryService:
    return CategoryService(categories_document, menu_document)


def get_image_storage() -> ImageStorage:
    return ImageStorage()
