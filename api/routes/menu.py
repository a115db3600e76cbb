from fastapi import APIRouter, Depends, status
from typing import Any, Optional, List
from core.exceptions import MenuError, PersistenceError, InvalidLanguageError
from models.menu import MenuItemModel
from schemas.menu import MenuItem, MenuItemCreate, MenuSection, UpsertResult, DeleteItemResult
from schemas.auth import AdminUser
from api.deps import get_current_admin_user, get_menu_query_service, get_menu_service
from api.errors import to_http_exception
from services.menu_query_service import MenuQueryService
from services.menu_service import MenuService
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/sections", response_model=List[MenuSection], response_model_exclude_none=True)
async def get_visible_sections(
        lang: Optional[str] = None,
        query_service: MenuQueryService = Depends(get_menu_query_service),
) -> Any:
    """
    Get the public menu for one language
    """
    try:
        language = MenuQueryService.resolve_language(lang)
    except InvalidLanguageError as e:
        raise to_http_exception(e)

    try:
        return query_service.list_visible_sections(language)
    except PersistenceError as e:
        # The public menu shows "no items" instead of failing
        logger.error(f"Serving empty menu, store unreadable: {e.message}")
        return []


@router.get("", response_model=List[MenuSection], response_model_exclude_none=True)
async def get_all_sections(
        query_service: MenuQueryService = Depends(get_menu_query_service),
        current_user: AdminUser = Depends(get_current_admin_user),
) -> Any:
    """
    Get every section without language filtering (admin only)
    """
    try:
        return query_service.list_sections()
    except MenuError as e:
        raise to_http_exception(e)


@router.get("/items/{item_id}", response_model=MenuItem, response_model_exclude_none=True)
async def get_menu_item(
        item_id: str,
        query_service: MenuQueryService = Depends(get_menu_query_service),
        current_user: AdminUser = Depends(get_current_admin_user),
) -> Any:
    """
    Get a specific menu item (admin only)
    """
    try:
        return query_service.get_item(item_id)
    except MenuError as e:
        raise to_http_exception(e)


@router.post("/items", response_model=UpsertResult, status_code=status.HTTP_200_OK)
async def save_menu_item(
        item_in: MenuItemCreate,
        menu_service: MenuService = Depends(get_menu_service),
        current_user: AdminUser = Depends(get_current_admin_user),
) -> Any:
    """
    Create or update a menu item (admin only)
    """
    item_data = item_in.dict(by_alias=True, exclude_none=True)
    if not item_data.get("id"):
        item_data["id"] = MenuItemModel.generate_id(item_in.category)

    try:
        return menu_service.upsert_item(item_data)
    except MenuError as e:
        raise to_http_exception(e)


@router.delete("/items/{item_id}", response_model=DeleteItemResult, status_code=status.HTTP_200_OK)
async def delete_menu_item(
        item_id: str,
        menu_service: MenuService = Depends(get_menu_service),
        current_user: AdminUser = Depends(get_current_admin_user),
) -> Any:
    """
    Delete a menu item (admin only)

    An unknown id is reported with found=false rather than an error.
    """
    try:
        return menu_service.delete_item(item_id)
    except MenuError as e:
        raise to_http_exception(e)
