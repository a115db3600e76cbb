from fastapi import APIRouter, Depends, status
from typing import Any
from core.exceptions import MenuError
from schemas.category import Category, CategoryCreate, CategoryReorder, CategoriesDocument, DeleteCategoryResult
from schemas.auth import AdminUser
from api.deps import get_current_admin_user, get_category_service
from api.errors import to_http_exception
from services.category_service import CategoryService

router = APIRouter()


@router.get("", response_model=CategoriesDocument)
async def get_categories(
        category_service: CategoryService = Depends(get_category_service),
) -> Any:
    """
    Get the ordered categories and the ids that cannot be deleted
    """
    try:
        return category_service.list_categories()
    except MenuError as e:
        raise to_http_exception(e)


@router.post("", response_model=CategoriesDocument)
async def reorder_categories(
        reorder_in: CategoryReorder,
        category_service: CategoryService = Depends(get_category_service),
        current_user: AdminUser = Depends(get_current_admin_user),
) -> Any:
    """
    Replace the category list and reorder menu sections to match (admin only)
    """
    try:
        return category_service.reorder_categories(reorder_in.categories)
    except MenuError as e:
        raise to_http_exception(e)


@router.post("/new", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(
        category_in: CategoryCreate,
        category_service: CategoryService = Depends(get_category_service),
        current_user: AdminUser = Depends(get_current_admin_user),
) -> Any:
    """
    Add a category with an empty menu section (admin only)
    """
    try:
        return category_service.add_category(category_in.name, category_id=category_in.id)
    except MenuError as e:
        raise to_http_exception(e)


@router.delete("/{category_id}", response_model=DeleteCategoryResult)
async def delete_category(
        category_id: str,
        category_service: CategoryService = Depends(get_category_service),
        current_user: AdminUser = Depends(get_current_admin_user),
) -> Any:
    """
    Delete a category together with its menu section and items (admin only)
    """
    try:
        return category_service.delete_category(category_id)
    except MenuError as e:
        raise to_http_exception(e)
