import logging
from typing import Any, Dict

from pydantic import ValidationError as SchemaError

from core.exceptions import CorruptDocumentError
from models.category import CategoryModel, PREDEFINED_CATEGORIES
from schemas.category import CategoriesDocument
from schemas.menu import MenuDocument

logger = logging.getLogger(__name__)


def load_menu(document) -> Dict[str, Any]:
    """Read and validate the menu document, returning it as plain JSON data"""
    raw = document.read()
    try:
        menu = MenuDocument.parse_obj(raw)
    except SchemaError as e:
        logger.error(f"Menu document {document.path} is malformed: {e}")
        raise CorruptDocumentError(f"Menu document {document.path} is malformed: {e}", path=document.path) from e
    return menu.dict(by_alias=True, exclude_none=True)


def load_categories(document, menu_document=None) -> Dict[str, Any]:
    """
    Read and validate the category document.

    A missing document is replaced by the seed list; it is not written here.
    """
    if not document.exists():
        section_categories = []
        if menu_document is not None:
            section_categories = [s["category"] for s in load_menu(menu_document)["sections"]]
        return CategoryModel.seed(section_categories)

    raw = document.read()
    if isinstance(raw, dict) and "predefinedCategories" not in raw:
        raw["predefinedCategories"] = list(PREDEFINED_CATEGORIES)
    try:
        categories = CategoriesDocument.parse_obj(raw)
    except SchemaError as e:
        logger.error(f"Category document {document.path} is malformed: {e}")
        raise CorruptDocumentError(f"Category document {document.path} is malformed: {e}", path=document.path) from e
    return categories.dict(by_alias=True)
