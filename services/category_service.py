import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as SchemaError

from core.database import commit_documents
from core.exceptions import (
    CannotDeletePredefinedError,
    DuplicateCategoryError,
    ValidationError,
)
from models.category import CategoryModel
from schemas.category import Category, CategoryCreate, CategoryName, DeleteCategoryResult
from services.documents import load_categories, load_menu

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Category CRUD with cascades into the menu document.

    Every mutation takes the category lock before the menu lock and writes
    both documents through commit_documents, categories first.
    """

    def __init__(self, categories_document, menu_document):
        self.categories_document = categories_document
        self.menu_document = menu_document

    def list_categories(self) -> Dict[str, Any]:
        with self.categories_document.lock, self.menu_document.lock:
            seeding = not self.categories_document.exists()
            categories = load_categories(self.categories_document, self.menu_document)
            if seeding:
                commit_documents([(self.categories_document, categories)])
                logger.info(f"Seeded {len(categories['categories'])} categories")
        return categories

    def add_category(self, name: Union[CategoryName, Dict[str, str]], category_id: Optional[str] = None) -> Dict[str, Any]:
        try:
            category_in = CategoryCreate.parse_obj({"id": category_id, "name": name})
        except SchemaError as e:
            raise ValidationError(f"Invalid category: {e}") from e

        slug = CategoryModel.slugify(category_in.id or category_in.name.en)
        if not slug:
            raise ValidationError(
                f"Cannot derive a category id from '{category_in.id or category_in.name.en}'"
            )

        with self.categories_document.lock, self.menu_document.lock:
            categories = load_categories(self.categories_document, self.menu_document)
            menu = load_menu(self.menu_document)

            for existing in categories["categories"]:
                if existing["id"] == slug:
                    raise DuplicateCategoryError(f"Category '{slug}' already exists", category=slug)
                for lang in ("en", "fa"):
                    if existing["name"][lang].casefold() == getattr(category_in.name, lang).casefold():
                        raise DuplicateCategoryError(
                            f"Category name '{getattr(category_in.name, lang)}' is already used by '{existing['id']}'",
                            category=existing["id"],
                        )

            category = CategoryModel.create_category(slug, category_in.name.dict())
            categories["categories"].append(category)
            if not any(s["category"] == slug for s in menu["sections"]):
                menu["sections"].append({"category": slug, "items": []})

            commit_documents([(self.categories_document, categories), (self.menu_document, menu)])

        logger.info(f"Added category '{slug}'")
        return category

    def reorder_categories(self, new_order: List[Union[Category, Dict[str, Any]]]) -> Dict[str, Any]:
        try:
            ordered = [c if isinstance(c, Category) else Category.parse_obj(c) for c in new_order]
        except SchemaError as e:
            raise ValidationError(f"Invalid category list: {e}") from e

        ids = [c.id for c in ordered]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValidationError(f"Duplicate category ids: {', '.join(duplicates)}")

        with self.categories_document.lock, self.menu_document.lock:
            categories = load_categories(self.categories_document, self.menu_document)
            menu = load_menu(self.menu_document)

            categories["categories"] = [c.dict() for c in ordered]

            sections = menu["sections"]
            existing = {s["category"] for s in sections}
            sections.extend({"category": i, "items": []} for i in ids if i not in existing)

            # Sections without a category sort last, keeping their relative order
            position = {category_id: n for n, category_id in enumerate(ids)}
            menu["sections"] = sorted(sections, key=lambda s: position.get(s["category"], len(ids)))

            commit_documents([(self.categories_document, categories), (self.menu_document, menu)])

        logger.info(f"Reordered categories: {', '.join(ids)}")
        return categories

    def delete_category(self, category_id: str) -> DeleteCategoryResult:
        if not category_id or not category_id.strip():
            raise ValidationError("Category id is required")
        category_id = category_id.strip()

        with self.categories_document.lock, self.menu_document.lock:
            categories = load_categories(self.categories_document, self.menu_document)
            if category_id in categories["predefinedCategories"]:
                raise CannotDeletePredefinedError(category_id)

            menu = load_menu(self.menu_document)

            remaining = [c for c in categories["categories"] if c["id"] != category_id]
            found = len(remaining) != len(categories["categories"])
            categories["categories"] = remaining

            removed_items = sum(len(s["items"]) for s in menu["sections"] if s["category"] == category_id)
            had_section = any(s["category"] == category_id for s in menu["sections"])
            menu["sections"] = [s for s in menu["sections"] if s["category"] != category_id]

            if not found and not had_section:
                logger.warning(f"Delete requested for unknown category '{category_id}'")
                return DeleteCategoryResult(found=False, category=category_id)

            commit_documents([(self.categories_document, categories), (self.menu_document, menu)])

        logger.info(f"Deleted category '{category_id}' and {removed_items} menu items")
        return DeleteCategoryResult(found=found, category=category_id, removed_items=removed_items)
