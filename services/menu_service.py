import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as SchemaError

from core.database import commit_documents
from core.exceptions import ValidationError
from models.menu import MenuItemModel
from schemas.menu import MenuItem, UpsertResult, DeleteItemResult
from services.documents import load_menu, load_categories

logger = logging.getLogger(__name__)


class MenuService:
    """Upsert and delete menu items, keeping one section per category"""

    def __init__(self, menu_document, categories_document=None):
        self.menu_document = menu_document
        self.categories_document = categories_document

    @staticmethod
    def validate_item(item: Union[MenuItem, Dict[str, Any]]) -> MenuItem:
        if not isinstance(item, MenuItem):
            try:
                item = MenuItem.parse_obj(item)
            except SchemaError as e:
                raise ValidationError(f"Invalid menu item: {e}") from e

        item.id = item.id.strip()
        item.category = item.category.strip()
        if not item.id:
            raise ValidationError("Menu item id is required")
        if not item.category:
            raise ValidationError("Menu item category is required", item_id=item.id)

        data = item.dict(by_alias=True, exclude_none=True)
        languages = MenuItemModel.visible_languages(data)
        if not any((data.get("name") or {}).get(lang, "").strip() for lang in languages):
            raise ValidationError(
                f"Menu item '{item.id}' needs a name in at least one of: {', '.join(languages)}",
                item_id=item.id,
                category=item.category,
            )
        return item

    def upsert_item(self, item: Union[MenuItem, Dict[str, Any]]) -> UpsertResult:
        item = self.validate_item(item)
        data = item.dict(by_alias=True, exclude_none=True)

        with self.menu_document.lock:
            orphan = self._is_orphan(item.category)
            menu = load_menu(self.menu_document)
            sections = menu["sections"]

            # An item whose category changed is removed from its old section first
            previous_category = None
            emptied = []
            for section in sections:
                if section["category"] == item.category:
                    continue
                remaining = [i for i in section["items"] if i["id"] != item.id]
                if len(remaining) != len(section["items"]):
                    previous_category = previous_category or section["category"]
                    section["items"] = remaining
                    if not remaining:
                        emptied.append(section["category"])
            sections = [s for s in sections if s["items"] or s["category"] not in emptied]

            section = next((s for s in sections if s["category"] == item.category), None)
            if section is None:
                section = {"category": item.category, "items": []}
                sections.append(section)

            index = next((n for n, i in enumerate(section["items"]) if i["id"] == item.id), None)
            if index is None:
                section["items"].append(data)
            else:
                section["items"][index] = data

            menu["sections"] = sections
            commit_documents([(self.menu_document, menu)])

        if orphan:
            logger.warning(f"Menu item '{item.id}' saved under unknown category '{item.category}'")
        if previous_category:
            logger.info(f"Moved menu item '{item.id}' from '{previous_category}' to '{item.category}'")
        else:
            logger.info(f"{'Updated' if index is not None else 'Created'} menu item '{item.id}' in '{item.category}'")

        return UpsertResult(
            id=item.id,
            category=item.category,
            created=index is None and previous_category is None,
            previous_category=previous_category,
            orphan=orphan,
        )

    def delete_item(self, item_id: str) -> DeleteItemResult:
        if not item_id or not item_id.strip():
            raise ValidationError("Menu item id is required")
        item_id = item_id.strip()

        with self.menu_document.lock:
            menu = load_menu(self.menu_document)
            category: Optional[str] = None
            emptied = []
            for section in menu["sections"]:
                remaining = [i for i in section["items"] if i["id"] != item_id]
                if len(remaining) != len(section["items"]):
                    category = category or section["category"]
                    section["items"] = remaining
                    if not remaining:
                        emptied.append(section["category"])

            if category is None:
                logger.warning(f"Delete requested for unknown menu item '{item_id}'")
                return DeleteItemResult(found=False)

            # Only sections emptied by this delete are dropped
            menu["sections"] = [s for s in menu["sections"] if s["items"] or s["category"] not in emptied]
            commit_documents([(self.menu_document, menu)])

        logger.info(f"Deleted menu item '{item_id}' from '{category}'")
        return DeleteItemResult(found=True, category=category)

    def _is_orphan(self, category: str) -> bool:
        if self.categories_document is None:
            return False
        categories = load_categories(self.categories_document, self.menu_document)
        return category not in {c["id"] for c in categories["categories"]}
