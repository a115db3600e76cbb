import logging
from typing import Any, Dict, List, Optional

from core.config import settings
from core.exceptions import InvalidLanguageError, ItemNotFoundError
from models.menu import MenuItemModel, SUPPORTED_LANGUAGES
from services.documents import load_menu

logger = logging.getLogger(__name__)


class MenuQueryService:
    """Read-only views of the menu document"""

    def __init__(self, menu_document):
        self.menu_document = menu_document

    @staticmethod
    def resolve_language(language: Optional[str]) -> str:
        """
        Missing language falls back to the configured default; anything other
        than a supported code is rejected.
        """
        if language is None or language == "":
            return settings.DEFAULT_LANGUAGE
        if language not in SUPPORTED_LANGUAGES:
            raise InvalidLanguageError(language)
        return language

    def list_visible_sections(self, language: str) -> List[Dict[str, Any]]:
        if language not in SUPPORTED_LANGUAGES:
            raise InvalidLanguageError(language)

        menu = load_menu(self.menu_document)
        return [
            {
                "category": section["category"],
                "items": [item for item in section["items"] if MenuItemModel.is_visible_in(item, language)],
            }
            for section in menu["sections"]
        ]

    def list_sections(self) -> List[Dict[str, Any]]:
        return load_menu(self.menu_document)["sections"]

    def get_item(self, item_id: str) -> Dict[str, Any]:
        for section in self.list_sections():
            for item in section["items"]:
                if item["id"] == item_id:
                    return item
        raise ItemNotFoundError(item_id)
