import re
import time
from typing import Any, Dict, List, Optional

SUPPORTED_LANGUAGES = ("en", "fa")

# Latin comma and the Persian comma
INGREDIENT_SEPARATOR = re.compile(r"[,،]")


class MenuItemModel:
    @staticmethod
    def generate_id(category: str, now: Optional[float] = None) -> str:
        """Time based id used when the admin form leaves the id empty"""
        millis = int((now if now is not None else time.time()) * 1000)
        return f"{category}-{millis}"

    @staticmethod
    def parse_ingredients(value: str) -> List[str]:
        return [part.strip() for part in INGREDIENT_SEPARATOR.split(value) if part.strip()]

    @staticmethod
    def is_visible_in(item: Dict[str, Any], language: str) -> bool:
        only_show_in = item.get("onlyShowIn")
        if only_show_in and language not in only_show_in:
            return False
        return MenuItemModel.has_content(item, language)

    @staticmethod
    def has_content(item: Dict[str, Any], language: str) -> bool:
        """An item has content for a language when any of its name, description or ingredients is set"""
        name = (item.get("name") or {}).get(language)
        description = (item.get("description") or {}).get(language)
        ingredients = (item.get("ingredients") or {}).get(language)
        if name and name.strip():
            return True
        if description and description.strip():
            return True
        return any(i and i.strip() for i in ingredients or [])

    @staticmethod
    def visible_languages(item: Dict[str, Any]) -> List[str]:
        only_show_in = item.get("onlyShowIn")
        if not only_show_in:
            return list(SUPPORTED_LANGUAGES)
        return [lang for lang in SUPPORTED_LANGUAGES if lang in only_show_in]
