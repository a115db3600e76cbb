import re
from typing import Any, Dict, List

PREDEFINED_CATEGORIES = {
    "breakfast": {"en": "Breakfast", "fa": "صبحانه"},
    "hot-coffee": {"en": "Hot Coffee", "fa": "قهوه گرم"},
    "cold-coffee": {"en": "Cold Coffee", "fa": "قهوه سرد"},
    "mocktails": {"en": "Mocktails", "fa": "موکتل‌ها"},
    "smoothies": {"en": "Smoothies", "fa": "اسموتی‌ها"},
    "milkshakes": {"en": "Milkshakes", "fa": "میلک‌شیک‌ها"},
    "hot-drinks": {"en": "Hot Drinks", "fa": "نوشیدنی‌های گرم"},
    "cold-brews": {"en": "Cold Brews", "fa": "دمنوش سرد"},
    "herbal-tea": {"en": "Herbal Tea", "fa": "دمنوش"},
    "cake-desserts": {"en": "Cakes & Desserts", "fa": "کیک و دسر"},
}


class CategoryModel:
    @staticmethod
    def slugify(name: str) -> str:
        """'Iced Tea' -> 'iced-tea'"""
        slug = re.sub(r"\s+", "-", name.strip().lower())
        return re.sub(r"[^a-z0-9-]", "", slug)

    @staticmethod
    def default_name(category_id: str) -> Dict[str, str]:
        if category_id in PREDEFINED_CATEGORIES:
            return dict(PREDEFINED_CATEGORIES[category_id])
        title = category_id.replace("-", " ").title()
        return {"en": title, "fa": title}

    @staticmethod
    def create_category(category_id: str, name: Dict[str, str]) -> Dict[str, Any]:
        return {"id": category_id, "name": {"en": name["en"], "fa": name["fa"]}}

    @staticmethod
    def seed(section_categories: List[str]) -> Dict[str, Any]:
        """
        Initial category document: every predefined category, followed by any
        category that already has a menu section.
        """
        ids = list(PREDEFINED_CATEGORIES)
        for category_id in section_categories:
            if category_id not in ids:
                ids.append(category_id)
        return {
            "categories": [
                CategoryModel.create_category(category_id, CategoryModel.default_name(category_id))
                for category_id in ids
            ],
            "predefinedCategories": list(PREDEFINED_CATEGORIES),
        }
