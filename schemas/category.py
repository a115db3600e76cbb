from pydantic import BaseModel, Field, validator
from typing import Optional, List
from models.category import CategoryModel


class CategoryName(BaseModel):
    en: str
    fa: str

    @validator("en", "fa")
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category name cannot be empty")
        return v


class CategoryBase(BaseModel):
    name: CategoryName


class CategoryCreate(CategoryBase):
    id: Optional[str] = None


class Category(CategoryBase):
    id: str


class CategoryReorder(BaseModel):
    categories: List[Category]


class CategoriesDocument(BaseModel):
    categories: List[Category] = []
    predefined_categories: List[str] = Field([], alias="predefinedCategories")

    @validator("categories", pre=True)
    def upgrade_bare_ids(cls, v):
        # Earlier documents listed categories as bare id strings
        if isinstance(v, list):
            return [
                CategoryModel.create_category(c, CategoryModel.default_name(c)) if isinstance(c, str) else c
                for c in v
            ]
        return v

    class Config:
        populate_by_name = True


class DeleteCategoryResult(BaseModel):
    found: bool
    category: str
    removed_items: int = Field(0, alias="removedItems")

    class Config:
        populate_by_name = True
