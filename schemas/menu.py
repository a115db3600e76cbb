from pydantic import BaseModel, Field, validator
from typing import Optional, List, Literal
from models.menu import MenuItemModel, SUPPORTED_LANGUAGES

Language = Literal["en", "fa"]


class LanguageText(BaseModel):
    en: Optional[str] = None
    fa: Optional[str] = None


class LanguageList(BaseModel):
    en: Optional[List[str]] = None
    fa: Optional[List[str]] = None

    @validator("en", "fa", pre=True)
    def split_comma_separated(cls, v):
        if isinstance(v, str):
            return MenuItemModel.parse_ingredients(v)
        return v


class Price(BaseModel):
    en: Optional[str] = None
    fa: Optional[str] = None

    @validator("en", "fa", pre=True)
    def number_to_string(cls, v):
        # Older menus stored prices as numbers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class MenuItemBase(BaseModel):
    category: str
    name: LanguageText = Field(default_factory=LanguageText)
    description: LanguageText = Field(default_factory=LanguageText)
    ingredients: LanguageList = Field(default_factory=LanguageList)
    price: Price = Field(default_factory=Price)
    calories: int = Field(0, ge=0)
    image: str = ""
    is_available: bool = Field(True, alias="isAvailable")
    only_show_in: Optional[List[Language]] = Field(None, alias="onlyShowIn")

    @validator("only_show_in")
    def normalize_only_show_in(cls, v):
        if v is None:
            return None
        languages = [lang for lang in SUPPORTED_LANGUAGES if lang in v]
        # No restriction at all or a restriction to every language means "show everywhere"
        if not languages or len(languages) == len(SUPPORTED_LANGUAGES):
            return None
        return languages

    class Config:
        populate_by_name = True


class MenuItemCreate(MenuItemBase):
    id: Optional[str] = None


class MenuItem(MenuItemBase):
    id: str


class MenuSection(BaseModel):
    category: str
    items: List[MenuItem] = []


class MenuDocument(BaseModel):
    sections: List[MenuSection] = []


class UpsertResult(BaseModel):
    id: str
    category: str
    created: bool
    previous_category: Optional[str] = Field(None, alias="previousCategory")
    orphan: bool = False

    class Config:
        populate_by_name = True


class DeleteItemResult(BaseModel):
    found: bool
    category: Optional[str] = None
