from typing import Optional


class MenuError(Exception):
    """Base class for errors raised by the menu and category services"""

    def __init__(self, message: str, *, item_id: Optional[str] = None, category: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.item_id = item_id
        self.category = category


class ValidationError(MenuError):
    """Malformed or missing fields in a mutation request"""


class InvalidLanguageError(ValidationError):
    def __init__(self, language: str):
        super().__init__(f"Unsupported language: {language!r}")
        self.language = language


class DuplicateCategoryError(MenuError):
    pass


class CannotDeletePredefinedError(MenuError):
    def __init__(self, category: str):
        super().__init__(f"Cannot delete predefined category '{category}'", category=category)


class ItemNotFoundError(MenuError):
    def __init__(self, item_id: str):
        super().__init__(f"Menu item '{item_id}' not found", item_id=item_id)


class PersistenceError(MenuError):
    """Reading or writing a JSON document failed"""

    def __init__(self, message: str, *, path: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.path = path


class CorruptDocumentError(PersistenceError):
    """A JSON document was readable but did not match the expected shape"""


class InconsistentStoreError(PersistenceError):
    """A multi-document commit failed and could not be rolled back"""
