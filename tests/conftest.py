import pytest
from fastapi.testclient import TestClient

from api.deps import get_current_admin_user, get_image_storage
from core.database import InMemoryDocument, empty_menu, empty_categories, get_menu_document, get_categories_document
from main import app
from schemas.auth import AdminUser
from services.image_storage import ImageStorage


def make_item(item_id, category="breakfast", **overrides):
    item = {
        "id": item_id,
        "category": category,
        "name": {"en": f"Item {item_id}", "fa": f"آیتم {item_id}"},
        "description": {"en": "Freshly made", "fa": "تازه"},
        "ingredients": {"en": ["egg", "bread"], "fa": ["تخم مرغ", "نان"]},
        "price": {"en": "120000", "fa": "۱۲۰۰۰۰"},
        "calories": 320,
        "image": "/uploads/item.png",
        "isAvailable": True,
    }
    item.update(overrides)
    return item


@pytest.fixture
def menu_document():
    return InMemoryDocument(empty_menu)


@pytest.fixture
def categories_document():
    return InMemoryDocument(empty_categories)


def _override_documents(menu_document, categories_document):
    app.dependency_overrides[get_menu_document] = lambda: menu_document
    app.dependency_overrides[get_categories_document] = lambda: categories_document


@pytest.fixture
def client(menu_document, categories_document, tmp_path):
    _override_documents(menu_document, categories_document)
    app.dependency_overrides[get_current_admin_user] = lambda: AdminUser(username="admin")
    app.dependency_overrides[get_image_storage] = lambda: ImageStorage(
        backend="local", upload_dir=str(tmp_path / "uploads"), url_prefix="/uploads"
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(menu_document, categories_document):
    _override_documents(menu_document, categories_document)
    yield TestClient(app)
    app.dependency_overrides.clear()
