import pytest

from conftest import make_item
from core.database import InMemoryDocument, empty_categories, empty_menu
from core.exceptions import (
    CannotDeletePredefinedError,
    CorruptDocumentError,
    DuplicateCategoryError,
    InconsistentStoreError,
    PersistenceError,
    ValidationError,
)
from models.category import PREDEFINED_CATEGORIES
from services.category_service import CategoryService
from services.menu_query_service import MenuQueryService
from services.menu_service import MenuService


class FailingDocument(InMemoryDocument):
    def __init__(self, *args, successful_writes=0, **kwargs):
        super().__init__(*args, **kwargs)
        self.successful_writes = successful_writes

    def write(self, data):
        if self.successful_writes <= 0:
            raise PersistenceError("disk full", path=self.path)
        self.successful_writes -= 1
        super().write(data)


ICED_TEA = {"en": "Iced Tea", "fa": "چای یخ"}


@pytest.fixture
def category_service(categories_document, menu_document):
    return CategoryService(categories_document, menu_document)


@pytest.fixture
def menu_service(menu_document, categories_document):
    return MenuService(menu_document, categories_document)


def category_ids(service):
    return [c["id"] for c in service.list_categories()["categories"]]


def section_categories(menu_document):
    return [s["category"] for s in menu_document.read()["sections"]]


def test_first_listing_seeds_and_persists(category_service, categories_document):
    listed = category_service.list_categories()

    assert [c["id"] for c in listed["categories"]] == list(PREDEFINED_CATEGORIES)
    assert listed["predefinedCategories"] == list(PREDEFINED_CATEGORIES)
    assert categories_document.exists()
    assert listed["categories"][0] == {"id": "breakfast", "name": {"en": "Breakfast", "fa": "صبحانه"}}


def test_seed_includes_existing_sections(categories_document):
    menu_document = InMemoryDocument(empty_menu, data={"sections": [
        {"category": "specials", "items": [make_item("soup", category="specials")]},
    ]})

    ids = category_ids(CategoryService(categories_document, menu_document))

    assert ids[-1] == "specials"


def test_legacy_string_categories_are_upgraded(menu_document):
    categories_document = InMemoryDocument(empty_categories, data={
        "categories": ["hot-coffee", "iced-tea"],
        "predefinedCategories": ["hot-coffee"],
    })

    listed = CategoryService(categories_document, menu_document).list_categories()

    assert listed["categories"] == [
        {"id": "hot-coffee", "name": {"en": "Hot Coffee", "fa": "قهوه گرم"}},
        {"id": "iced-tea", "name": {"en": "Iced Tea", "fa": "Iced Tea"}},
    ]
    assert listed["predefinedCategories"] == ["hot-coffee"]


def test_add_category_derives_slug_and_creates_empty_section(category_service, menu_document):
    category = category_service.add_category(ICED_TEA)

    assert category == {"id": "iced-tea", "name": ICED_TEA}
    assert "iced-tea" in category_ids(category_service)
    assert {"category": "iced-tea", "items": []} in menu_document.read()["sections"]


def test_add_category_appends_to_the_end(category_service):
    category_service.add_category(ICED_TEA)
    category_service.add_category({"en": "Sandwiches", "fa": "ساندویچ"}, category_id="sandwiches")

    assert category_ids(category_service)[-2:] == ["iced-tea", "sandwiches"]


def test_add_category_keeps_existing_section(category_service, menu_service, menu_document):
    category_service.list_categories()
    assert menu_service.upsert_item(make_item("peach", category="iced-tea")).orphan

    category_service.add_category(ICED_TEA)

    sections = menu_document.read()["sections"]
    assert section_categories(menu_document) == ["iced-tea"]
    assert [i["id"] for i in sections[0]["items"]] == ["peach"]


def test_add_category_rejects_duplicate_id(category_service):
    with pytest.raises(DuplicateCategoryError):
        category_service.add_category({"en": "Morning", "fa": "صبح"}, category_id="breakfast")


@pytest.mark.parametrize("name", [
    {"en": "BREAKFAST", "fa": "صبح"},
    {"en": "Morning", "fa": "صبحانه"},
])
def test_add_category_rejects_duplicate_names(category_service, name):
    with pytest.raises(DuplicateCategoryError):
        category_service.add_category(name, category_id="morning")


@pytest.mark.parametrize("name", [
    {"en": "چای", "fa": "چای"},
    {"en": "Tea", "fa": ""},
    {"en": "Tea"},
])
def test_add_category_rejects_unusable_input(category_service, categories_document, name):
    with pytest.raises(ValidationError):
        category_service.add_category(name)

    assert not categories_document.exists()


def test_reorder_sorts_sections_and_fills_gaps(category_service, menu_service, menu_document):
    menu_service.upsert_item(make_item("latte", category="hot-coffee"))
    menu_service.upsert_item(make_item("mystery", category="legacy"))
    menu_service.upsert_item(make_item("omelette", category="breakfast"))

    category_service.reorder_categories([
        {"id": "breakfast", "name": {"en": "Breakfast", "fa": "صبحانه"}},
        {"id": "hot-coffee", "name": {"en": "Hot Coffee", "fa": "قهوه گرم"}},
        {"id": "iced-tea", "name": ICED_TEA},
    ])

    assert section_categories(menu_document) == ["breakfast", "hot-coffee", "iced-tea", "legacy"]
    assert category_ids(category_service) == ["breakfast", "hot-coffee", "iced-tea"]


def test_reorder_order_is_visible_to_queries(category_service, menu_service, menu_document):
    menu_service.upsert_item(make_item("latte", category="hot-coffee"))
    menu_service.upsert_item(make_item("omelette", category="breakfast"))
    order = [{"id": "hot-coffee", "name": {"en": "Hot Coffee", "fa": "قهوه گرم"}},
             {"id": "breakfast", "name": {"en": "Breakfast", "fa": "صبحانه"}}]

    category_service.reorder_categories(order)

    sections = MenuQueryService(menu_document).list_visible_sections("fa")
    assert [s["category"] for s in sections] == ["hot-coffee", "breakfast"]


def test_reorder_keeps_predefined_list(category_service):
    category_service.reorder_categories([{"id": "iced-tea", "name": ICED_TEA}])

    listed = category_service.list_categories()
    assert listed["predefinedCategories"] == list(PREDEFINED_CATEGORIES)
    assert [c["id"] for c in listed["categories"]] == ["iced-tea"]


def test_reorder_rejects_duplicate_ids(category_service, categories_document):
    with pytest.raises(ValidationError):
        category_service.reorder_categories([{"id": "iced-tea", "name": ICED_TEA},
                                             {"id": "iced-tea", "name": ICED_TEA}])

    assert not categories_document.exists()


@pytest.mark.parametrize("category_id", list(PREDEFINED_CATEGORIES))
def test_predefined_categories_cannot_be_deleted(category_service, menu_service, categories_document,
                                                 menu_document, category_id):
    menu_service.upsert_item(make_item("item", category=category_id))
    category_service.list_categories()
    categories_before = categories_document.read()
    menu_before = menu_document.read()

    with pytest.raises(CannotDeletePredefinedError):
        category_service.delete_category(category_id)

    assert categories_document.read() == categories_before
    assert menu_document.read() == menu_before


def test_delete_cascades_to_section_items(category_service, menu_service, menu_document):
    category_service.add_category(ICED_TEA)
    menu_service.upsert_item(make_item("peach", category="iced-tea"))
    menu_service.upsert_item(make_item("lemon", category="iced-tea"))
    menu_service.upsert_item(make_item("omelette", category="breakfast"))

    result = category_service.delete_category("iced-tea")

    assert result.found
    assert result.removed_items == 2
    assert "iced-tea" not in category_ids(category_service)
    sections = menu_document.read()["sections"]
    assert [s["category"] for s in sections] == ["breakfast"]
    assert [i["id"] for i in sections[0]["items"]] == ["omelette"]


def test_delete_unknown_category_is_a_soft_miss(category_service, categories_document):
    category_service.list_categories()
    before = categories_document.read()

    result = category_service.delete_category("nope")

    assert not result.found
    assert categories_document.read() == before


def test_delete_clears_orphan_section(category_service, menu_service, menu_document):
    category_service.list_categories()
    menu_service.upsert_item(make_item("mystery", category="legacy"))

    result = category_service.delete_category("legacy")

    assert not result.found
    assert result.removed_items == 1
    assert section_categories(menu_document) == []


def test_failed_menu_write_rolls_back_categories(categories_document):
    CategoryService(categories_document, InMemoryDocument(empty_menu)).list_categories()
    before = categories_document.read()
    service = CategoryService(categories_document, FailingDocument(empty_menu))

    with pytest.raises(PersistenceError) as exc_info:
        service.add_category(ICED_TEA)

    assert not isinstance(exc_info.value, InconsistentStoreError)
    assert categories_document.read() == before


def test_failed_rollback_is_reported_as_inconsistent():
    categories_document = FailingDocument(
        empty_categories, data={"categories": [], "predefinedCategories": []}, successful_writes=1
    )
    service = CategoryService(categories_document, FailingDocument(empty_menu))

    with pytest.raises(InconsistentStoreError):
        service.add_category(ICED_TEA)


def test_corrupt_category_document_is_reported(menu_document):
    categories_document = InMemoryDocument(empty_categories, data={"categories": [{"id": "x"}]})

    with pytest.raises(CorruptDocumentError):
        CategoryService(categories_document, menu_document).list_categories()


class RecordingLock:
    def __init__(self, name, held):
        self.name = name
        self.held = held

    def __enter__(self):
        self.held.append(self.name)
        return self

    def __exit__(self, *exc_info):
        self.held.remove(self.name)
        return False


class LockCheckingDocument(InMemoryDocument):
    """Records which document locks are held whenever it is read"""

    def __init__(self, *args, held, reads, **kwargs):
        super().__init__(*args, **kwargs)
        self.held = held
        self.reads = reads

    def read(self):
        self.reads.append(list(self.held))
        return super().read()


def test_seeding_reads_menu_under_both_locks():
    held, reads = [], []
    categories_document = InMemoryDocument(empty_categories)
    categories_document.lock = RecordingLock("categories", held)
    menu_document = LockCheckingDocument(empty_menu, data={"sections": [
        {"category": "specials", "items": [make_item("soup", category="specials")]},
    ]}, held=held, reads=reads)
    menu_document.lock = RecordingLock("menu", held)

    listed = CategoryService(categories_document, menu_document).list_categories()

    assert listed["categories"][-1]["id"] == "specials"
    assert reads and all(r == ["categories", "menu"] for r in reads)
