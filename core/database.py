import copy
import json
import logging
import os
import tempfile
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.config import settings
from core.exceptions import InconsistentStoreError, PersistenceError

logger = logging.getLogger(__name__)


class JsonDocument:
    """
    A single JSON document on disk.

    Every write replaces the whole file: the new content goes to a temporary
    file in the same directory which is then renamed over the old one.
    """

    def __init__(self, path: str, default_factory: Callable[[], Dict[str, Any]]):
        self.path = path
        self.default_factory = default_factory
        self.lock = threading.RLock()

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def read(self) -> Dict[str, Any]:
        if not self.exists():
            return self.default_factory()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise PersistenceError(f"Failed to read {self.path}: {e}", path=self.path) from e

    def write(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(self.path) or "."
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PersistenceError(f"Failed to write {self.path}: {e}", path=self.path) from e


class InMemoryDocument:
    """Drop-in replacement for JsonDocument that keeps its content in memory"""

    def __init__(self, default_factory: Callable[[], Dict[str, Any]], data: Optional[Dict[str, Any]] = None,
                 path: str = "<memory>"):
        self.path = path
        self.default_factory = default_factory
        self.data = copy.deepcopy(data)
        self.lock = threading.RLock()

    def exists(self) -> bool:
        return self.data is not None

    def read(self) -> Dict[str, Any]:
        if self.data is None:
            return self.default_factory()
        return copy.deepcopy(self.data)

    def write(self, data: Dict[str, Any]) -> None:
        self.data = copy.deepcopy(data)


def commit_documents(changes: List[Tuple[Any, Dict[str, Any]]]) -> None:
    """
    Write several documents as one unit.

    Documents are written in the given order. If a write fails, the documents
    already written are restored from their snapshots. When a restore fails
    too, InconsistentStoreError is raised instead of the original error.
    """
    written = []
    for document, data in changes:
        snapshot = document.read() if document.exists() else None
        try:
            document.write(data)
        except PersistenceError as e:
            _rollback(written, e)
            raise
        written.append((document, snapshot))


def _rollback(written, cause: PersistenceError) -> None:
    failed = []
    for document, snapshot in reversed(written):
        try:
            if snapshot is None:
                _remove(document)
            else:
                document.write(snapshot)
            logger.warning(f"Rolled back {document.path} after failed commit")
        except (PersistenceError, OSError) as e:
            logger.error(f"Rollback of {document.path} failed: {e}")
            failed.append(document.path)
    if failed:
        raise InconsistentStoreError(
            f"Commit failed ({cause.message}) and could not be rolled back for: {', '.join(failed)}",
            path=cause.path,
        ) from cause


def _remove(document) -> None:
    if isinstance(document, InMemoryDocument):
        document.data = None
    elif os.path.exists(document.path):
        os.remove(document.path)


def empty_menu() -> Dict[str, Any]:
    return {"sections": []}


def empty_categories() -> Dict[str, Any]:
    return {"categories": [], "predefinedCategories": []}


class JsonDatabase:
    documents: Dict[str, JsonDocument] = None

    def connect_to_database(self):
        try:
            os.makedirs(settings.DATA_DIR, exist_ok=True)
            self.documents = {
                "menu": JsonDocument(settings.menu_path, empty_menu),
                "categories": JsonDocument(settings.categories_path, empty_categories),
            }
            logger.info(f"Using JSON documents in {os.path.abspath(settings.DATA_DIR)}")
            return self.documents
        except OSError as e:
            logger.error(f"Failed to prepare data directory: {e}")
            raise e

    def close_database_connection(self):
        if self.documents:
            self.documents = None
            logger.info("Released JSON documents")

    def get_document(self, name: str) -> JsonDocument:
        if self.documents is None:
            self.connect_to_database()
        return self.documents[name]


database = JsonDatabase()


# Documents
def get_menu_document() -> JsonDocument:
    return database.get_document("menu")


def get_categories_document() -> JsonDocument:
    return database.get_document("categories")
