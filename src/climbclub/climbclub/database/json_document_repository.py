from __future__ import annotations

from ..core.exceptions import StorageError, ValidationError
from .connection import JsonFileConnection
from .document import ClubDocument, document_from_dict, document_to_dict
from .repository import DocumentRepository


class JsonDocumentRepository(DocumentRepository):
    def __init__(self, conn: JsonFileConnection):
        self._conn = conn
        self.lock = conn.lock

    def load(self) -> ClubDocument:
        try:
            return document_from_dict(self._conn.read())
        except ValidationError as e:
            raise StorageError(f"Corrupt data file {self._conn.path}") from e

    def save(self, document: ClubDocument) -> None:
        self._conn.write(document_to_dict(document))
