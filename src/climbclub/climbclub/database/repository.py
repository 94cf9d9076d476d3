from __future__ import annotations

from typing import ContextManager, Protocol

from .document import ClubDocument


class DocumentRepository(Protocol):
    """Persistence interface for the club document.

    Note (DIP): services depend on this interface, not on the JSON file.
    `lock` serializes load-modify-save cycles inside one process.
    """

    lock: ContextManager

    def load(self) -> ClubDocument:
        raise NotImplementedError

    def save(self, document: ClubDocument) -> None:
        raise NotImplementedError
