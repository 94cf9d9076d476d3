from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .document import ClubDocument
from .repository import DocumentRepository


@contextmanager
def document_transaction(documents: DocumentRepository) -> Iterator[ClubDocument]:
    """Load the document, hand it out for changes, save it on success.

    Nothing is written if the block raises, so a failed rule check leaves
    the stored data untouched.
    """

    with documents.lock:
        doc = documents.load()
        yield doc
        documents.save(doc)


@contextmanager
def document_snapshot(documents: DocumentRepository) -> Iterator[ClubDocument]:
    with documents.lock:
        yield documents.load()
