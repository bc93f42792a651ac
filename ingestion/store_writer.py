from __future__ import annotations

from typing import Protocol, Sequence

from langchain_core.documents import Document

from common.errors import StoreWriteError
from common.logger import get_logger
from ingestion.document_models import DocumentBatch

log = get_logger(__name__)


class VectorStoreWriter(Protocol):
    def write(self, documents: Sequence[Document]) -> int: ...


class StoreWriter:
    """Terminal stage: persist one batch of chunks into the vector store."""

    def __init__(self, store: VectorStoreWriter):
        self.store = store

    def write(self, documents: DocumentBatch) -> int:
        if not documents:
            log.info("Skipping vector store write for an empty batch.")
            return 0

        doc_count = len(documents)
        source = documents[0].metadata.get("source")
        log.info("Writing %d documents to vector store.", doc_count)
        try:
            self.store.write(documents)
        except Exception as e:
            raise StoreWriteError(
                f"failed to write {doc_count} documents: {e}", source=source
            ) from e
        log.info("%d documents have been written to vector store.", doc_count)
        return doc_count
