from __future__ import annotations

from typing import List

from langchain_core.documents import Document
from langchain_text_splitters import TextSplitter, TokenTextSplitter

from common.config import yaml_config
from common.logger import get_logger
from ingestion.document_models import DocumentBatch
from ingestion.hash_utils import chunk_id

log = get_logger(__name__)


def build_token_splitter() -> TokenTextSplitter:
    """
    Token-bounded splitter configured from the chunking section of config.yaml.
    """
    cfg = yaml_config.chunking
    return TokenTextSplitter(
        encoding_name=cfg.encoding_name,
        chunk_size=cfg.chunk_size,
        chunk_overlap=cfg.chunk_overlap,
    )


class Splitter:
    def __init__(
        self,
        text_splitter: TextSplitter | None = None,
        max_chunks: int | None = None,
    ):
        self._text_splitter = text_splitter or build_token_splitter()
        self.max_chunks = max_chunks or yaml_config.chunking.max_chunks

    def split(self, document: Document) -> DocumentBatch:
        """
        Split one document into ordered chunks. Whitespace-only chunks are
        dropped so the first chunk always starts the source text.
        """
        if not document.page_content.strip():
            return []

        pieces = self._text_splitter.split_documents([document])
        kept: List[Document] = [p for p in pieces if p.page_content.strip()]
        if len(kept) > self.max_chunks:
            log.warning(
                "Truncating %s from %d to %d chunks",
                document.metadata.get("source"),
                len(kept),
                self.max_chunks,
            )
            kept = kept[: self.max_chunks]

        source_id = document.metadata.get("source_id", "")
        for i, chunk in enumerate(kept):
            chunk.metadata["chunk_index"] = i
            chunk.metadata["chunk_id"] = chunk_id(source_id, i, chunk.page_content)
        return kept
