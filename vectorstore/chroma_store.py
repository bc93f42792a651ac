from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from langchain_chroma.vectorstores import Chroma
from langchain_core.documents import Document
from langchain_huggingface.embeddings import HuggingFaceEmbeddings
from tenacity import Retrying, stop_after_attempt, wait_exponential

from common.config import yaml_config
from common.logger import get_logger

log = get_logger(__name__)


class ChromaStore:
    def __init__(
        self,
        persist_dir: Path | str | None = None,
        collection_name: str | None = None,
        embeddings=None,
    ):
        """
        Wrapper for Chroma vector store with HuggingFace embeddings.
        Uses config/config.yaml for defaults.
        """
        self.persist_dir = str(persist_dir or yaml_config.app.persist_dir)
        self.collection_name = collection_name or yaml_config.app.collection
        self.write_attempts = yaml_config.vectorstore.write_attempts
        self.embeddings = embeddings or HuggingFaceEmbeddings(
            model_name=yaml_config.vectorstore.embedding_model
        )
        self._db = Chroma(
            collection_name=self.collection_name,
            embedding_function=self.embeddings,
            persist_directory=self.persist_dir,
        )

    @property
    def db(self) -> Chroma:
        return self._db

    def write(self, documents: Sequence[Document]) -> int:
        """
        Upsert chunks keyed by their chunk_id metadata, retrying transient
        failures with exponential backoff. The last error is re-raised.
        """
        docs = list(documents)
        if not docs:
            return 0

        ids: Optional[List[str]] = [d.metadata.get("chunk_id") for d in docs]
        if not all(ids):
            ids = None

        for attempt in Retrying(
            wait=wait_exponential(multiplier=1, min=1, max=8),
            stop=stop_after_attempt(self.write_attempts),
            reraise=True,
        ):
            with attempt:
                self._db.add_documents(docs, ids=ids)
        log.info(
            "Upserted %d chunks into collection '%s'", len(docs), self.collection_name
        )
        return len(docs)
