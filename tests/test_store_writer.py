from unittest.mock import MagicMock

import pytest
from langchain_core.embeddings import FakeEmbeddings

from common.errors import StoreWriteError
from ingestion.store_writer import StoreWriter
from tests.conftest import FakeStore, make_chunks
from vectorstore.chroma_store import ChromaStore


def test_writes_batch_and_returns_count(fake_store):
    written = StoreWriter(fake_store).write(make_chunks("a walkthrough", "more text"))

    assert written == 2
    assert len(fake_store.batches) == 1


def test_empty_batch_is_a_no_op():
    store = MagicMock()

    assert StoreWriter(store).write([]) == 0
    store.write.assert_not_called()


def test_store_failure_is_reported():
    with pytest.raises(StoreWriteError) as exc:
        StoreWriter(FakeStore(fail_on="boom")).write(make_chunks("boom"))

    assert isinstance(exc.value.__cause__, ConnectionError)
    assert exc.value.source == "guide.txt"


def test_chroma_store_upserts_by_chunk_id(tmp_path):
    store = ChromaStore(
        persist_dir=tmp_path / "chroma",
        collection_name="games_test",
        embeddings=FakeEmbeddings(size=16),
    )
    chunks = make_chunks("Chrono Trigger guide", "Lavos fight")
    for i, c in enumerate(chunks):
        c.metadata["chunk_id"] = f"chunk-{i}"
        c.metadata["gameTitle"] = "chrono_trigger"

    assert store.write(chunks) == 2
    assert store.write(chunks) == 2

    stored = store.db.get(ids=["chunk-0", "chunk-1"])
    assert sorted(stored["ids"]) == ["chunk-0", "chunk-1"]
    assert {m["gameTitle"] for m in stored["metadatas"]} == {"chrono_trigger"}
