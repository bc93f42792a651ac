from __future__ import annotations

from typing import Any, Dict, List, Sequence

import pytest
from langchain_core.documents import Document
from langchain_core.prompts import PromptTemplate
from langchain_text_splitters import TextSplitter

from chains.title_classifier import GameTitle


class FixedSplitter(TextSplitter):
    """Ignores the input text and returns the same pieces every time."""

    def __init__(self, pieces: Sequence[str]):
        super().__init__(chunk_size=10_000, chunk_overlap=0)
        self.pieces = list(pieces)

    def split_text(self, text: str) -> List[str]:
        return list(self.pieces)


class FakeClassifier:
    def __init__(self, title: Any = "UNKNOWN", error: Exception | None = None):
        self.title = title
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def classify(self, prompt: PromptTemplate, variables: Dict[str, Any]):
        self.calls.append(variables)
        if self.error is not None:
            raise self.error
        if isinstance(self.title, str):
            return GameTitle(title=self.title)
        return self.title


class FakeStore:
    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.batches: List[List[Document]] = []

    def write(self, documents: Sequence[Document]) -> int:
        if self.fail_on and any(self.fail_on in d.page_content for d in documents):
            raise ConnectionError("vector store unreachable")
        self.batches.append(list(documents))
        return len(documents)

    @property
    def documents(self) -> List[Document]:
        return [d for batch in self.batches for d in batch]


@pytest.fixture
def prompt() -> PromptTemplate:
    return PromptTemplate.from_template("Which game is this about?\n\n{document}")


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


def make_chunks(*texts: str, source: str = "guide.txt") -> List[Document]:
    return [
        Document(
            page_content=t,
            metadata={"source": source, "source_id": "abc123", "chunk_index": i},
        )
        for i, t in enumerate(texts)
    ]
