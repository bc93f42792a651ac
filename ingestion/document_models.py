from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from langchain_core.documents import Document

DocumentBatch = List[Document]


@dataclass(frozen=True)
class RawInput:
    data: bytes  # raw file contents, opaque to everything but the reader
    source: str = "upload"  # file name or label, used for metadata and logs


@dataclass
class UnitResult:
    source: str
    status: str = "pending"  # "written" | "skipped" | "failed"
    stage: str = "reader"
    chunks: int = 0
    written: int = 0
    game_title: Optional[str] = None
    error: Optional[str] = None


@dataclass
class PipelineReport:
    results: List[UnitResult] = field(default_factory=list)

    def _count(self, status: str) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def written(self) -> int:
        return self._count("written")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def failed(self) -> int:
        return self._count("failed")

    @property
    def documents_written(self) -> int:
        return sum(r.written for r in self.results)
