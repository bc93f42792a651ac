from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, List, Sequence

import orjson
from tqdm import tqdm

from common.config import yaml_config
from common.errors import LoaderError
from common.logger import get_logger
from ingestion.document_models import PipelineReport, RawInput, UnitResult
from ingestion.readers import DocumentReader
from ingestion.splitters import Splitter
from ingestion.store_writer import StoreWriter
from ingestion.title_determiner import TitleDeterminer

log = get_logger(__name__)


class IngestPipeline:
    """
    Reader -> Splitter -> TitleDeterminer -> StoreWriter.

    Each raw input is one unit of work, run end to end on a bounded thread
    pool. Units share no state, finish in any order, and a failing unit is
    recorded in the report without stopping the others.
    """

    def __init__(
        self,
        reader: DocumentReader,
        splitter: Splitter,
        title_determiner: TitleDeterminer,
        store_writer: StoreWriter,
        max_workers: int | None = None,
        show_progress: bool | None = None,
    ):
        cfg = yaml_config.pipeline
        self.reader = reader
        self.splitter = splitter
        self.title_determiner = title_determiner
        self.store_writer = store_writer
        self.max_workers = max_workers or cfg.max_workers
        self.show_progress = cfg.show_progress if show_progress is None else show_progress

    def process(self, raw: RawInput | bytes) -> UnitResult:
        if not isinstance(raw, RawInput):
            raw = RawInput(data=bytes(raw))
        result = UnitResult(source=raw.source)
        try:
            result.stage = "reader"
            document = self.reader.read(raw)

            result.stage = "splitter"
            chunks = self.splitter.split(document)
            result.chunks = len(chunks)

            result.stage = "title_determiner"
            chunks = self.title_determiner.determine(chunks)
            if chunks:
                result.game_title = chunks[0].metadata.get(
                    self.title_determiner.metadata_key
                )

            result.stage = "store_writer"
            result.written = self.store_writer.write(chunks)
            result.status = "written" if result.written else "skipped"
        except LoaderError as e:
            result.status = "failed"
            result.error = str(e)
            log.error(
                "Unit %s failed at %s after %d chunks: %s",
                raw.source,
                result.stage,
                result.chunks,
                e,
            )
        except Exception as e:
            result.status = "failed"
            result.error = f"{type(e).__name__}: {e}"
            log.error(
                "Unit %s failed unexpectedly at %s: %s",
                raw.source,
                result.stage,
                e,
                exc_info=True,
            )
        return result

    def run(self, inputs: Iterable[RawInput | bytes]) -> PipelineReport:
        units = list(inputs)
        report = PipelineReport()
        if not units:
            log.warning("No documents found to ingest.")
            return report

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(self.process, raw) for raw in units]
            completed = as_completed(futures)
            if self.show_progress:
                completed = tqdm(completed, total=len(futures), desc="Loading documents")
            for future in completed:
                report.results.append(future.result())

        log.info(
            "Processed %d units: %d written (%d chunks), %d skipped, %d failed",
            len(units),
            report.written,
            report.documents_written,
            report.skipped,
            report.failed,
        )
        return report


def write_manifest(report: PipelineReport, out: Path) -> Path:
    """
    Dump every unit result as indented JSON (for audit/debug).
    """
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(
        orjson.dumps([asdict(r) for r in report.results], option=orjson.OPT_INDENT_2)
    )
    log.info("Wrote manifest to %s", out)
    return out


class PipelineRunner:
    """The single trigger: drive every pending input through the pipeline once."""

    def __init__(
        self,
        pipeline: IngestPipeline,
        inputs: Sequence[RawInput | bytes],
        manifest_path: Path | None = None,
    ):
        self.pipeline = pipeline
        self.inputs: List[RawInput | bytes] = list(inputs)
        self.manifest_path = manifest_path
        self.report: PipelineReport | None = None

    def run(self) -> PipelineReport:
        log.info("Starting vector store loader...")
        try:
            self.report = self.pipeline.run(self.inputs)
            if self.manifest_path is not None:
                write_manifest(self.report, self.manifest_path)
        finally:
            log.info("Vector store loading completed.")
        return self.report
