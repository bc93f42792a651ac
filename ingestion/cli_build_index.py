from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

from chains.prompts import load_prompt_template
from chains.title_classifier import TitleClassifier
from common.config import yaml_config
from common.logger import get_logger
from ingestion.document_models import RawInput
from ingestion.ingest_pipeline import IngestPipeline, PipelineRunner
from ingestion.readers import DocumentReader
from ingestion.splitters import Splitter
from ingestion.store_writer import StoreWriter
from ingestion.title_determiner import TitleDeterminer
from vectorstore.chroma_store import ChromaStore

log = get_logger(__name__)


def discover_files(root: Path) -> List[Path]:
    """
    Recursively find all supported files in the input directory.
    Supported extensions are defined in config/config.yaml (app section).
    """
    allowed_exts = tuple(e.lower() for e in yaml_config.app.allowed_exts)
    return sorted(
        p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in allowed_exts
    )


def load_inputs(paths: List[Path]) -> List[RawInput]:
    return [RawInput(data=p.read_bytes(), source=p.name) for p in paths]


def build_pipeline(
    collection_name: str | None = None,
    max_workers: int | None = None,
    show_progress: bool | None = None,
) -> IngestPipeline:
    """
    Wire the four stages once at startup. The prompt template is loaded here
    and reused for every unit.
    """
    store = ChromaStore(collection_name=collection_name)
    determiner = TitleDeterminer(
        classifier=TitleClassifier(),
        prompt=load_prompt_template(),
    )
    return IngestPipeline(
        reader=DocumentReader(),
        splitter=Splitter(),
        title_determiner=determiner,
        store_writer=StoreWriter(store),
        max_workers=max_workers,
        show_progress=show_progress,
    )


def main():
    parser = argparse.ArgumentParser(
        description="Classify game documents and load them into the Chroma index."
    )
    parser.add_argument(
        "--input_dir",
        type=str,
        default=str(yaml_config.app.data_dir),
        help="Folder with PDF/TXT/MD/HTML files",
    )
    parser.add_argument(
        "--collection",
        type=str,
        default=yaml_config.app.collection,
        help="Chroma collection name",
    )
    parser.add_argument("--max_workers", type=int, default=None)
    parser.add_argument(
        "--manifest",
        action="store_true",
        help="Write a JSON manifest of unit results to the cache dir",
    )
    parser.add_argument("--no-progress", dest="show_progress", action="store_false")
    args = parser.parse_args()

    input_dir = Path(args.input_dir)
    if not input_dir.exists():
        log.error("Input directory does not exist: %s", input_dir)
        raise SystemExit(1)

    files = discover_files(input_dir)
    log.info("Discovered %d files", len(files))

    manifest_path = None
    if args.manifest:
        manifest_path = yaml_config.app.cache_dir / f"manifest_{args.collection}.json"

    pipeline = build_pipeline(
        collection_name=args.collection,
        max_workers=args.max_workers,
        show_progress=args.show_progress,
    )
    PipelineRunner(pipeline, load_inputs(files), manifest_path=manifest_path).run()


if __name__ == "__main__":
    main()
