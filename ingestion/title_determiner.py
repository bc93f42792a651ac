from __future__ import annotations

from langchain_core.prompts import PromptTemplate
from pydantic import ValidationError

from chains.title_classifier import GameTitle, GameTitleClassifier
from common.config import yaml_config
from common.errors import ClassificationError, MissingContentError
from common.logger import get_logger
from ingestion.document_models import DocumentBatch

log = get_logger(__name__)


class TitleDeterminer:
    def __init__(
        self,
        classifier: GameTitleClassifier,
        prompt: PromptTemplate,
        sentinel: str | None = None,
        metadata_key: str | None = None,
    ):
        cfg = yaml_config.classification
        self.classifier = classifier
        self.prompt = prompt
        self.sentinel = sentinel or cfg.sentinel
        self.metadata_key = metadata_key or cfg.metadata_key

    def determine(self, documents: DocumentBatch) -> DocumentBatch:
        """
        Classify a batch by its first chunk and tag every chunk with the
        normalized game title. Returns an empty list when the model answers
        with the sentinel, so unidentified content never reaches the store.
        """
        if not documents:
            return documents

        first = documents[0]
        source = first.metadata.get("source")
        if not first.page_content:
            raise MissingContentError("first chunk has no text", source=source)

        game_title = self._classify(first.page_content, source)

        if game_title.title == self.sentinel:
            log.warning(
                "Unable to determine the name of a game for %s; not adding to vector store.",
                source,
            )
            return []

        normalized = game_title.normalized_title
        log.info("Determined game title to be %s (%s)", game_title.title, source)
        for document in documents:
            document.metadata[self.metadata_key] = normalized
        return documents

    def _classify(self, text: str, source: str | None) -> GameTitle:
        try:
            result = self.classifier.classify(self.prompt, {"document": text})
        except Exception as e:
            raise ClassificationError(f"model call failed: {e}", source=source) from e
        if isinstance(result, GameTitle):
            return result
        try:
            return GameTitle.model_validate(result)
        except ValidationError as e:
            raise ClassificationError(
                f"model response does not match GameTitle: {e}", source=source
            ) from e
