from __future__ import annotations

from typing import Any, Dict, Protocol

from langchain_core.prompts import PromptTemplate
from pydantic import BaseModel, ConfigDict, Field

from common.config import yaml_config
from common.logger import get_logger
from models.llm import load_structured_llm

log = get_logger(__name__)


class GameTitle(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    title: str = Field(min_length=1)

    @property
    def normalized_title(self) -> str:
        return normalize_title(self.title)


def normalize_title(title: str) -> str:
    return title.lower().replace(" ", "_")


class GameTitleClassifier(Protocol):
    def classify(
        self, prompt: PromptTemplate, variables: Dict[str, Any]
    ) -> GameTitle: ...


class TitleClassifier:
    """
    Ask the configured LLM which game a document describes. The response is
    parsed straight into a GameTitle; anything that does not fit the schema
    raises once instructor runs out of retries.
    """

    def __init__(self, client=None, config_section: str = "llm_classification"):
        cfg = getattr(yaml_config, config_section)
        self.model = cfg.model_name
        self.temperature = cfg.temperature
        self.max_retries = cfg.max_retries
        self._client = client or load_structured_llm(config_section)

    def classify(self, prompt: PromptTemplate, variables: Dict[str, Any]) -> GameTitle:
        content = prompt.format(**variables)
        return self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": content}],
            response_model=GameTitle,
            temperature=self.temperature,
            max_retries=self.max_retries,
        )
