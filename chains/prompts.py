from __future__ import annotations

from pathlib import Path

from langchain_core.prompts import PromptTemplate

from common.config import yaml_config


def load_prompt_template(path: Path | None = None) -> PromptTemplate:
    """
    Load the game-title prompt once at startup. The template has a single
    {document} slot.
    """
    path = Path(path or yaml_config.classification.prompt_path)
    template = PromptTemplate.from_file(str(path), encoding="utf-8")
    if template.input_variables != ["document"]:
        raise ValueError(
            f"Prompt {path} must have exactly one 'document' slot, "
            f"found {template.input_variables}"
        )
    return template
