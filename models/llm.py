from __future__ import annotations

import instructor
from openai import OpenAI

from common.config import secrets, yaml_config
from common.logger import get_logger

log = get_logger(__name__)


def load_structured_llm(config_section="llm_classification"):
    """
    Build an instructor-patched client for structured (pydantic) responses,
    based on a config section of config.yaml.
    """
    cfg = getattr(yaml_config, config_section)

    if cfg.provider in ("ollama", "openai"):
        log.info("Using %s model '%s' at %s", cfg.provider, cfg.model_name, cfg.base_url)
        return instructor.from_openai(
            OpenAI(base_url=cfg.base_url, api_key=secrets.llm_api_key),
            mode=instructor.Mode.JSON,
        )
    else:
        raise ValueError(f"Unsupported provider: {cfg.provider}")
