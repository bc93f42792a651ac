from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

class AppConfig(BaseModel):
    data_dir: Path = Path("data/docs")
    persist_dir: Path = Path("data/chroma")
    cache_dir: Path = Path("data/cache")
    collection: str = "games"
    allowed_exts: tuple[str, ...] = (".pdf", ".txt", ".md", ".html", ".htm")

class VectorStoreConfig(BaseModel):
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    write_attempts: int = Field(default=3, ge=1)

class ChunkingConfig(BaseModel):
    encoding_name: str = "cl100k_base"
    chunk_size: int = Field(default=800, gt=0)
    chunk_overlap: int = Field(default=0, ge=0)
    max_chunks: int = Field(default=10000, gt=0)

class ClassificationConfig(BaseModel):
    prompt_path: Path = Path("prompts/name_of_the_game.txt")
    sentinel: str = "UNKNOWN"
    metadata_key: str = "gameTitle"

class LLMConfig(BaseModel):
    provider: str = "ollama"
    model_name: str = "mistral"
    temperature: float = 0.0
    base_url: str = "http://localhost:11434/v1"
    max_retries: int = 2

class PipelineConfig(BaseModel):
    max_workers: int = Field(default=4, ge=1)
    show_progress: bool = True

class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")

class GlobalYAMLConfig(BaseModel):
    app: AppConfig = AppConfig()
    vectorstore: VectorStoreConfig = VectorStoreConfig()
    chunking: ChunkingConfig = ChunkingConfig()
    classification: ClassificationConfig = ClassificationConfig()
    llm_classification: LLMConfig = LLMConfig()
    pipeline: PipelineConfig = PipelineConfig()
    logging: LoggingConfig = LoggingConfig()

def load_yaml_config(path: Path = Path("config/config.yaml")) -> GlobalYAMLConfig:
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    return GlobalYAMLConfig(**raw)

class Secrets(BaseSettings):
    llm_api_key: str = "ollama"

    class Config:
        env_file = ".env"
        extra = "ignore"

yaml_config = load_yaml_config()
secrets = Secrets()
