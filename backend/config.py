from pathlib import Path

from pydantic_settings import BaseSettings

_DATA_DIR = Path(__file__).resolve().parent / "services" / "data"


class Settings(BaseSettings):
    # Embedding generator
    embedding_backend: str = "hashing"  # "hashing" | "sbert"
    embedding_dimension: int = 128
    embedding_stop_words: bool = True
    sbert_model_name: str = "TechWolf/JobBERT-v2"

    # Externally loadable vocabulary and section rules
    skill_vocabulary_path: str = str(_DATA_DIR / "skill_vocabulary.yaml")
    section_rules_path: str = str(_DATA_DIR / "section_rules.yaml")

    # Batch scoring worker pool
    max_workers: int = 4

    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


settings = Settings()
