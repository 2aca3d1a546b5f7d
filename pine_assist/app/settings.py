from __future__ import annotations

import os
from dataclasses import dataclass

try:
    from dotenv import load_dotenv
except ImportError:  # pragma: no cover - optional in minimal setups
    load_dotenv = None

if load_dotenv is not None:
    load_dotenv()


@dataclass(frozen=True)
class Settings:
    rag_data_dir: str = os.getenv("RAG_DATA_DIR", "data/pinescript-docs")
    rag_raw_docs_dir: str = os.getenv("RAG_RAW_DOCS_DIR", "data/raw/docs")
    rag_raw_scripts_dir: str = os.getenv("RAG_RAW_SCRIPTS_DIR", "data/raw/scripts")
    rag_max_docs: int = int(os.getenv("RAG_MAX_DOCS", "3"))
    rag_max_refs: int = int(os.getenv("RAG_MAX_REFS", "5"))
    rag_max_examples: int = int(os.getenv("RAG_MAX_EXAMPLES", "2"))
    bm25_k1: float = float(os.getenv("RAG_BM25_K1", "1.5"))
    bm25_b: float = float(os.getenv("RAG_BM25_B", "0.75"))
    function_boost: float = float(os.getenv("RAG_FUNCTION_BOOST", "1.5"))
    default_pine_version_raw: str = os.getenv("PINE_DEFAULT_VERSION", "v6")
    metrics_enabled: bool = os.getenv("RAG_METRICS_ENABLED", "true").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def default_pine_version(self) -> str:
        raw = os.getenv("PINE_DEFAULT_VERSION", self.default_pine_version_raw).strip().lower()
        return raw if raw in {"v5", "v6"} else "v6"


settings = Settings()
