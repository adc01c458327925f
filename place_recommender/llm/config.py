from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("RECOMMENDER_MODEL", "llama-3.3-70b-versatile")
    # Compound models run web search server-side
    search_model: str = os.getenv("RECOMMENDER_SEARCH_MODEL", "groq/compound")
    fast_model: str = os.getenv("RECOMMENDER_FAST_MODEL", "llama-3.1-8b-instant")
    language: str = os.getenv("RECOMMENDER_LANGUAGE", "Korean")
    timeout: float = 30.0
    max_tokens: int = 2048
    enabled: bool = True


DEFAULT_LLM_CONFIG = LLMConfig()
