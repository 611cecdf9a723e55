import os
from pathlib import Path

from pydantic_settings import BaseSettings

DATA_DIR = Path(__file__).resolve().parent / "data"


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_fallback_model: str = "gemini-2.5-flash-lite"  # used after rate-limit retries run out
    max_retries: int = 3
    initial_retry_delay_s: float = 2.0
    max_retry_delay_s: float = 10.0
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    # Skill extraction / matching
    chunk_size: int = 2000
    chunk_overlap: int = 200
    extraction_timeout_s: float = 60.0  # per document; on timeout the side is treated as empty
    partial_match_threshold: float = 0.3
    taxonomy_seed_path: str = str(DATA_DIR / "skill_taxonomy.json")

    # Sessions
    max_sessions: int = 1000  # oldest analysis is evicted past this count

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
