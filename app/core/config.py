import os
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

load_dotenv()


class Settings(BaseModel):
    """Application settings loaded from environment: lexicon version, key-point limits, transcript size limit, rate limit and log level.
    Why available: Single source of configuration so the engine, API and scripts use consistent limits."""
    lexicon_version: str = os.getenv("LEXICON_VERSION", "v1")
    max_key_points: int = int(os.getenv("MAX_KEY_POINTS", "8"))
    min_key_point_chars: int = int(os.getenv("MIN_KEY_POINT_CHARS", "5"))
    key_point_max_chars: int = int(os.getenv("KEY_POINT_MAX_CHARS", "100"))
    enhance_max_chars: int = int(os.getenv("ENHANCE_MAX_CHARS", "20"))  # shorter points get annotated
    max_transcript_kb: int = int(os.getenv("MAX_TRANSCRIPT_KB", "1024"))  # 1 MB max transcript
    rate_limit_requests: int = int(os.getenv("RATE_LIMIT_REQUESTS", "20"))
    rate_limit_window_seconds: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
    max_finished_jobs: int = int(os.getenv("MAX_FINISHED_JOBS", "500"))  # oldest done/failed jobs are evicted beyond this
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @field_validator(
        "max_key_points",
        "min_key_point_chars",
        "key_point_max_chars",
        "enhance_max_chars",
        "max_transcript_kb",
        "rate_limit_requests",
        "rate_limit_window_seconds",
        "max_finished_jobs",
    )
    @classmethod
    def must_be_positive(cls, v):
        """Ensure limits are positive integers. Prevents invalid config from env."""
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v):
        """Normalize LOG_LEVEL to upper case and reject unknown level names."""
        level = (v or "").strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level


settings = Settings()
