import os

from pydantic import BaseModel


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    # Charset used for source files when the caller does not pass one
    DEFAULT_CHARSET: str = os.getenv("DEFAULT_CHARSET", "utf-8")

    # Fingerprinting: lines before and after the affected line
    FINGERPRINT_CONTEXT_LINES: int = int(os.getenv("FINGERPRINT_CONTEXT_LINES", "3"))
    FINGERPRINT_COLLAPSE_WHITESPACE: bool = _env_bool("FINGERPRINT_COLLAPSE_WHITESPACE", "true")

    # Diagnostics
    FILTERED_LOG_MAX_LINES: int = int(os.getenv("FILTERED_LOG_MAX_LINES", "20"))

    # Duplicate code thresholds (number of duplicated lines)
    SIMIAN_HIGH_THRESHOLD: int = int(os.getenv("SIMIAN_HIGH_THRESHOLD", "50"))
    SIMIAN_NORMAL_THRESHOLD: int = int(os.getenv("SIMIAN_NORMAL_THRESHOLD", "25"))


settings = Settings()
