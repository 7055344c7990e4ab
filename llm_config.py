"""
Central configuration for the workout coach app.

- LLM_BASE_URL: base URL of the OpenAI-compatible chat-completions server.
- BASE_MODEL_NAME: name/path of the underlying model.
- GENERATOR_MODEL_NAME: model used to generate new plans (defaults to base).
- MODIFIER_MODEL_NAME: model used by the plan chat (defaults to base).
- DATA_DIR: directory holding the local storage document.
"""

import os
from typing import Optional


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


# Base URL for your vLLM / OpenAI-compatible server
LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "http://127.0.0.1:8000").rstrip("/")

# Underlying model name/path
BASE_MODEL_NAME: str = os.getenv("BASE_MODEL_NAME", "Qwen/Qwen2.5-7B-Instruct")

# Logical model names for the two gateways
GENERATOR_MODEL_NAME: str = os.getenv("GENERATOR_MODEL_NAME", BASE_MODEL_NAME)
MODIFIER_MODEL_NAME: str = os.getenv("MODIFIER_MODEL_NAME", BASE_MODEL_NAME)

# Optional API key
LLM_API_KEY: str | None = os.getenv("LLM_API_KEY", None)

# HTTP timeout in seconds; unset means wait for the server or the transport
LLM_TIMEOUT: float | None = _float_env("LLM_TIMEOUT", None)

# Output token ceiling for both gateways
PLAN_MAX_TOKENS: int = _int_env("PLAN_MAX_TOKENS", 4096)

LLM_TEMPERATURE: float = _float_env("LLM_TEMPERATURE", 0.7)

# Local storage
DATA_DIR: str = os.getenv("DATA_DIR", "user_data")
LOCAL_STORAGE_QUOTA_BYTES: int = _int_env("LOCAL_STORAGE_QUOTA_BYTES", 5 * 1024 * 1024)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
