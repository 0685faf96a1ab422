from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_GEMINI_MODEL = "gemini-2.5-pro"
DEFAULT_PROVIDER = "OpenAI"

# env var -> option field; first hit wins for aliased keys
ENV_FIELDS = (
    ("OPENAI_API_KEY", "openai_apikey"),
    ("OPENAI_MODEL", "openai_model"),
    ("GOOGLE_API_KEY", "gemini_apikey"),
    ("GEMINI_API_KEY", "gemini_apikey"),
    ("GEMINI_MODEL", "gemini_model"),
    ("DEFAULT_PROVIDER", "default_provider"),
    ("SYSTEM_PROMPT", "system_prompt"),
    ("OPENAI_BASE_URL", "openai_base_url"),
    ("GEMINI_BASE_URL", "gemini_base_url"),
    ("CORRECTOR_TIMEOUT_S", "timeout_s"),
)


class CorrectorOptions(BaseModel):
    """User configuration, read-only for the duration of an invocation."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    openai_apikey: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    gemini_apikey: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    default_provider: str = DEFAULT_PROVIDER

    system_prompt: Optional[str] = None
    fix_grammar_prompt: Optional[str] = None
    make_formal_prompt: Optional[str] = None
    make_friendly_prompt: Optional[str] = None
    custom_prompt: Optional[str] = None
    american_english_prompt: Optional[str] = None

    openai_base_url: str = "https://api.openai.com/v1"
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    timeout_s: float = 30.0
    max_tokens: int = 20000
    temperature: float = 0.3

    @field_validator("openai_model", mode="before")
    @classmethod
    def _openai_model_default(cls, v: Any) -> Any:
        return v if v and str(v).strip() else DEFAULT_OPENAI_MODEL

    @field_validator("gemini_model", mode="before")
    @classmethod
    def _gemini_model_default(cls, v: Any) -> Any:
        return v if v and str(v).strip() else DEFAULT_GEMINI_MODEL

    @field_validator("default_provider", mode="before")
    @classmethod
    def _provider_default(cls, v: Any) -> Any:
        return v if v and str(v).strip() else DEFAULT_PROVIDER

    @classmethod
    def from_env(cls, **overrides: Any) -> "CorrectorOptions":
        values: Dict[str, Any] = {}
        for env, field in ENV_FIELDS:
            v = os.getenv(env)
            if v and field not in values:
                values[field] = v
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**values)
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            raise ConfigurationError("Invalid configuration: " + ", ".join(fields or ["options"])) from e


def load_env_file(path: Path | None = None) -> int:
    """Load KEY=VALUE lines from a .env file without overriding the real environment.

    Returns the number of variables set.
    """
    env_path = path or Path.cwd() / ".env"
    if not env_path.exists():
        return 0
    count = 0
    for line in env_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        k = k.strip(); v = v.strip().strip('"').strip("'")
        if k and v and k not in os.environ:
            os.environ[k] = v
            count += 1
    logger.debug("loaded %d variables from %s", count, env_path)
    return count
