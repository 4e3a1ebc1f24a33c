"""Runtime configuration for the wizard, read from the environment."""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from content_wizard.constants import GENERATION_DEFAULTS

LOGGER = logging.getLogger(__name__)


class Provider(str, Enum):
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


class RetryHistory(str, Enum):
    """How much conversation a short-draft retry re-sends to the model."""

    LATEST = "latest"
    FULL = "full"


class WizardConfig(BaseModel):
    """Generation settings shared by the gateway and the step machine."""

    provider: Provider = Provider.ANTHROPIC
    model: Optional[str] = None
    api_base: Optional[str] = None
    temperature: float = GENERATION_DEFAULTS["temperature"]
    max_tokens: int = GENERATION_DEFAULTS["max_tokens"]
    outline_max_tokens: int = GENERATION_DEFAULTS["outline_max_tokens"]
    enhance_max_tokens: int = GENERATION_DEFAULTS["enhance_max_tokens"]
    insert_max_tokens: int = GENERATION_DEFAULTS["insert_max_tokens"]
    min_content_words: int = Field(default=GENERATION_DEFAULTS["min_content_words"], ge=0)
    content_max_attempts: int = Field(default=GENERATION_DEFAULTS["content_max_attempts"], ge=1)
    retry_history: RetryHistory = RetryHistory.LATEST
    request_timeout: float = 60.0
    max_selected_keywords: int = GENERATION_DEFAULTS["max_selected_keywords"]
    lsi_keyword_count: int = GENERATION_DEFAULTS["lsi_keyword_count"]


_ENV_FIELDS = {
    "LLM_PROVIDER": "provider",
    "MODEL": "model",
    "LLM_API_BASE": "api_base",
    "CONTENT_MIN_WORDS": "min_content_words",
    "CONTENT_MAX_ATTEMPTS": "content_max_attempts",
    "RETRY_HISTORY": "retry_history",
    "LLM_TIMEOUT": "request_timeout",
}


def load_config(overrides: dict | None = None) -> WizardConfig:
    """Build a config from environment variables plus explicit overrides.

    Args:
        overrides: Field values that win over the environment.

    Returns:
        A validated WizardConfig.

    Raises:
        ValueError: If an override names an unknown option.
    """
    values: dict = {}
    for env_name, field_name in _ENV_FIELDS.items():
        raw = os.environ.get(env_name)
        if raw is not None and raw.strip():
            values[field_name] = raw.strip()

    for key, value in (overrides or {}).items():
        if key not in WizardConfig.model_fields:
            raise ValueError(f"Unknown config option: {key}")
        values[key] = value

    config = WizardConfig.model_validate(values)
    LOGGER.debug("Loaded wizard config: %s", config.model_dump())
    return config
