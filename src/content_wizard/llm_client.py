"""LLM transports for Anthropic Claude and OpenAI-compatible chat endpoints.

Both transports take chat-style ``messages`` (``{"role", "content"}`` dicts)
and return the reply text. They raise whatever their underlying library
raises; the generation gateway turns those failures into GenerationError.
"""

from __future__ import annotations

import os
from typing import Any, Callable, Protocol

import anthropic
import requests

from content_wizard.config import Provider, WizardConfig

DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"
DEFAULT_OPENAI_MODEL = "deepseek-chat"
DEFAULT_OPENAI_BASE = "https://api.deepseek.com"


class ModelCall(Protocol):
    def __call__(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str: ...


def _get_client() -> anthropic.Anthropic:
    """Create an Anthropic client."""
    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        raise ValueError("ANTHROPIC_API_KEY environment variable is not set")
    return anthropic.Anthropic(api_key=api_key)


def _split_system(messages: list[dict[str, str]]) -> tuple[str, list[dict[str, str]]]:
    """Pull system messages out; Anthropic takes them as a separate argument."""
    system_parts = [m["content"] for m in messages if m["role"] == "system"]
    chat_messages = [m for m in messages if m["role"] != "system"]
    return "\n\n".join(system_parts), chat_messages


def anthropic_chat(
    messages: list[dict[str, str]],
    *,
    temperature: float = 0.7,
    max_tokens: int = 4096,
    model: str | None = None,
) -> str:
    """Send a conversation to Claude and return the text response.

    Args:
        messages: Chat messages; any ``system`` entries become the system prompt.
        temperature: Sampling temperature.
        max_tokens: Upper bound on reply length.
        model: Override the model (default: from MODEL env var).

    Returns:
        The model's text response.
    """
    client = _get_client()

    model_id = model or os.environ.get("MODEL", DEFAULT_ANTHROPIC_MODEL)
    # Strip provider prefixes if present
    for prefix in ("anthropic/", "claude/"):
        if model_id.startswith(prefix):
            model_id = model_id[len(prefix):]

    system_prompt, chat_messages = _split_system(messages)

    create_kwargs: dict[str, Any] = {
        "model": model_id,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "messages": chat_messages,
    }
    if system_prompt:
        create_kwargs["system"] = system_prompt

    response = client.messages.create(**create_kwargs)

    text_parts = [
        block.text for block in response.content
        if hasattr(block, "text") and block.text
    ]
    return "\n".join(text_parts)


def openai_compatible_chat(
    messages: list[dict[str, str]],
    *,
    temperature: float = 0.7,
    max_tokens: int = 4096,
    model: str | None = None,
    api_base: str | None = None,
    timeout: float = 60.0,
) -> str:
    """Call a ``/chat/completions`` endpoint (DeepSeek by default).

    Returns:
        ``choices[0].message.content`` from the response body, or an empty
        string when the endpoint returned no choices.
    """
    api_key = os.environ.get("LLM_API_KEY") or os.environ.get("DEEPSEEK_API_KEY")
    if not api_key:
        raise ValueError("LLM_API_KEY (or DEEPSEEK_API_KEY) environment variable is not set")

    base = (api_base or DEFAULT_OPENAI_BASE).rstrip("/")
    resp = requests.post(
        f"{base}/chat/completions",
        json={
            "model": model or DEFAULT_OPENAI_MODEL,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        },
        headers={"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"},
        timeout=timeout,
    )
    resp.raise_for_status()
    data = resp.json()

    choices = data.get("choices") or []
    if not choices:
        return ""
    return (choices[0].get("message") or {}).get("content") or ""


def build_model_call(config: WizardConfig) -> Callable[..., str]:
    """Bind the configured transport into a ``ModelCall``."""
    if config.provider == Provider.OPENAI:
        def openai_call(messages, *, temperature, max_tokens):
            return openai_compatible_chat(
                messages,
                temperature=temperature,
                max_tokens=max_tokens,
                model=config.model,
                api_base=config.api_base,
                timeout=config.request_timeout,
            )
        return openai_call

    def anthropic_call(messages, *, temperature, max_tokens):
        return anthropic_chat(
            messages,
            temperature=temperature,
            max_tokens=max_tokens,
            model=config.model,
        )
    return anthropic_call
