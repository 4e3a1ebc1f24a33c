"""Generation gateway: the one place where prompts meet the model.

Wraps an injected ``ModelCall`` transport, scrubs model artifacts from every
reply, and applies the minimum-length retry policy for full drafts.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from content_wizard.config import RetryHistory, WizardConfig
from content_wizard.errors import GenerationError

LOGGER = logging.getLogger(__name__)

SHORT_DRAFT_CORRECTION = """Your previous response contained only {actual} words. The content MUST contain at least {required} words.

Rewrite the COMPLETE piece now:
- Keep the same HTML structure and every section from the outline
- Expand each section with more detail, examples and explanation
- Return only the HTML content, with no commentary"""

_FENCE_RE = re.compile(r"```[a-zA-Z]*")
# Footnotes are at most three digits; a bracketed year is content
_CITATION_RE = re.compile(r"[ \t]?\[\d{1,3}\]")
_BOLD_RE = re.compile(r"\*\*")
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_BR_BETWEEN_TAGS_RE = re.compile(r">\s*(?:<br\s*/?>\s*)+<", re.IGNORECASE)
_EDGE_BR_RE = re.compile(r"^(?:\s*<br\s*/?>)+|(?:<br\s*/?>\s*)+$", re.IGNORECASE)
_OUTER_DIV_RE = re.compile(r"^<div(?:\s[^>]*)?>(.*)</div>$", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")


def clean_model_output(text: str, unwrap: bool = True) -> str:
    """Strip the artifacts models add around otherwise usable replies.

    With ``unwrap`` a single <div> wrapping the whole reply is removed; editing
    replies pass False because there the wrapper is the requested block.
    """
    cleaned = _FENCE_RE.sub("", text)
    cleaned = cleaned.replace("&lt;", "<").replace("&gt;", ">")
    cleaned = _CITATION_RE.sub("", cleaned)
    cleaned = _BOLD_RE.sub("", cleaned)
    cleaned = _BR_BETWEEN_TAGS_RE.sub("><", cleaned)
    cleaned = _EDGE_BR_RE.sub("", cleaned.strip())
    cleaned = cleaned.strip()

    # A single <div> wrapping the whole reply is packaging, not structure
    match = _OUTER_DIV_RE.match(cleaned) if unwrap else None
    if match and "<div" not in match.group(1).lower():
        cleaned = match.group(1).strip()

    return cleaned


def count_words(text: str) -> int:
    """Whitespace-delimited word count, ignoring HTML tags."""
    plain = _TAG_RE.sub(" ", _BR_RE.sub(" ", text))
    return len(plain.split())


def compact_html(text: str) -> str:
    """Collapse whitespace, including whitespace between and inside tags."""
    compact = re.sub(r"\s+", " ", text.strip())
    compact = re.sub(r">\s+<", "><", compact)
    compact = re.sub(r"\s+>", ">", compact)
    return re.sub(r"<\s+", "<", compact)


class GenerationGateway:
    """Issues prompts through a model transport and returns cleaned text."""

    def __init__(
        self,
        model_call: Callable[..., str],
        config: WizardConfig | None = None,
        on_log: callable = None,
    ):
        self.model_call = model_call
        self.config = config or WizardConfig()
        self._log = on_log or (lambda s, m: None)

    def _call(self, messages: list[dict[str, str]], max_tokens: int, unwrap: bool = True) -> str:
        try:
            raw = self.model_call(
                messages,
                temperature=self.config.temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            LOGGER.warning("Model call failed: %s", e)
            raise GenerationError(str(e) or "Failed to generate content. Please try again.") from e

        text = clean_model_output(raw or "", unwrap)
        if not text:
            raise GenerationError("The model returned an empty response")
        return text

    @staticmethod
    def _messages(prompt: str, system_instruction: str | None) -> list[dict[str, str]]:
        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": prompt})
        return messages

    def generate(
        self,
        prompt: str,
        system_instruction: str | None = None,
        *,
        max_tokens: int | None = None,
        unwrap: bool = True,
    ) -> str:
        """Run a single prompt.

        Raises:
            GenerationError: On any transport failure or an empty reply.
        """
        return self._call(
            self._messages(prompt, system_instruction),
            max_tokens or self.config.max_tokens,
            unwrap,
        )

    def generate_long(
        self,
        prompt: str,
        system_instruction: str | None = None,
        *,
        min_words: int | None = None,
    ) -> str:
        """Draft full content, re-asking while the reply is too short.

        After each reply the words are counted; below ``min_words`` the call is
        re-issued with a corrective instruction. ``config.content_max_attempts``
        bounds the total number of calls, the first one included. The longest
        draft is returned.
        """
        required = self.config.min_content_words if min_words is None else min_words
        base_messages = self._messages(prompt, system_instruction)
        max_tokens = self.config.max_tokens

        latest = self._call(base_messages, max_tokens)
        best = latest
        history = list(base_messages)

        for attempt in range(1, self.config.content_max_attempts):
            actual = count_words(latest)
            if actual >= required:
                break

            self._log("Gateway", f"Draft too short ({actual}/{required} words), retry {attempt}")
            LOGGER.info("Short draft: %d of %d words, retry %d", actual, required, attempt)

            correction = {
                "role": "user",
                "content": SHORT_DRAFT_CORRECTION.format(actual=actual, required=required),
            }
            reply = {"role": "assistant", "content": latest}
            if self.config.retry_history == RetryHistory.FULL:
                history.extend([reply, correction])
                messages = list(history)
            else:
                messages = base_messages + [reply, correction]

            latest = self._call(messages, max_tokens)
            if count_words(latest) >= count_words(best):
                best = latest

        if count_words(best) < required:
            LOGGER.warning("Returning short draft: %d of %d words", count_words(best), required)
        return best
