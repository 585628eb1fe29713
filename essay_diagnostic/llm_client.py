"""
External language-model client

Thin async wrapper over the Anthropic Messages API exposing the single
operation the pipeline needs:

    await client.generate(user_instruction, system_instruction=...,
                          temperature=..., max_output_tokens=...,
                          structured_output=True)

Structured calls return a parsed dict; free-form calls return the text.
Any object with the same coroutine can stand in for LLMClient (the tests
inject fakes).
"""

import json
from typing import Any, Dict, List, Optional, Union

from anthropic import AsyncAnthropic

from .config import Settings, get_settings
from .errors import MalformedModelOutput
from .logging_helper import get_logger

log = get_logger(__name__)


def _flatten_content(content_blocks) -> str:
    """Anthropic returns a list of blocks; join their text"""
    parts = []
    for block in content_blocks:
        if hasattr(block, "text"):
            parts.append(block.text)
        elif isinstance(block, str):
            parts.append(block)
    return "".join(parts)


def parse_json_response(response_text: str) -> Dict[str, Any]:
    """
    Parse a structured model response into a dict.

    Handles markdown-fenced JSON and stray prose around the object.
    Raises MalformedModelOutput when no JSON object can be recovered.
    """
    text = (response_text or "").strip()

    # Handle potential markdown wrapping
    if text.startswith("```"):
        parts = text.split("```")
        text = parts[1] if len(parts) > 1 else ""
        if text.startswith("json"):
            text = text[4:]
        text = text.strip()

    if not text.startswith("{"):
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            raise MalformedModelOutput("No JSON object in model response", raw=response_text or "")
        text = text[start:end + 1]

    try:
        result = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedModelOutput(f"Failed to parse model response as JSON: {e}", raw=response_text)

    if not isinstance(result, dict):
        raise MalformedModelOutput("Model response JSON is not an object", raw=response_text)
    return result


class LLMClient:
    """Async Anthropic client implementing generate()"""

    def __init__(self, settings: Optional[Settings] = None, api_key: Optional[str] = None):
        self.settings = settings or get_settings(api_key=api_key)
        key = api_key or self.settings.api_key
        if not key:
            raise ValueError("ANTHROPIC_API_KEY not set")

        self.model = self.settings.model
        self._client = AsyncAnthropic(api_key=key, timeout=self.settings.request_timeout)

    async def generate(
        self,
        user_instruction: str,
        *,
        system_instruction: Optional[str] = None,
        temperature: float = 0.3,
        max_output_tokens: int = 2048,
        structured_output: bool = False,
    ) -> Union[Dict[str, Any], str]:
        messages: List[Dict[str, str]] = [{"role": "user", "content": user_instruction}]
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_output_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system_instruction:
            kwargs["system"] = system_instruction

        response = await self._client.messages.create(**kwargs)
        response_text = _flatten_content(response.content).strip()

        if getattr(response, "stop_reason", None) == "max_tokens":
            log.warning(f"⚠ Model response hit the {max_output_tokens}-token limit and may be truncated")

        if structured_output:
            return parse_json_response(response_text)
        return response_text

    async def close(self):
        await self._client.close()
