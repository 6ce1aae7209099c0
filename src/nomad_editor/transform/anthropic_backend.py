"""Transform backend calling the Anthropic Messages API."""

from __future__ import annotations

from typing import Any, Optional

import anthropic

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_MAX_TOKENS = 1024

SYSTEM_PROMPT = """You edit plain-text notes.
You receive an instruction and the full note between <note> tags.
Reply with the requested result only, no preamble."""


class AnthropicTransformer:
    name = "anthropic"

    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: Optional[Any] = None,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = anthropic.Anthropic()
        return self._client

    def transform(self, instruction: str, content: str) -> str:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=SYSTEM_PROMPT,
            messages=[
                {
                    "role": "user",
                    "content": f"{instruction}\n\n<note>\n{content}\n</note>",
                }
            ],
        )
        parts = [block.text for block in response.content if block.type == "text"]
        if not parts:
            raise RuntimeError("empty response from model")
        return "".join(parts)


__all__ = ["AnthropicTransformer", "DEFAULT_MAX_TOKENS", "DEFAULT_MODEL"]
