"""Text-transform collaborators and the bounded call wrapper."""

from __future__ import annotations

from .anthropic_backend import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, AnthropicTransformer
from .base import PlaceholderTransformer, TransformOutcome, Transformer, run_transform

BACKENDS = ("placeholder", "anthropic")


def build_transformer(
    backend: str = "placeholder",
    *,
    model: str = DEFAULT_MODEL,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> Transformer:
    if backend == "placeholder":
        return PlaceholderTransformer()
    if backend == "anthropic":
        return AnthropicTransformer(model=model, max_tokens=max_tokens)
    raise ValueError(f"Unknown transform backend '{backend}'")


__all__ = [
    "AnthropicTransformer",
    "BACKENDS",
    "PlaceholderTransformer",
    "TransformOutcome",
    "Transformer",
    "build_transformer",
    "run_transform",
]
