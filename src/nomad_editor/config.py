"""Editor configuration from ``NOMAD_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from nomad_editor.transform import BACKENDS, build_transformer
from nomad_editor.transform.anthropic_backend import DEFAULT_MAX_TOKENS, DEFAULT_MODEL
from nomad_editor.transform.base import Transformer

ENV_PREFIX = "NOMAD_"
DEFAULT_TRANSFORM_TIMEOUT = 30.0


def _env_float(environ: Mapping[str, str], key: str, fallback: float) -> float:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


def _env_int(environ: Mapping[str, str], key: str, fallback: int) -> int:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    transform_backend: str = "placeholder"
    # seconds; None waits forever
    transform_timeout: Optional[float] = DEFAULT_TRANSFORM_TIMEOUT
    anthropic_model: str = DEFAULT_MODEL
    anthropic_max_tokens: int = DEFAULT_MAX_TOKENS
    log_level: str = "INFO"
    log_file: str = ""

    def __post_init__(self) -> None:
        if self.transform_backend not in BACKENDS:
            raise ValueError(
                f"Unknown transform backend '{self.transform_backend}' "
                f"(expected one of {', '.join(BACKENDS)})"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        timeout = _env_float(env, "TRANSFORM_TIMEOUT", DEFAULT_TRANSFORM_TIMEOUT)
        return cls(
            transform_backend=env.get(f"{ENV_PREFIX}TRANSFORM", "placeholder"),
            transform_timeout=timeout if timeout > 0 else None,
            anthropic_model=env.get(f"{ENV_PREFIX}ANTHROPIC_MODEL", DEFAULT_MODEL),
            anthropic_max_tokens=_env_int(
                env, "ANTHROPIC_MAX_TOKENS", DEFAULT_MAX_TOKENS
            ),
            log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE", ""),
        )

    def with_overrides(self, **changes: object) -> "EditorConfig":
        """Copy with every non-None value in ``changes`` applied.

        A ``transform_timeout`` of 0 or less removes the bound, as in
        ``from_env``.
        """

        applied = {key: value for key, value in changes.items() if value is not None}
        timeout = applied.get("transform_timeout")
        if isinstance(timeout, (int, float)) and timeout <= 0:
            applied["transform_timeout"] = None
        return replace(self, **applied)

    def build_transformer(self) -> Transformer:
        return build_transformer(
            self.transform_backend,
            model=self.anthropic_model,
            max_tokens=self.anthropic_max_tokens,
        )


__all__ = ["EditorConfig", "ENV_PREFIX", "DEFAULT_TRANSFORM_TIMEOUT"]
