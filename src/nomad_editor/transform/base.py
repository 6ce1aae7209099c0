"""Transform collaborator: instruction + buffer text in, derived text out."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional, Protocol

from nomad_editor.runtime import telemetry


class Transformer(Protocol):
    name: str

    def transform(self, instruction: str, content: str) -> str:
        ...


@dataclass(frozen=True, slots=True)
class TransformOutcome:
    """Result of one transform call: either ``text`` or an ``error`` reason."""

    ok: bool
    text: str = ""
    error: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "TransformOutcome":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, reason: str) -> "TransformOutcome":
        return cls(ok=False, error=reason)

    @property
    def message(self) -> str:
        if self.ok:
            return self.text
        return f"Transform failed: {self.error}"


class PlaceholderTransformer:
    """Echoes the request back; stands in until a model backend is set."""

    name = "placeholder"

    def transform(self, instruction: str, content: str) -> str:
        return f"Processed instruction: '{instruction}' with context: '{content}'"


class TransformTimeout(TimeoutError):
    """The transform did not answer within its time bound."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"timed out after {timeout:g}s")
        self.timeout = timeout


def run_transform(
    transformer: Transformer,
    instruction: str,
    content: str,
    *,
    timeout: Optional[float] = None,
) -> TransformOutcome:
    """Call ``transformer`` and fold any failure into a TransformOutcome.

    With a ``timeout`` the call runs on a daemon thread; on expiry the
    outcome is a failure and the thread is abandoned, not interrupted. It
    does not keep the process alive at exit.
    """

    with telemetry.span(
        "transform::run",
        component="transform",
        metadata={"backend": transformer.name, "timeout": timeout},
    ) as handle:
        try:
            if timeout is None:
                text = transformer.transform(instruction, content)
            else:
                text = _call_with_timeout(transformer, instruction, content, timeout)
        except TransformTimeout as exc:
            reason = str(exc)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
        else:
            handle.add_metadata("chars", len(text))
            return TransformOutcome.success(text)

        handle.add_metadata("error", reason)
        telemetry.record_event(
            "transform.failed",
            level="warning",
            data={"backend": transformer.name, "reason": reason},
        )
        return TransformOutcome.failure(reason)


@dataclass
class _CallResult:
    text: Optional[str] = None
    error: Optional[Exception] = None


def _call_with_timeout(
    transformer: Transformer, instruction: str, content: str, timeout: float
) -> str:
    result = _CallResult()

    def target() -> None:
        try:
            result.text = transformer.transform(instruction, content)
        except Exception as exc:
            result.error = exc

    worker = threading.Thread(target=target, name="transform", daemon=True)
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        raise TransformTimeout(timeout)
    if result.error is not None:
        raise result.error
    return result.text if result.text is not None else ""


__all__ = [
    "PlaceholderTransformer",
    "TransformOutcome",
    "TransformTimeout",
    "Transformer",
    "run_transform",
]
