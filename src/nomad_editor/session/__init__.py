"""Edit session: state machine, reducer and interactive loop."""

from .state import Phase, PromptKind, PromptState, SessionServices, SessionState
from .reducer import NO_FILENAME_MESSAGE, reduce
from .session import EditSession, create_default_resolver

__all__ = [
    "EditSession",
    "NO_FILENAME_MESSAGE",
    "Phase",
    "PromptKind",
    "PromptState",
    "SessionServices",
    "SessionState",
    "create_default_resolver",
    "reduce",
]
