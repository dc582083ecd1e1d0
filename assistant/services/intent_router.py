"""Intent detection for incoming chat messages.

Only one structured intent exists today: switching the UI to a named trading
session. Everything else is a general query answered by the completion backend.
The router sits behind an abstract interface so a different classifier can be
dropped in without touching the orchestrator.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass


# "load/switch to/open [the] <name> [session]", anchored to the whole message so
# questions like "can you load my recent trades" are not treated as switches.
SESSION_SWITCH_PATTERN = re.compile(
    r"^(?:load|switch\s+to|open)\s+(?:the\s+)?(.+?)(?:\s+session)?$",
    re.IGNORECASE,
)

# Captures left over when the optional words swallow the real name ("open session", "open the").
_FILLER_NAMES = frozenset({"session", "the"})


@dataclass(frozen=True)
class SessionSwitch:
    name: str


@dataclass(frozen=True)
class GeneralQuery:
    pass


Intent = SessionSwitch | GeneralQuery


class IntentRouter(ABC):
    """Classifies a raw user message into an Intent."""

    @abstractmethod
    def classify(self, message: str) -> Intent:
        pass


class PatternIntentRouter(IntentRouter):
    """Deterministic single-pattern router."""

    def __init__(self, pattern: re.Pattern = SESSION_SWITCH_PATTERN):
        self.pattern = pattern

    def classify(self, message: str) -> Intent:
        match = self.pattern.match(message.strip())
        if match:
            name = match.group(1).strip()
            if name and name.lower() not in _FILLER_NAMES:
                return SessionSwitch(name=name)
        return GeneralQuery()


_default_router = PatternIntentRouter()


def classify(message: str) -> Intent:
    """Classify with the default pattern router."""
    return _default_router.classify(message)
