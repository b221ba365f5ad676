"""Command vocabulary for voice control.

Command words are grouped into families. Families are matched in a fixed
priority order: start, stop, lap, reset.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class CommandFamily(Enum):
    """Stopwatch transitions reachable by voice."""

    START = "start"
    STOP = "stop"
    LAP = "lap"
    RESET = "reset"


# Dispatch priority when a transcript matches more than one family.
FAMILY_PRIORITY: tuple[CommandFamily, ...] = (
    CommandFamily.START,
    CommandFamily.STOP,
    CommandFamily.LAP,
    CommandFamily.RESET,
)

DEFAULT_COMMAND_WORDS: Mapping[CommandFamily, tuple[str, ...]] = MappingProxyType(
    {
        CommandFamily.START: ("start", "go", "begin", "resume"),
        CommandFamily.STOP: ("stop", "end", "pause"),
        CommandFamily.LAP: ("lap", "split"),
        CommandFamily.RESET: ("reset", "clear", "restart", "renew"),
    }
)

_NUMERALS = (
    "zero", "one", "two", "three", "four", "five", "six", "seven", "eight",
    "nine", "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen",
    "sixteen", "seventeen", "eighteen", "nineteen", "twenty", "thirty",
    "forty", "fifty", "sixty", "seventy", "eighty", "ninety", "hundred",
)
_UNITS = ("second", "seconds", "minute", "minutes", "hour", "hours")
_FILLER = ("uh", "um", "hmm", "okay", "ok", "good", "yeah", "the", "a", "and", "so")

DEFAULT_IGNORE_WORDS: frozenset[str] = frozenset(_NUMERALS + _UNITS + _FILLER)


@dataclass(frozen=True)
class Vocabulary:
    """Words the recognizer may hear and how they map to commands.

    Attributes:
        command_words: Trigger words per command family.
        ignore_words: Utterances that are never actionable on an exact match.
    """

    command_words: Mapping[CommandFamily, tuple[str, ...]] = field(
        default_factory=lambda: DEFAULT_COMMAND_WORDS, hash=False
    )
    ignore_words: frozenset[str] = DEFAULT_IGNORE_WORDS

    def __post_init__(self) -> None:
        words = MappingProxyType({f: tuple(w) for f, w in self.command_words.items()})
        object.__setattr__(self, "command_words", words)
        object.__setattr__(self, "ignore_words", frozenset(self.ignore_words))

    def is_ignored(self, text: str) -> bool:
        """Check whether a normalized utterance is an exact ignore word."""
        return text in self.ignore_words

    def match_family(self, text: str) -> CommandFamily | None:
        """Return the first family, by priority, with a word inside text."""
        for family in FAMILY_PRIORITY:
            for word in self.command_words.get(family, ()):
                if word in text:
                    return family
        return None


DEFAULT_VOCABULARY = Vocabulary()


__all__ = [
    "CommandFamily",
    "DEFAULT_COMMAND_WORDS",
    "DEFAULT_IGNORE_WORDS",
    "DEFAULT_VOCABULARY",
    "FAMILY_PRIORITY",
    "Vocabulary",
]
