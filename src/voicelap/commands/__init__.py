"""Commands module for VoiceLap.

Provides voice command interpretation and interval announcements.
"""

from voicelap.commands.announcer import IntervalAnnouncer
from voicelap.commands.interpreter import (
    NO_SPEECH,
    VoiceCommandInterpreter,
    VoiceCommandResult,
    normalize_transcript,
)
from voicelap.commands.vocabulary import (
    DEFAULT_VOCABULARY,
    FAMILY_PRIORITY,
    CommandFamily,
    Vocabulary,
)

__all__ = [
    # Interpreter
    "NO_SPEECH",
    "VoiceCommandInterpreter",
    "VoiceCommandResult",
    "normalize_transcript",
    # Vocabulary
    "CommandFamily",
    "DEFAULT_VOCABULARY",
    "FAMILY_PRIORITY",
    "Vocabulary",
    # Announcements
    "IntervalAnnouncer",
]
