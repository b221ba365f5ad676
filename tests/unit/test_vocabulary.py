"""Unit tests for the command vocabulary."""

import pytest

from voicelap.commands.vocabulary import (
    DEFAULT_VOCABULARY,
    FAMILY_PRIORITY,
    CommandFamily,
    Vocabulary,
)


class TestMatchFamily:
    """Tests for family matching."""

    @pytest.mark.parametrize(
        "text,family",
        [
            ("start", CommandFamily.START),
            ("go", CommandFamily.START),
            ("begin", CommandFamily.START),
            ("resume", CommandFamily.START),
            ("stop", CommandFamily.STOP),
            ("end", CommandFamily.STOP),
            ("pause", CommandFamily.STOP),
            ("lap", CommandFamily.LAP),
            ("split", CommandFamily.LAP),
            ("reset", CommandFamily.RESET),
            ("clear", CommandFamily.RESET),
            ("renew", CommandFamily.RESET),
        ],
    )
    def test_single_words(self, text: str, family: CommandFamily) -> None:
        """Test each trigger word maps to its family."""
        assert DEFAULT_VOCABULARY.match_family(text) == family

    def test_substring_match(self) -> None:
        """Test trigger words match inside longer phrases."""
        assert DEFAULT_VOCABULARY.match_family("please stop now") == CommandFamily.STOP
        assert DEFAULT_VOCABULARY.match_family("laps") == CommandFamily.LAP

    def test_priority_order(self) -> None:
        """Test start outranks stop, lap and reset."""
        assert DEFAULT_VOCABULARY.match_family("stop and start") == CommandFamily.START
        assert DEFAULT_VOCABULARY.match_family("lap then reset") == CommandFamily.LAP

    def test_restart_matches_start(self) -> None:
        """Test 'restart' resolves to start because it contains 'start'."""
        assert DEFAULT_VOCABULARY.match_family("restart") == CommandFamily.START

    def test_no_match(self) -> None:
        """Test unrelated speech matches nothing."""
        assert DEFAULT_VOCABULARY.match_family("hello there") is None

    def test_priority_covers_all_families(self) -> None:
        """Test every family has a priority slot."""
        assert set(FAMILY_PRIORITY) == set(CommandFamily)


class TestIgnoreWords:
    """Tests for the ignore list."""

    @pytest.mark.parametrize("text", ["five", "twenty", "seconds", "minute", "um", "good", "a"])
    def test_ignored(self, text: str) -> None:
        """Test numerals, units and filler are ignored."""
        assert DEFAULT_VOCABULARY.is_ignored(text) is True

    def test_ignore_requires_exact_match(self) -> None:
        """Test a phrase containing an ignore word is not ignored."""
        assert DEFAULT_VOCABULARY.is_ignored("good go") is False

    def test_custom_vocabulary(self) -> None:
        """Test a vocabulary with custom words."""
        vocab = Vocabulary(
            command_words={CommandFamily.START: ("commence",)},
            ignore_words=frozenset({"hmm"}),
        )
        assert vocab.match_family("commence") == CommandFamily.START
        assert vocab.match_family("stop") is None

    def test_words_are_read_only(self) -> None:
        """Test a vocabulary cannot be changed after construction."""
        words = {CommandFamily.START: ("commence",)}
        vocab = Vocabulary(command_words=words)
        words[CommandFamily.STOP] = ("halt",)

        assert vocab.match_family("halt") is None
        with pytest.raises(TypeError):
            vocab.command_words[CommandFamily.LAP] = ("split",)  # type: ignore[index]

    def test_hashable(self) -> None:
        """Test vocabularies can be hashed and compared."""
        assert hash(DEFAULT_VOCABULARY) == hash(Vocabulary())
        assert DEFAULT_VOCABULARY == Vocabulary()
