"""Unit tests for leveled output and prompts."""

import pytest

from xcexport.core.config import OutputStyle
from xcexport.core.exceptions import UserAbortError
from xcexport.ui.console import Messenger


class TestLeveledOutput:
    """Tests for status line formatting."""

    def test_level_tags(self, messenger_factory, printed):
        """Test that each level prints one tagged line.

        Verifies the bracketed tag and four-space spacer prefix for every
        level.
        """
        messenger, _ = messenger_factory()
        messenger.hl_info("highlighted")
        messenger.info("plain")
        messenger.warn("careful")
        messenger.error("broken")

        assert printed() == [
            "[INFO]    highlighted",
            "[INFO]    plain",
            "[WARN]    careful",
            "[ERROR]    broken",
        ]

    def test_brackets_are_literal(self, messenger_factory, printed):
        """Test that bracketed text is not treated as markup."""
        messenger, _ = messenger_factory()
        messenger.info("Archive selected [/tmp/My App.xcarchive] [y/n] [bold]")

        assert printed() == ["[INFO]    Archive selected [/tmp/My App.xcarchive] [y/n] [bold]"]

    def test_indent_adds_spacer(self, messenger_factory, printed):
        """Test that indented messages get a second spacer."""
        messenger, _ = messenger_factory()
        messenger.info("Profile located", indent=True)

        assert printed() == ["[INFO]        Profile located"]

    def test_step_header(self, messenger_factory, printed):
        """Test that a step header is framed by blank info lines."""
        messenger, _ = messenger_factory()
        messenger.step(2, 4, "PROVISIONING PROFILE")

        assert printed() == [
            "[INFO]",
            "[INFO]    [Step 2 of 4] - PROVISIONING PROFILE",
            "[INFO]",
        ]

    def test_numbered_list(self, messenger_factory, printed):
        """Test 1-based numbering of listed items."""
        messenger, _ = messenger_factory()
        messenger.numbered(["first", "second"])

        assert printed() == ["[INFO]        1: first", "[INFO]        2: second"]

    def test_custom_spacer(self, output, printed):
        """Test that the spacer comes from the output style."""
        messenger = Messenger(style=OutputStyle(spacer=" "), console=output)
        messenger.warn("x")

        assert printed() == ["[WARN] x"]


class TestPromptLine:
    """Tests for free-text prompts."""

    def test_returns_input(self, messenger_factory):
        """Test that entered text is returned and the prompt gets a colon."""
        messenger, reader = messenger_factory("hello")

        assert messenger.prompt_line("Say something") == "hello"
        assert reader.prompts == ["Say something: "]

    def test_empty_input_uses_default(self, messenger_factory):
        """Test that empty input falls back to the default."""
        messenger, _ = messenger_factory("")

        assert messenger.prompt_line("Pick", default="3") == "3"

    def test_whitespace_is_stripped(self, messenger_factory):
        """Test that surrounding whitespace is removed."""
        messenger, _ = messenger_factory("  2  ")

        assert messenger.prompt_line("Pick") == "2"

    def test_blank_line_before_prompt(self, messenger_factory, printed):
        """Test that a blank line is written before reading."""
        messenger, _ = messenger_factory("x")
        messenger.prompt_line("Pick")

        assert printed() == [""]

    def test_eof_aborts(self, messenger_factory):
        """Test that exhausted input raises a user abort."""
        messenger, _ = messenger_factory()

        with pytest.raises(UserAbortError):
            messenger.prompt_line("Pick")


class TestPromptYesNo:
    """Tests for yes/no confirmation prompts."""

    @pytest.mark.parametrize("prompt", ["Shall I proceed [y/n]", "Delete?", ""])
    def test_auto_accept_skips_input(self, messenger_factory, printed, prompt):
        """Test that auto-accept returns 'y' without any I/O.

        The scripted reader has no answers, so any read would abort.
        """
        messenger, reader = messenger_factory(auto_accept=True)

        assert messenger.prompt_yes_no(prompt, default="n") == "y"
        assert reader.prompts == []
        assert printed() == []

    @pytest.mark.parametrize("answer,expected", [("y", "y"), ("Y", "y"), ("n", "n"), ("N", "n")])
    def test_accepts_case_insensitively(self, messenger_factory, answer, expected):
        """Test that answers are normalized to lowercase."""
        messenger, _ = messenger_factory(answer)

        assert messenger.prompt_yes_no("Proceed [y/n]") == expected

    def test_reprompts_until_valid(self, messenger_factory, printed):
        """Test that invalid answers warn and ask again."""
        messenger, reader = messenger_factory("maybe", "yes", "", "N")

        assert messenger.prompt_yes_no("Proceed [y/n]") == "n"
        assert len(reader.prompts) == 4
        assert printed().count("[WARN]    Invalid input") == 3

    def test_default_used_for_empty_answer(self, messenger_factory):
        """Test that an empty answer takes the default."""
        messenger, _ = messenger_factory("")

        assert messenger.prompt_yes_no("Proceed [y/n]", default="Y") == "y"

    def test_never_returns_without_valid_answer(self, messenger_factory):
        """Test that only running out of input ends an invalid streak."""
        messenger, reader = messenger_factory("a", "b", "c")

        with pytest.raises(UserAbortError):
            messenger.prompt_yes_no("Proceed [y/n]")
        assert len(reader.prompts) == 4
