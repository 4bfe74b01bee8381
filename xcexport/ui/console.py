"""
Leveled status output and user prompts.

Every status line is written to stdout as ``[LEVEL]<spacer><message>`` in a
level-specific style. Message text is never parsed as rich markup, so bracketed
paths and ``[y/n]`` hints print literally.
"""

from __future__ import annotations

from typing import Callable

from rich.console import Console
from rich.text import Text

from ..core.config import Config, OutputStyle
from ..core.exceptions import UserAbortError
from ..core.logging import get_logger

logger = get_logger(__name__)

Reader = Callable[[str], str]


class Messenger:
    """Presentation and input wrapper used by every workflow step."""

    def __init__(
        self,
        style: OutputStyle | None = None,
        auto_accept: bool = False,
        console: Console | None = None,
        reader: Reader | None = None,
    ) -> None:
        """Initialize the messenger.

        Args:
            style: Spacer and per-level styles
            auto_accept: Answer 'y' to every yes/no prompt without reading input
            console: Output console (stdout by default)
            reader: Callable returning one line of input for a prompt; defaults
                to reading from the console
        """
        self.style = style or OutputStyle()
        self.auto_accept = auto_accept
        self.console = console or Console(highlight=False, soft_wrap=True)
        self._reader = reader or self._console_reader

    @classmethod
    def from_config(
        cls,
        config: Config,
        console: Console | None = None,
        reader: Reader | None = None,
    ) -> Messenger:
        return cls(
            style=config.output,
            auto_accept=config.auto_accept,
            console=console,
            reader=reader,
        )

    @property
    def spacer(self) -> str:
        return self.style.spacer

    def _console_reader(self, prompt: str) -> str:
        return self.console.input(Text(prompt))

    def _emit(self, tag: str, message: str, style: str, indent: bool) -> None:
        body = f"{self.spacer}{message}" if indent else message
        self.console.print(Text(f"[{tag}]{self.spacer}{body}", style=style))

    # Leveled output

    def hl_info(self, message: str = "", *, indent: bool = False) -> None:
        self._emit("INFO", message, self.style.hl_info_style, indent)

    def info(self, message: str = "", *, indent: bool = False) -> None:
        self._emit("INFO", message, self.style.info_style, indent)

    def warn(self, message: str = "", *, indent: bool = False) -> None:
        self._emit("WARN", message, self.style.warn_style, indent)

    def error(self, message: str = "", *, indent: bool = False) -> None:
        self._emit("ERROR", message, self.style.error_style, indent)

    def step(self, index: int, total: int, title: str) -> None:
        """Print a step header surrounded by blank info lines."""
        self.info()
        self.info(f"[Step {index} of {total}] - {title}")
        self.info()

    def numbered(self, items: list[str]) -> None:
        """Print items as a 1-based numbered list."""
        for number, item in enumerate(items, start=1):
            self.info(f"{number}: {item}", indent=True)

    # Input

    def prompt_line(self, prompt: str, default: str = "") -> str:
        """Read one line of input, substituting ``default`` when it is empty.

        Args:
            prompt: Text shown before the cursor (": " is appended)
            default: Value returned for empty input

        Returns:
            The stripped input line, or ``default``

        Raises:
            UserAbortError: If input is exhausted
        """
        self.console.print()
        try:
            value = self._reader(f"{prompt}: ")
        except EOFError as e:
            raise UserAbortError(message="No input available, aborting", cause=e)
        value = value.strip()
        return value if value else default

    def prompt_yes_no(self, prompt: str, default: str = "") -> str:
        """Ask a yes/no question until answered with 'y' or 'n'.

        When auto-accept is enabled this returns 'y' without any I/O.

        Returns:
            'y' or 'n', lowercased
        """
        if self.auto_accept:
            logger.debug("Auto-accepting prompt", prompt=prompt)
            return "y"

        answer = self.prompt_line(prompt, default)
        while answer.lower() not in ("y", "n"):
            self.warn("Invalid input")
            answer = self.prompt_line(prompt, default)
        return answer.lower()
