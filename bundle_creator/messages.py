"""User-facing progress messages.

``MessageSink`` is an append-only list of leveled messages.  A web front-end
can read them back after a run; on the command line they are echoed to the
Rich console as they arrive.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rich.console import Console
from rich.markup import escape

from .utils import console as default_console


class MessageLevel(str, Enum):
    INFO = "info"
    CONFIRMATION = "confirmation"
    ERROR = "error"


_LEVEL_STYLES: dict[MessageLevel, str] = {
    MessageLevel.INFO: "cyan",
    MessageLevel.CONFIRMATION: "bold green",
    MessageLevel.ERROR: "bold red",
}


@dataclass(frozen=True)
class Message:
    level: MessageLevel
    text: str


class MessageSink:
    """Collects progress messages for one or more generator runs.

    Args:
        console: Rich console to echo to.  Defaults to the shared console.
        echo: Set to ``False`` to only collect messages (used by tests and
            non-interactive callers).
    """

    def __init__(self, console: Console | None = None, echo: bool = True) -> None:
        self.console = console or default_console
        self.echo = echo
        self._messages: list[Message] = []

    def add(self, level: MessageLevel, text: str) -> None:
        self._messages.append(Message(level, text))
        if self.echo:
            style = _LEVEL_STYLES[level]
            self.console.print(f"[{style}]{escape(text)}[/{style}]")

    def add_info(self, text: str) -> None:
        self.add(MessageLevel.INFO, text)

    def add_confirmation(self, text: str) -> None:
        self.add(MessageLevel.CONFIRMATION, text)

    def add_error(self, text: str) -> None:
        self.add(MessageLevel.ERROR, text)

    @property
    def messages(self) -> list[Message]:
        """Snapshot of every message in arrival order."""
        return list(self._messages)

    def texts(self, level: MessageLevel | None = None) -> list[str]:
        """Message texts, optionally filtered by *level*."""
        return [m.text for m in self._messages if level is None or m.level == level]

    def has_errors(self) -> bool:
        return any(m.level == MessageLevel.ERROR for m in self._messages)

    def __len__(self) -> int:
        return len(self._messages)
