"""Console output abstraction.

Publish orchestration never prints directly. It talks to a ConsoleProtocol,
implemented by RichConsole for the CLI and MockConsole for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()  # verbose diagnostics
    HEADER = auto()  # release group banner

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def exception(self, exc: BaseException) -> None:
        """Render a traceback for ``exc``; only called in verbose mode."""
        ...


# Leveled messages: (label, rich style of the label).
_LEVELS: dict[Style, tuple[str, str]] = {
    Style.SUCCESS: ("OK", "green"),
    Style.ERROR: ("error:", "red bold"),
    Style.WARNING: ("warning:", "yellow"),
    Style.INFO: ("info:", "cyan"),
}

_RICH_STYLES: dict[Style, str] = {
    Style.DEFAULT: "",
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.HEADER: "blue bold",
}


class RichConsole:
    """ConsoleProtocol backed by a rich Console.

    Messages are never interpreted as rich markup: project names and task
    output routinely contain square brackets.
    """

    def __init__(self, *, stderr: bool = False) -> None:
        from rich.console import Console

        self._console = Console(stderr=stderr)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=_RICH_STYLES[style] or None, markup=False)

    def _leveled(self, level: Style, message: str) -> None:
        from rich.text import Text

        label, label_style = _LEVELS[level]
        self._console.print(Text.assemble((label, label_style), " ", message))

    def success(self, message: str) -> None:
        self._leveled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._leveled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._leveled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._leveled(Style.INFO, message)

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)

    def exception(self, exc: BaseException) -> None:
        from rich.traceback import Traceback

        self._console.print(Traceback.from_exception(type(exc), exc, exc.__traceback__))


@dataclass
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Captures output for assertions in tests.

    Leveled messages are stored with their label, e.g. ``"error: boom"``.
    """

    outputs: list[OutputRecord] = field(default_factory=lambda: [])

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def _leveled(self, level: Style, message: str) -> None:
        self.print(f"{_LEVELS[level][0]} {message}", level)

    def success(self, message: str) -> None:
        self._leveled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._leveled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._leveled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._leveled(Style.INFO, message)

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)

    def exception(self, exc: BaseException) -> None:
        self.print(f"traceback: {type(exc).__name__}: {exc}", Style.DIM)

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(o.style is style for o in self.outputs)
