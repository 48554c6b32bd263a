"""Prompter capability used by setup steps.

Setup steps never talk to the terminal directly. They receive an object
with ``note``/``text``/``confirm`` coroutines, so the same step can run
behind the interactive terminal, a scripted answer sheet, or a test double.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from rich.console import Console
from rich.panel import Panel

from modelsetup.setup import prompt_utils


class Prompter(Protocol):
    """User-interaction surface handed to setup steps."""

    async def note(self, message: str, title: Optional[str] = None) -> None: ...

    async def text(self, message: str, initial_value: str = "", placeholder: str = "") -> str: ...

    async def confirm(self, message: str, initial_value: bool = False) -> bool: ...


class TerminalPrompter:
    """Prompter backed by Rich output and questionary input.

    Ctrl+C at any prompt raises SetupCancelled.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or prompt_utils.console

    async def note(self, message: str, title: Optional[str] = None) -> None:
        self.console.print(Panel.fit(message, title=title))

    async def text(self, message: str, initial_value: str = "", placeholder: str = "") -> str:
        # questionary drives its own event loop, so keep it off ours
        return await asyncio.to_thread(
            prompt_utils.q_text,
            message,
            default=initial_value,
            placeholder=placeholder,
            allow_cancel=True,
        )

    async def confirm(self, message: str, initial_value: bool = False) -> bool:
        return await asyncio.to_thread(
            prompt_utils.q_confirm,
            message,
            default=initial_value,
            allow_cancel=True,
        )


@dataclass
class ScriptedPrompter:
    """Non-interactive prompter answering from preset values.

    ``text_answer``/``confirm_answer`` left as None mean "accept the
    initial value". Every call is appended to ``calls`` as
    ``(method, message)``.
    """

    text_answer: Optional[str] = None
    confirm_answer: Optional[bool] = None
    console: Optional[Console] = None
    calls: list[tuple[str, Any]] = field(default_factory=list)

    async def note(self, message: str, title: Optional[str] = None) -> None:
        self.calls.append(("note", message))
        if self.console is not None:
            self.console.print(f"[dim]{title + ': ' if title else ''}{message}[/dim]")

    async def text(self, message: str, initial_value: str = "", placeholder: str = "") -> str:
        self.calls.append(("text", message))
        if self.text_answer is None:
            return initial_value
        return self.text_answer

    async def confirm(self, message: str, initial_value: bool = False) -> bool:
        self.calls.append(("confirm", message))
        if self.confirm_answer is None:
            return initial_value
        return self.confirm_answer
