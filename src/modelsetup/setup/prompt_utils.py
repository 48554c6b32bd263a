"""Terminal prompts for setup steps.

Interactive terminals get questionary prompts. When stdin/stdout is not a
TTY (pipes, CI, tests) every prompt degrades to a plain input() line, which
also sidesteps the redraw glitches of Rich's Prompt.ask().
"""

import sys
from typing import Any, Optional, Sequence

import questionary
from rich.console import Console

console = Console()


class SetupCancelled(Exception):
    """Raised when the user cancels the setup flow (e.g., Ctrl+C)."""

    pass


def _cancelled(allow_cancel: bool, fallback: Any) -> Any:
    print()  # Newline after interrupt
    if allow_cancel:
        raise SetupCancelled()
    return fallback


def _read_line(prompt: str, allow_cancel: bool) -> Optional[str]:
    """input() that returns None on Ctrl+C/EOF unless cancelling is allowed."""
    try:
        return input(prompt).strip()
    except (EOFError, KeyboardInterrupt):
        return _cancelled(allow_cancel, None)


def _ask(question: Any, fallback: Any, allow_cancel: bool) -> Any:
    """Run a questionary question; None from ask() means the user bailed out."""
    try:
        result = question.ask()
    except KeyboardInterrupt:
        return _cancelled(allow_cancel, fallback)

    if result is None:
        if allow_cancel:
            raise SetupCancelled()
        return fallback
    return result


def safe_prompt(
    prompt: str,
    default: str = "",
    show_default: bool = True,
    allow_cancel: bool = False,
) -> str:
    """Plain input() prompt. Empty input, Ctrl+C and EOF give ``default``.

    Raises:
        SetupCancelled: On Ctrl+C/EOF when allow_cancel is set
    """
    suffix = f" ({default})" if default and show_default else ""
    result = _read_line(f"{prompt}{suffix}: ", allow_cancel)
    return result or default


def safe_confirm(
    prompt: str,
    default: bool = False,
    allow_cancel: bool = False,
) -> bool:
    """Plain input() yes/no prompt."""
    hint = "[Y/n]" if default else "[y/N]"
    result = _read_line(f"{prompt} {hint}: ", allow_cancel)
    if not result:
        return default
    return result.lower() in ("y", "yes", "true", "1")


def is_interactive() -> bool:
    """True when both stdin and stdout are attached to a terminal."""
    return all(hasattr(stream, "isatty") and stream.isatty() for stream in (sys.stdin, sys.stdout))


def _choice_pairs(choices: Sequence[Any]) -> list[tuple[str, str]]:
    """(value, title) for plain strings and questionary.Choice objects alike."""
    pairs = []
    for choice in choices:
        if hasattr(choice, "value") and hasattr(choice, "title"):
            pairs.append((str(choice.value), str(choice.title)))
        else:
            pairs.append((str(choice), str(choice)))
    return pairs


def _numbered_select(
    message: str,
    choices: Sequence[Any],
    default: Optional[str] = None,
    allow_cancel: bool = False,
) -> Optional[str]:
    """Numbered menu read with input(); invalid input keeps ``default``."""
    pairs = _choice_pairs(choices)
    values = [value for value, _ in pairs]
    default_number = values.index(default) + 1 if default in values else 1

    console.print(f"\n[bold]{message}[/bold]")
    for number, (value, title) in enumerate(pairs, 1):
        marker = " [default]" if value == default else ""
        console.print(f"  [{number}] {title}{marker}")

    selection = safe_prompt("Enter number", default=str(default_number), allow_cancel=allow_cancel)
    if selection.isdigit() and 1 <= int(selection) <= len(values):
        return values[int(selection) - 1]
    return default


def q_select(
    message: str,
    choices: Sequence[Any],
    default: Optional[str] = None,
    allow_cancel: bool = False,
) -> Optional[str]:
    """Pick one of ``choices``. Returns None if the menu is dismissed.

    Raises:
        SetupCancelled: If the menu is dismissed and allow_cancel is set
    """
    if not is_interactive():
        return _numbered_select(message, choices, default, allow_cancel=allow_cancel)
    return _ask(questionary.select(message, choices=choices, default=default), None, allow_cancel)


def q_text(
    message: str,
    default: str = "",
    placeholder: str = "",
    allow_cancel: bool = False,
) -> str:
    """Free-text prompt with ``default`` pre-filled in the input line.

    ``placeholder`` is the greyed-out hint shown while the line is empty.
    """
    if not is_interactive():
        return safe_prompt(message, default=default, allow_cancel=allow_cancel)

    kwargs: dict[str, Any] = {"default": default}
    if placeholder:
        kwargs["placeholder"] = placeholder
    return _ask(questionary.text(message, **kwargs), default, allow_cancel)


def q_confirm(
    message: str,
    default: bool = False,
    allow_cancel: bool = False,
) -> bool:
    if not is_interactive():
        return safe_confirm(message, default=default, allow_cancel=allow_cancel)
    return _ask(questionary.confirm(message, default=default), default, allow_cancel)
