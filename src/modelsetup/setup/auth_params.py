"""Parameter and result types shared by auth-choice handlers."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from modelsetup.setup.prompter import Prompter


@dataclass
class AuthChoiceParams:
    """Input to an auth-choice handler."""

    auth_choice: str
    config: dict[str, Any]
    prompter: Prompter


@dataclass
class AuthChoiceResult:
    """Configuration produced by a handler.

    When the user aborts, ``config`` is the caller's original object.
    """

    config: dict[str, Any]


# A handler returns None when the auth choice is not its own.
AuthChoiceHandler = Callable[[AuthChoiceParams], Awaitable[Optional[AuthChoiceResult]]]
