"""Auth-choice dispatch.

Each auth choice maps to exactly one handler. Handlers are independent of
each other and of registration order.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from modelsetup.setup.auth_params import AuthChoiceHandler, AuthChoiceParams, AuthChoiceResult
from modelsetup.setup.ollama import OLLAMA_AUTH_CHOICE, apply_auth_choice_ollama

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthChoiceOption:
    """A selectable auth choice."""

    value: str
    label: str
    hint: str
    handler: AuthChoiceHandler


AUTH_CHOICES: dict[str, AuthChoiceOption] = {
    OLLAMA_AUTH_CHOICE: AuthChoiceOption(
        value=OLLAMA_AUTH_CHOICE,
        label="Ollama",
        hint="Local models served by `ollama serve`",
        handler=apply_auth_choice_ollama,
    ),
}


def list_auth_choices() -> list[AuthChoiceOption]:
    """Registered auth choices in registration order."""
    return list(AUTH_CHOICES.values())


async def apply_auth_choice(params: AuthChoiceParams) -> Optional[AuthChoiceResult]:
    """Run the handler registered for params.auth_choice.

    Returns None when no handler is registered for the choice.
    """
    option = AUTH_CHOICES.get(params.auth_choice)
    if option is None:
        logger.debug(f"No handler for auth choice '{params.auth_choice}'")
        return None
    return await option.handler(params)
