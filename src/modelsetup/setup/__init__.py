"""Setup steps for modelsetup."""

from .prompt_utils import SetupCancelled
from .prompter import Prompter, ScriptedPrompter, TerminalPrompter
from .auth_params import AuthChoiceParams, AuthChoiceResult
from .auth_choice import AUTH_CHOICES, apply_auth_choice, list_auth_choices

__all__ = [
    "SetupCancelled",
    "Prompter",
    "ScriptedPrompter",
    "TerminalPrompter",
    "AuthChoiceParams",
    "AuthChoiceResult",
    "AUTH_CHOICES",
    "apply_auth_choice",
    "list_auth_choices",
]
