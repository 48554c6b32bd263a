"""Ollama provider setup step."""

import logging
import re
from collections.abc import Mapping
from typing import Any, Optional

import httpx

from modelsetup.setup.auth_params import AuthChoiceParams, AuthChoiceResult

logger = logging.getLogger(__name__)

OLLAMA_AUTH_CHOICE = "ollama-api"
OLLAMA_PROVIDER_ID = "ollama"
DEFAULT_OLLAMA_BASE_URL = "http://127.0.0.1:11434"
OLLAMA_API = "openai-completions"
OLLAMA_API_VERSION_PATH = "/v1"
OLLAMA_HEALTH_PATH = "/api/tags"
OLLAMA_PROBE_TIMEOUT = 2.0

_API_VERSION_SUFFIX = re.compile(r"/v1/?$")


def build_ollama_health_url(base_url: str) -> str:
    """Return the tags endpoint for a base URL, ignoring a trailing /v1."""
    return f"{_API_VERSION_SUFFIX.sub('', base_url)}{OLLAMA_HEALTH_PATH}"


async def probe_ollama(
    base_url: str,
    timeout: float = OLLAMA_PROBE_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> tuple[bool, str]:
    """
    Check whether an Ollama server answers at base_url.

    Any HTTP response counts as reachable, including 404/405 from servers
    that do not implement HEAD. Only a failed request (refused, timed out,
    unresolvable, malformed URL) counts as unreachable.
    Proxy environment variables are ignored, so a proxy reply cannot stand
    in for a missing local server.

    Args:
        base_url: Base URL entered by the user
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)

    Returns:
        Tuple of (reachable, message)
    """
    check_url = build_ollama_health_url(base_url)
    logger.debug(f"Probing Ollama at {check_url}")

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport, trust_env=False) as client:
            response = await client.head(check_url)
    except Exception as e:
        logger.info(f"Ollama probe failed for {check_url}: {e!r}")
        return False, f"Connection failed: {e}"

    return True, f"Ollama responded with HTTP {response.status_code}"


def build_ollama_provider(base_url: str) -> dict[str, Any]:
    """Provider entry for an Ollama server. Models are discovered later."""
    return {
        "baseUrl": f"{base_url}{OLLAMA_API_VERSION_PATH}",
        "api": OLLAMA_API,
        "models": [],
    }


def _copy_mapping(value: Any, path: str) -> dict[str, Any]:
    """Shallow copy of a mapping section. Anything else is treated as absent."""
    if isinstance(value, Mapping):
        return dict(value)
    if value is not None:
        logger.warning(f"Replacing non-mapping '{path}' section ({type(value).__name__})")
    return {}


def merge_provider(config: dict[str, Any], provider_id: str, provider: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of config with models.providers[provider_id] set.

    The top level, ``models`` and ``models.providers`` are copied, so the
    caller's mappings are left untouched. Sibling keys are preserved. A
    ``models`` or ``providers`` value that is not a mapping is replaced.
    """
    next_config = dict(config)
    models = _copy_mapping(next_config.get("models"), "models")
    providers = _copy_mapping(models.get("providers"), "models.providers")

    providers[provider_id] = provider
    models["providers"] = providers
    next_config["models"] = models
    return next_config


async def apply_auth_choice_ollama(params: AuthChoiceParams) -> Optional[AuthChoiceResult]:
    """
    Configure a locally hosted Ollama server.

    Returns None when the auth choice is not ``ollama-api``. When the server
    is unreachable and the user declines to continue, the original config is
    returned unchanged.
    """
    if params.auth_choice != OLLAMA_AUTH_CHOICE:
        return None

    prompter = params.prompter
    config = params.config

    await prompter.note("Ollama runs locally. Ensure `ollama serve` is running.", "Ollama Setup")

    base_url_raw = await prompter.text(
        "Ollama Base URL",
        initial_value=DEFAULT_OLLAMA_BASE_URL,
        placeholder=DEFAULT_OLLAMA_BASE_URL,
    )
    base_url = (str(base_url_raw).strip() if base_url_raw else "") or DEFAULT_OLLAMA_BASE_URL

    reachable, message = await probe_ollama(base_url)
    if not reachable:
        proceed = await prompter.confirm(
            f"Could not connect to Ollama at {base_url}. Continue anyway?",
            initial_value=True,
        )
        if not proceed:
            logger.info("Ollama setup aborted by user")
            return AuthChoiceResult(config=config)
    else:
        logger.debug(message)

    provider = build_ollama_provider(base_url)
    logger.info(f"Configured provider '{OLLAMA_PROVIDER_ID}' at {provider['baseUrl']}")
    return AuthChoiceResult(config=merge_provider(config, OLLAMA_PROVIDER_ID, provider))
