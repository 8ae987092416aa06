"""Settings-backed credential provider.

Starts from the key found in the environment or ``.env`` and lets the
presentation layer swap it when the user selects another one.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

from pydantic import SecretStr

from veostudio.config.settings import Settings

logger = logging.getLogger(__name__)

KeyPrompt = Callable[[], str | None] | Callable[[], Awaitable[str | None]]


class SettingsCredentialProvider:
    """Credential provider implementing CredentialProviderProtocol.

    Args:
        settings: Loaded settings; ``settings.api.gemini_api_key`` seeds the key.
        prompt_fn: Called by ``request_credential_selection``. May be sync or
            async and returns the newly selected key (or None to keep the
            current one). Sync callables run in a worker thread because
            they usually block on terminal input.
    """

    def __init__(self, settings: Settings, prompt_fn: KeyPrompt | None = None) -> None:
        self._key = settings.api.gemini_api_key
        self._prompt_fn = prompt_fn

    @property
    def api_key(self) -> str:
        return self._key.get_secret_value()

    async def has_usable_credential(self) -> bool:
        return bool(self.api_key.strip())

    async def request_credential_selection(self) -> None:
        if self._prompt_fn is None:
            logger.warning("Credential selection requested but no prompt is configured.")
            return

        if inspect.iscoroutinefunction(self._prompt_fn):
            selected = await self._prompt_fn()
        else:
            selected = await asyncio.to_thread(self._prompt_fn)

        if selected:
            self._key = SecretStr(selected.strip())
            logger.info("API key updated from credential selection.")
        else:
            logger.info("Credential selection ended without a new key.")
