"""Unit tests for the settings-backed credential provider."""

import pytest
from pydantic import SecretStr

from veostudio.api import CredentialProviderProtocol, SettingsCredentialProvider
from veostudio.config.settings import APISettings, Settings


def _settings(key: str) -> Settings:
    return Settings(api=APISettings(gemini_api_key=SecretStr(key)))


class TestSettingsCredentialProvider:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(SettingsCredentialProvider(_settings("k")), CredentialProviderProtocol)

    async def test_usable_key(self) -> None:
        provider = SettingsCredentialProvider(_settings("k"))
        assert provider.api_key == "k"
        assert await provider.has_usable_credential() is True

    @pytest.mark.parametrize("key", ["", "   "])
    async def test_blank_key_is_unusable(self, key: str) -> None:
        assert await SettingsCredentialProvider(_settings(key)).has_usable_credential() is False

    async def test_sync_prompt_replaces_key(self) -> None:
        provider = SettingsCredentialProvider(_settings(""), prompt_fn=lambda: " new-key ")
        await provider.request_credential_selection()
        assert provider.api_key == "new-key"
        assert await provider.has_usable_credential() is True

    async def test_async_prompt_replaces_key(self) -> None:
        async def prompt() -> str:
            return "async-key"

        provider = SettingsCredentialProvider(_settings("old"), prompt_fn=prompt)
        await provider.request_credential_selection()
        assert provider.api_key == "async-key"

    async def test_cancelled_prompt_keeps_key(self) -> None:
        provider = SettingsCredentialProvider(_settings("old"), prompt_fn=lambda: None)
        await provider.request_credential_selection()
        assert provider.api_key == "old"

    async def test_without_prompt(self) -> None:
        provider = SettingsCredentialProvider(_settings("old"))
        await provider.request_credential_selection()
        assert provider.api_key == "old"
