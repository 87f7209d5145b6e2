import logging
from typing import Any

import pytest

from shared.helper.HelperConfig import HelperConfig
from server.core.ExtensionDataTools import configure_extension_data_tools
from server.core.ToolRegistry import ToolRegistry


class FakeExtensionDataClient:
    """In-memory stand-in for an ExtensionDataClientInterface that records every call."""

    def __init__(self):
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.results: dict[str, Any] = {}
        self.errors: dict[str, Exception] = {}

    async def _handle(self, verb: str, kwargs: dict[str, Any]) -> Any:
        self.calls.append((verb, kwargs))
        if verb in self.errors:
            raise self.errors[verb]
        return self.results.get(verb)

    async def do_get_document(self, **kwargs):
        return await self._handle("do_get_document", kwargs)

    async def do_get_documents(self, **kwargs):
        return await self._handle("do_get_documents", kwargs)

    async def do_create_document(self, **kwargs):
        return await self._handle("do_create_document", kwargs)

    async def do_set_document(self, **kwargs):
        return await self._handle("do_set_document", kwargs)

    async def do_update_document(self, **kwargs):
        return await self._handle("do_update_document", kwargs)

    async def do_delete_document(self, **kwargs):
        return await self._handle("do_delete_document", kwargs)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "EXTDATA_ENGINE",
        "EXTDATA_TIMEOUT",
        "EXTDATA_AZUREDEVOPS_ORG_URL",
        "EXTDATA_AZUREDEVOPS_ACCESS_TOKEN",
        "EXTDATA_AZUREDEVOPS_PAT",
        "EXTDATA_AZUREDEVOPS_API_VERSION",
        "API_SERVER_API_KEY",
        "APP_VERSION",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def helper_config() -> HelperConfig:
    return HelperConfig(logger=logging.getLogger("extdata_bridge.tests"))


@pytest.fixture
def fake_client() -> FakeExtensionDataClient:
    return FakeExtensionDataClient()


@pytest.fixture
def connection_calls() -> list[int]:
    return []


@pytest.fixture
def registry(helper_config, fake_client, connection_calls) -> ToolRegistry:
    async def connection_provider():
        connection_calls.append(1)
        return fake_client

    registry = ToolRegistry(helper_config=helper_config)
    configure_extension_data_tools(
        registry=registry,
        helper_config=helper_config,
        connection_provider=connection_provider,
    )
    return registry
