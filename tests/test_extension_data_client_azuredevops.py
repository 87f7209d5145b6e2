import base64
import json

import httpx
import pytest

from shared.clients.extdata.azuredevops.ExtensionDataClientAzuredevops import (
    ExtensionDataClientAzuredevops,
    encode_segment,
)
from shared.clients.extdata.models.Scope import ResolvedScope, ScopeType
from shared.clients.RemoteRequestError import RemoteRequestError

ORG_URL = "https://dev.azure.com/contoso"
DOCUMENTS_PATH = "/contoso/_apis/ExtensionManagement/InstalledExtensions/pub/ext/Data/Scopes/Default/Current/Collections/settings/Documents"
DEFAULT_SCOPE = ResolvedScope(scope_type=ScopeType.DEFAULT, scope_value="Current")


class RecordingBackend:
    """Answers every request with a fixed response and keeps the requests."""

    def __init__(self, status_code: int = 200, payload=None, text: str | None = None):
        self.requests: list[httpx.Request] = []
        self._status_code = status_code
        self._payload = payload
        self._text = text

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._text is not None:
            return httpx.Response(self._status_code, text=self._text)
        if self._payload is None:
            return httpx.Response(self._status_code)
        return httpx.Response(self._status_code, json=self._payload)


@pytest.fixture
def org_env(monkeypatch):
    monkeypatch.setenv("EXTDATA_AZUREDEVOPS_ORG_URL", ORG_URL)


async def _booted_client(helper_config, backend: RecordingBackend) -> ExtensionDataClientAzuredevops:
    client = ExtensionDataClientAzuredevops(helper_config=helper_config)
    await client.boot(transport=httpx.MockTransport(backend))
    return client


def test_missing_org_url_fails_on_construction(helper_config):
    with pytest.raises(ValueError, match="EXTDATA_AZUREDEVOPS_ORG_URL"):
        ExtensionDataClientAzuredevops(helper_config=helper_config)


def test_config_key_prefix(helper_config, org_env):
    client = ExtensionDataClientAzuredevops(helper_config=helper_config)
    assert client.get_client_type() == "extdata"
    assert client.get_engine_name() == "azuredevops"
    assert client._get_config_key_name("org_url") == "EXTDATA_AZUREDEVOPS_ORG_URL"


def test_encode_segment_matches_encode_uri_component():
    assert encode_segment("my collection/v2") == "my%20collection%2Fv2"
    assert encode_segment("a-b_c.d!e~f*g'h(i)") == "a-b_c.d!e~f*g'h(i)"
    assert encode_segment("ä?&#") == "%C3%A4%3F%26%23"


def test_endpoints_encode_collection_and_document(helper_config, org_env):
    client = ExtensionDataClientAzuredevops(helper_config=helper_config)
    scope = ResolvedScope(scope_type=ScopeType.USER, scope_value="me")

    endpoint = client._get_endpoint_document("pub", "ext", scope, "user settings", "doc/1")

    assert endpoint == (
        "/_apis/ExtensionManagement/InstalledExtensions/pub/ext/Data/Scopes/User/me"
        "/Collections/user%20settings/Documents/doc%2F1"
    )


@pytest.mark.asyncio
async def test_get_document(helper_config, org_env):
    backend = RecordingBackend(payload={"id": "doc-1", "__etag": 2})
    client = await _booted_client(helper_config, backend)
    try:
        document = await client.do_get_document(
            publisher_name="pub", extension_name="ext", scope=DEFAULT_SCOPE, collection_name="settings", document_id="doc-1"
        )
    finally:
        await client.close()

    assert document == {"id": "doc-1", "__etag": 2}
    request = backend.requests[0]
    assert request.method == "GET"
    assert request.url.path == DOCUMENTS_PATH + "/doc-1"
    assert request.url.params["api-version"] == "7.1-preview.1"
    assert request.headers["User-Agent"].startswith("extdata-bridge/")


@pytest.mark.asyncio
async def test_get_documents_returns_raw_envelope(helper_config, org_env):
    envelope = {"count": 1, "value": [{"id": "doc-1"}]}
    backend = RecordingBackend(payload=envelope)
    client = await _booted_client(helper_config, backend)
    try:
        response = await client.do_get_documents(
            publisher_name="pub", extension_name="ext", scope=DEFAULT_SCOPE, collection_name="settings"
        )
    finally:
        await client.close()

    assert response == envelope
    assert backend.requests[0].url.path == DOCUMENTS_PATH


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "verb, method, document, path_suffix",
    [
        ("do_create_document", "POST", {"name": "no id"}, ""),
        ("do_set_document", "PUT", {"id": "doc-1", "name": "full"}, "/doc-1"),
        ("do_update_document", "PATCH", {"id": "doc-1", "__etag": -1}, "/doc-1"),
    ],
)
async def test_write_verbs_send_document_body(helper_config, org_env, verb, method, document, path_suffix):
    stored = {**document, "id": "doc-1", "__etag": 5}
    backend = RecordingBackend(payload=stored)
    client = await _booted_client(helper_config, backend)
    try:
        response = await getattr(client, verb)(
            publisher_name="pub", extension_name="ext", scope=DEFAULT_SCOPE, collection_name="settings", document=document
        )
    finally:
        await client.close()

    assert response == stored
    request = backend.requests[0]
    assert request.method == method
    assert request.url.path == DOCUMENTS_PATH + path_suffix
    assert json.loads(request.content) == document
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_delete_document(helper_config, org_env):
    backend = RecordingBackend(status_code=204)
    client = await _booted_client(helper_config, backend)
    try:
        result = await client.do_delete_document(
            publisher_name="pub", extension_name="ext", scope=DEFAULT_SCOPE, collection_name="settings", document_id="doc-1"
        )
    finally:
        await client.close()

    assert result is None
    assert backend.requests[0].method == "DELETE"
    assert backend.requests[0].url.path == DOCUMENTS_PATH + "/doc-1"


@pytest.mark.asyncio
async def test_non_success_status_raises_remote_request_error(helper_config, org_env):
    backend = RecordingBackend(status_code=404, text="Document does not exist")
    client = await _booted_client(helper_config, backend)
    try:
        with pytest.raises(RemoteRequestError) as excinfo:
            await client.do_get_document(
                publisher_name="pub", extension_name="ext", scope=DEFAULT_SCOPE, collection_name="settings", document_id="missing"
            )
    finally:
        await client.close()

    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "404 Not Found\nDocument does not exist"


@pytest.mark.asyncio
async def test_request_before_boot_fails(helper_config, org_env):
    client = ExtensionDataClientAzuredevops(helper_config=helper_config)
    with pytest.raises(Exception, match="boot"):
        await client.do_get_documents(publisher_name="pub", extension_name="ext", scope=DEFAULT_SCOPE, collection_name="settings")


@pytest.mark.asyncio
async def test_bearer_token_auth(helper_config, org_env, monkeypatch):
    monkeypatch.setenv("EXTDATA_AZUREDEVOPS_ACCESS_TOKEN", "secret-token")
    backend = RecordingBackend(payload=[])
    client = await _booted_client(helper_config, backend)
    try:
        await client.do_get_documents(publisher_name="pub", extension_name="ext", scope=DEFAULT_SCOPE, collection_name="settings")
    finally:
        await client.close()

    assert backend.requests[0].headers["Authorization"] == "Bearer secret-token"


@pytest.mark.asyncio
async def test_personal_access_token_auth(helper_config, org_env, monkeypatch):
    monkeypatch.setenv("EXTDATA_AZUREDEVOPS_PAT", "my-pat")
    backend = RecordingBackend(payload=[])
    client = await _booted_client(helper_config, backend)
    try:
        await client.do_get_documents(publisher_name="pub", extension_name="ext", scope=DEFAULT_SCOPE, collection_name="settings")
    finally:
        await client.close()

    expected = base64.b64encode(b":my-pat").decode("ascii")
    assert backend.requests[0].headers["Authorization"] == f"Basic {expected}"


@pytest.mark.asyncio
async def test_custom_api_version(helper_config, org_env, monkeypatch):
    monkeypatch.setenv("EXTDATA_AZUREDEVOPS_API_VERSION", "7.2-preview.1")
    backend = RecordingBackend(payload=[])
    client = await _booted_client(helper_config, backend)
    try:
        await client.do_get_documents(publisher_name="pub", extension_name="ext", scope=DEFAULT_SCOPE, collection_name="settings")
    finally:
        await client.close()

    assert backend.requests[0].url.params["api-version"] == "7.2-preview.1"
    assert "Authorization" not in backend.requests[0].headers


@pytest.mark.asyncio
async def test_healthcheck_uses_connection_data(helper_config, org_env):
    backend = RecordingBackend(payload={"authenticatedUser": {}})
    client = await _booted_client(helper_config, backend)
    try:
        response = await client.do_healthcheck()
    finally:
        await client.close()

    assert response.is_success
    assert backend.requests[0].url.path == "/contoso/_apis/connectionData"
