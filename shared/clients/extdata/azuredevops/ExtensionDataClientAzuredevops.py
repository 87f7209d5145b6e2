import base64
from urllib.parse import quote

from shared.clients.extdata.ExtensionDataClientInterface import ExtensionDataClientInterface
from shared.clients.extdata.models.Scope import ResolvedScope
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig


def encode_segment(value: str) -> str:
    """Percent-encode a path segment the way JavaScript's encodeURIComponent does."""
    return quote(value, safe="!*'()")


class ExtensionDataClientAzuredevops(ExtensionDataClientInterface):
    """Extension data client for the Azure DevOps ExtensionManagement REST API."""

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._org_url = self.get_config_val("ORG_URL", default=None, val_type="string")
        self._access_token = self.get_config_val("ACCESS_TOKEN", default="", val_type="string")
        self._pat = self.get_config_val("PAT", default="", val_type="string")
        self._api_version = self.get_config_val("API_VERSION", default="7.1-preview.1", val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "AzureDevOps"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="ORG_URL", val_type="string", default=None),
            EnvConfig(env_key="ACCESS_TOKEN", val_type="string", default=""),
            EnvConfig(env_key="PAT", val_type="string", default=""),
            EnvConfig(env_key="API_VERSION", val_type="string", default="7.1-preview.1"),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._access_token:
            return {"Authorization": f"Bearer {self._access_token}"}
        if self._pat:
            # personal access tokens go as basic auth with an empty user name
            encoded = base64.b64encode(f":{self._pat}".encode("utf-8")).decode("ascii")
            return {"Authorization": f"Basic {encoded}"}
        return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._org_url

    def _get_default_params(self) -> dict:
        return {"api-version": self._api_version}

    def _get_endpoint_healthcheck(self) -> str:
        return "/_apis/connectionData"

    def _get_endpoint_collection(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str) -> str:
        return (
            f"/_apis/ExtensionManagement/InstalledExtensions/{publisher_name}/{extension_name}"
            f"/Data/Scopes/{scope.scope_type.value}/{scope.scope_value}"
            f"/Collections/{encode_segment(collection_name)}"
        )

    def _get_endpoint_documents(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str) -> str:
        return self._get_endpoint_collection(publisher_name, extension_name, scope, collection_name) + "/Documents"

    def _get_endpoint_document(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str, document_id: str) -> str:
        return self._get_endpoint_documents(publisher_name, extension_name, scope, collection_name) + f"/{encode_segment(document_id)}"
