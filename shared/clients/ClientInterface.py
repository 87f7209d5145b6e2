from abc import ABC, abstractmethod

import httpx
from httpx._types import QueryParamTypes
from typing import Any
from shared.models.config import EnvConfig

from shared.helper.HelperConfig import HelperConfig
from shared.clients.RemoteRequestError import RemoteRequestError


class ClientInterface(ABC):
    def __init__(self, helper_config: HelperConfig):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self.timeout = helper_config.get_number_val(f"{self.get_client_type().upper()}_TIMEOUT", default=30.0)
        self.user_agent = f"extdata-bridge/{helper_config.get_string_val('APP_VERSION', default='unknown')}"

        # client and config
        self._client: httpx.AsyncClient | None = None
        self.validate_full_configuration()

    ##########################################
    ############### CHECKER ##################
    ##########################################

    def validate_full_configuration(self) -> None:
        """
        Validates that all required configuration values for the client are set and valid.

        Raises:
            ValueError: If any required configuration value is missing or invalid.
        """
        for config in self._get_required_config():
            _ = self.get_config_val(raw_key=config.env_key, default=config.default, val_type=config.val_type)

    def is_booted(self) -> bool:
        return self._client is not None

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def get_client_type(self) -> str:
        """
        Returns the type of the client in lowercase. E.g. "extdata"
        """
        return self._get_client_type().lower()

    @abstractmethod
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "extdata"
        """
        pass

    def get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client in lowercase. E.g. "azuredevops"
        """
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "AzureDevOps"
        """
        pass

    ################ CONFIG ##################
    @abstractmethod
    def _get_required_config(self) -> list[EnvConfig]:
        """
        Returns all configuration entries the client reads.

        Returns:
            list[EnvConfig]: A list containing the details of each configuration key.
        """
        pass

    def _get_config_key_name(self, raw_key: str) -> str:
        """
        Returns:
            str: The full configuration key name for the client. E.g. "EXTDATA_AZUREDEVOPS_ORG_URL"
        """
        key_prefix = f"{self.get_client_type().upper()}_{self.get_engine_name().upper()}"
        return f"{key_prefix}_{raw_key.upper()}"

    def get_config_val(self, raw_key: str, default: Any = None, val_type: str = "string") -> Any:
        """
        Retrieves the value of a configuration key for the client.

        Args:
            raw_key (str): The raw configuration key name
            default (Any): The default value to return if the configuration key is not set
            val_type (str): The type of the configuration value ("string", "number", "bool", "list")
        """
        key = self._get_config_key_name(raw_key)
        if val_type == "string":
            return self._helper_config.get_string_val(key, default=default)
        elif val_type == "number":
            return self._helper_config.get_number_val(key, default=default)
        elif val_type == "bool":
            return self._helper_config.get_bool_val(key, default=default)
        elif val_type == "list":
            return self._helper_config.get_list_val(key, default=default)
        else:
            raise ValueError(f"Unsupported config value type '{val_type}' for env key '{raw_key}' in {self.get_client_type().upper()} client '{self.get_engine_name()}'.")

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the authentication header for the backend, or an empty dict if no credential is configured.
        """
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns the base URL of the backend (e.g. "https://dev.azure.com/contoso").
        """
        pass

    @abstractmethod
    def _get_endpoint_healthcheck(self) -> str:
        """
        Returns the endpoint path for healthcheck requests (e.g. "/_apis/connectionData").
        """
        pass

    def _get_default_params(self) -> dict:
        """
        Returns query parameters sent with every request. Engines override this, e.g. for API versions.
        """
        return {}

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_healthcheck(self) -> httpx.Response:
        """Check if the backend is reachable by sending a test request.

        Returns:
            httpx.Response: The response from the healthcheck request.
        """
        return await self.do_request(method="GET", endpoint=self._get_endpoint_healthcheck())

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialise the HTTP client.

        Args:
            transport (httpx.AsyncBaseTransport | None): Optional transport, e.g. an
                httpx.MockTransport when the backend is simulated.
        """
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def do_request(
        self,
        method: str = "GET",
        json: Any | None = None,
        params: QueryParamTypes | None = None,
        endpoint: str = "",
        additional_headers: dict | None = None,
        raise_on_error: bool = False,
    ) -> httpx.Response:
        """Send an HTTP request to the backend.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE).
            json: JSON-serialisable body (sets Content-Type automatically).
            params: URL query parameters, merged over the engine defaults.
            endpoint: Path to append to the base URL (leading slash optional).
            additional_headers: Extra headers that override the defaults.
            raise_on_error: Raise RemoteRequestError on a non-2xx status.

        Returns:
            The raw httpx.Response.

        Raises:
            Exception: If the client is not initialised.
            RemoteRequestError: If raise_on_error is set and the backend answers with a non-2xx status.
        """
        if self._client is None:
            raise Exception("HTTP client not initialised. Call boot() before making requests.")

        endpoint = "/" + endpoint.strip().lstrip("/") if endpoint.strip() else ""

        headers: dict = {"User-Agent": self.user_agent}
        headers.update(self._get_auth_header())
        if additional_headers:
            headers.update(additional_headers)

        query = dict(self._get_default_params())
        if params:
            query.update(params)

        kwargs: dict = {
            "url": f"{self._get_base_url().rstrip('/')}{endpoint}",
            "headers": headers,
            "timeout": self.timeout,
            "params": query or None,
        }
        if json is not None:
            kwargs["json"] = json

        response = await self._client.request(method, **kwargs)

        if raise_on_error and not response.is_success:
            self.logging.error(
                "%s %s failed with status %d: %s",
                method,
                kwargs["url"],
                response.status_code,
                response.text[:500],
            )
            raise RemoteRequestError(
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
            )

        return response
