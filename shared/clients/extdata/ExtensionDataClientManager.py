import httpx

from shared.helper.HelperConfig import HelperConfig
from shared.clients.extdata.ExtensionDataClientInterface import ExtensionDataClientInterface


class ExtensionDataClientManager:
    """
    Builds, boots and caches the configured extension data client.

    Nothing is instantiated on construction: configuration problems are raised
    from get_client() on every call, so callers can report them per request
    instead of failing at startup.
    """

    def __init__(self, helper_config: HelperConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self._transport = transport
        self._client: ExtensionDataClientInterface | None = None

    def _get_engine_from_env(self) -> str:
        """Read the extension data engine name from env configuration.

        Returns:
            str: Capitalised engine name (e.g. "Azuredevops").

        Raises:
            ValueError: If EXTDATA_ENGINE is empty.
        """
        engine = self.helper_config.get_string_val("EXTDATA_ENGINE", default="AzureDevOps")
        if not engine.strip():
            raise ValueError("No extension data engine specified in configuration (EXTDATA_ENGINE).")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> ExtensionDataClientInterface:
        """Instantiate the client for the configured engine.

        Returns:
            ExtensionDataClientInterface: The instantiated (not yet booted) client.

        Raises:
            ValueError: If the engine is unsupported or its configuration is incomplete.
        """
        engine = self._get_engine_from_env()
        class_name = f"ExtensionDataClient{engine}"
        try:
            module = __import__(
                f"shared.clients.extdata.{engine.lower()}.{class_name}",
                fromlist=[class_name],
            )
            client_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ValueError("Unsupported extension data engine '%s'. Error: %s" % (engine, e))
        client = client_class(helper_config=self.helper_config)
        self.logging.debug("Instantiated extension data client for engine: %s", engine)
        return client

    async def get_client(self) -> ExtensionDataClientInterface:
        """Return the booted client, creating it on first use.

        Raises:
            ValueError: If the client cannot be instantiated from the configuration.
        """
        if self._client is None:
            client = self._initialize_client()
            await client.boot(transport=self._transport)
            self._client = client
            self.logging.info("Extension data client '%s' booted.", client.get_engine_name())
        return self._client

    async def close(self) -> None:
        """Close the cached client, if any."""
        if self._client is not None:
            await self._client.close()
            self._client = None
