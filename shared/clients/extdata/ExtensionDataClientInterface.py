from abc import abstractmethod
from typing import Any

from shared.helper.HelperConfig import HelperConfig
from shared.clients.ClientInterface import ClientInterface
from shared.clients.extdata.models.Scope import ResolvedScope


class ExtensionDataClientInterface(ClientInterface):
    """
    Remote access to the document storage of installed extensions.

    A document lives in a collection, addressed by publisher, extension and
    scope. The six document verbs below are the only surface the tool layer
    uses, so any backend (plain HTTP or an SDK wrapper) can sit behind it.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "extdata"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_documents(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str) -> str:
        """
        Returns the endpoint path of a collection's document list.

        Args:
            publisher_name (str): The publisher of the extension.
            extension_name (str): The extension name.
            scope (ResolvedScope): The resolved scope segments.
            collection_name (str): The collection name (not yet encoded).

        Returns:
            str: The endpoint path (e.g. "/_apis/.../Collections/settings/Documents")
        """
        pass

    @abstractmethod
    def _get_endpoint_document(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str, document_id: str) -> str:
        """
        Returns the endpoint path of a single document.

        Returns:
            str: The endpoint path (e.g. "/_apis/.../Collections/settings/Documents/doc-1")
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_get_document(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str, document_id: str) -> dict:
        """Fetch a single document by id.

        Raises:
            RemoteRequestError: If the backend rejects the request (e.g. 404 when the document does not exist).
        """
        endpoint = self._get_endpoint_document(publisher_name, extension_name, scope, collection_name, document_id)
        response = await self.do_request(method="GET", endpoint=endpoint, raise_on_error=True)
        return response.json()

    async def do_get_documents(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str) -> list | dict:
        """Fetch all documents of a collection.

        Returns:
            list | dict: The raw response. Backends may wrap the list in an envelope ({"count": n, "value": [...]}).
        """
        endpoint = self._get_endpoint_documents(publisher_name, extension_name, scope, collection_name)
        response = await self.do_request(method="GET", endpoint=endpoint, raise_on_error=True)
        return response.json()

    async def do_create_document(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str, document: dict[str, Any]) -> dict:
        """Insert a new document. The backend assigns an id if the document has none and fails if the id is taken."""
        endpoint = self._get_endpoint_documents(publisher_name, extension_name, scope, collection_name)
        response = await self.do_request(method="POST", endpoint=endpoint, json=document, raise_on_error=True)
        return response.json()

    async def do_set_document(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str, document: dict[str, Any]) -> dict:
        """Insert the document, or overwrite it in full if its id already exists."""
        endpoint = self._get_endpoint_document(publisher_name, extension_name, scope, collection_name, str(document["id"]))
        response = await self.do_request(method="PUT", endpoint=endpoint, json=document, raise_on_error=True)
        return response.json()

    async def do_update_document(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str, document: dict[str, Any]) -> dict:
        """Overwrite an existing document if its "__etag" matches the stored one.

        The document is sent as given; an "__etag" of -1 makes the backend skip the check.

        Raises:
            RemoteRequestError: If the document does not exist or the etag does not match.
        """
        endpoint = self._get_endpoint_document(publisher_name, extension_name, scope, collection_name, str(document["id"]))
        response = await self.do_request(method="PATCH", endpoint=endpoint, json=document, raise_on_error=True)
        return response.json()

    async def do_delete_document(self, publisher_name: str, extension_name: str, scope: ResolvedScope, collection_name: str, document_id: str) -> None:
        """Delete a document by id. The backend answers without a body."""
        endpoint = self._get_endpoint_document(publisher_name, extension_name, scope, collection_name, document_id)
        await self.do_request(method="DELETE", endpoint=endpoint, raise_on_error=True)
