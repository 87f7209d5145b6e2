from enum import Enum
from functools import partial
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from shared.clients.extdata.ExtensionDataClientInterface import ExtensionDataClientInterface
from shared.clients.extdata.models.Scope import resolve_scope
from shared.helper.HelperConfig import HelperConfig
from server.core.ToolRegistry import ToolRegistry
from server.models.requests import (
    CollectionArgs,
    CreateDocumentArgs,
    DeleteDocumentArgs,
    GetDocumentArgs,
    GetDocumentsArgs,
    SetDocumentArgs,
    UpdateDocumentArgs,
)
from server.models.responses import ToolResult

ConnectionProvider = Callable[[], Awaitable[ExtensionDataClientInterface]]

UNKNOWN_ERROR = "Unknown error occurred"


class OperationKind(str, Enum):
    READ_ONE = "ReadOne"
    READ_ALL = "ReadAll"
    CREATE = "Create"
    UPSERT = "Upsert"
    UPDATE_CONCURRENT = "UpdateConcurrent"
    DELETE = "Delete"


# operations addressed by a documentId argument
_DOCUMENT_ID_KINDS = (OperationKind.READ_ONE, OperationKind.DELETE)
# operations carrying a document body
_DOCUMENT_BODY_KINDS = (OperationKind.CREATE, OperationKind.UPSERT, OperationKind.UPDATE_CONCURRENT)


class DocumentOperation(BaseModel):
    """
    Declarative description of one document tool.

    Attributes:
        kind (OperationKind): Which of the six document operations this is.
        tool_name (str): Public tool name.
        description (str): Tool description shown to the host.
        action (str): Gerund used in error messages ("Error <action>: ...").
        args_model (type[CollectionArgs]): Argument record with the required fields.
        remote_verb (str): Name of the ExtensionDataClientInterface method to call.
        id_required_for (str | None): Operation label if the document must carry an "id".
    """
    kind: OperationKind
    tool_name: str
    description: str
    action: str
    args_model: type[CollectionArgs]
    remote_verb: str
    id_required_for: str | None = None


EXTENSION_DATA_OPERATIONS: list[DocumentOperation] = [
    DocumentOperation(
        kind=OperationKind.READ_ONE,
        tool_name="extensiondata_get_document",
        description="Get a document from an extension's data collection by ID. Documents are JSON objects with special 'id' and '__etag' properties for versioning.",
        action="getting document",
        args_model=GetDocumentArgs,
        remote_verb="do_get_document",
    ),
    DocumentOperation(
        kind=OperationKind.READ_ALL,
        tool_name="extensiondata_get_documents",
        description="Get all documents from an extension's data collection. Returns up to 100,000 documents.",
        action="getting documents",
        args_model=GetDocumentsArgs,
        remote_verb="do_get_documents",
    ),
    DocumentOperation(
        kind=OperationKind.CREATE,
        tool_name="extensiondata_create_document",
        description="Create a new document in an extension's data collection. If the document includes an 'id' property (max 50 chars), it will be used; otherwise a GUID is generated. Fails if a document with the same ID already exists.",
        action="creating document",
        args_model=CreateDocumentArgs,
        remote_verb="do_create_document",
    ),
    DocumentOperation(
        kind=OperationKind.UPSERT,
        tool_name="extensiondata_set_document",
        description="Set (upsert) a document in an extension's data collection. Creates a new document if the ID doesn't exist, or updates the existing document if it does.",
        action="setting document",
        args_model=SetDocumentArgs,
        remote_verb="do_set_document",
        id_required_for="set",
    ),
    DocumentOperation(
        kind=OperationKind.UPDATE_CONCURRENT,
        tool_name="extensiondata_update_document",
        description="Update an existing document in an extension's data collection. The document must already exist. Use '__etag' property for concurrency control (set to -1 for last-write-wins).",
        action="updating document",
        args_model=UpdateDocumentArgs,
        remote_verb="do_update_document",
        id_required_for="update",
    ),
    DocumentOperation(
        kind=OperationKind.DELETE,
        tool_name="extensiondata_delete_document",
        description="Delete a document from an extension's data collection by ID.",
        action="deleting document",
        args_model=DeleteDocumentArgs,
        remote_verb="do_delete_document",
    ),
]


class ExtensionDataTools:
    """Runs the document operations: validate -> resolve scope -> one remote call -> uniform result."""

    def __init__(self, helper_config: HelperConfig, connection_provider: ConnectionProvider) -> None:
        self.logging = helper_config.get_logger()
        self._connection_provider = connection_provider

    ##########################################
    ############### CORE #####################
    ##########################################

    async def execute(self, operation: DocumentOperation, arguments: dict[str, Any]) -> ToolResult:
        """Run one document operation and shape its outcome.

        Never raises (except on cancellation): argument, configuration, remote
        and transport failures all come back as error results.

        Args:
            operation (DocumentOperation): The table entry to run.
            arguments (dict[str, Any]): The flat argument record from the host.

        Returns:
            ToolResult: The rendered document(s) or confirmation, or an error result.
        """
        try:
            args = operation.args_model.model_validate(arguments)

            if operation.id_required_for and not args.document.get("id"):
                return self._fail(operation, f"Document must include an 'id' property for {operation.id_required_for} operation")

            scope = resolve_scope(args.scopeType, args.scopeValue)
            self.logging.info(
                "%s: publisher=%s extension=%s collection=%s scope=%s/%s",
                operation.tool_name, args.publisherName, args.extensionName,
                args.collectionName, scope.scope_type.value, scope.scope_value,
            )

            call_kwargs: dict[str, Any] = {
                "publisher_name": args.publisherName,
                "extension_name": args.extensionName,
                "scope": scope,
                "collection_name": args.collectionName,
            }
            if operation.kind in _DOCUMENT_ID_KINDS:
                call_kwargs["document_id"] = args.documentId
            elif operation.kind in _DOCUMENT_BODY_KINDS:
                call_kwargs["document"] = args.document

            client = await self._connection_provider()
            result = await getattr(client, operation.remote_verb)(**call_kwargs)
            return self._render(operation, args, result)
        except Exception as e:
            return self._fail(operation, str(e) or UNKNOWN_ERROR)

    def _render(self, operation: DocumentOperation, args: CollectionArgs, result: Any) -> ToolResult:
        if operation.kind == OperationKind.DELETE:
            return ToolResult.from_text(
                f"Document '{args.documentId}' deleted successfully from collection '{args.collectionName}'"
            )
        if operation.kind == OperationKind.READ_ALL and isinstance(result, dict) and isinstance(result.get("value"), list):
            result = result["value"]
        return ToolResult.from_json(result)

    def _fail(self, operation: DocumentOperation, detail: str) -> ToolResult:
        self.logging.error("%s failed: %s", operation.tool_name, detail)
        return ToolResult.from_error(operation.action, detail)


def configure_extension_data_tools(
    registry: ToolRegistry,
    helper_config: HelperConfig,
    connection_provider: ConnectionProvider,
) -> ExtensionDataTools:
    """Register the six extension data tools on a registry.

    Args:
        registry (ToolRegistry): The host registry.
        helper_config (HelperConfig): Configuration and logger.
        connection_provider (ConnectionProvider): Coroutine function returning a booted client.

    Returns:
        ExtensionDataTools: The executor the tools are bound to.
    """
    tools = ExtensionDataTools(helper_config=helper_config, connection_provider=connection_provider)
    for operation in EXTENSION_DATA_OPERATIONS:
        registry.tool(
            name=operation.tool_name,
            description=operation.description,
            args_model=operation.args_model,
            handler=partial(tools.execute, operation),
        )
    return tools
