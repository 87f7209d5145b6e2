from typing import Any

from pydantic import BaseModel, Field

from shared.clients.extdata.models.Scope import ScopeType


class CollectionArgs(BaseModel):
    publisherName: str = Field(description="The publisher name of the extension.")
    extensionName: str = Field(description="The extension name.")
    collectionName: str = Field(description="The name of the collection.")
    scopeType: ScopeType | None = Field(
        default=None,
        description="Optional scope type. 'Default' is project collection scope (the default), 'User' is user-specific scope.",
    )
    scopeValue: str | None = Field(
        default=None,
        description="Optional scope value (e.g., 'me' for user scope). Defaults to 'Current' for Default scope and 'me' for User scope.",
    )


class GetDocumentArgs(CollectionArgs):
    collectionName: str = Field(description="The name of the collection containing the document.")
    documentId: str = Field(description="The ID of the document to retrieve.")


class GetDocumentsArgs(CollectionArgs):
    collectionName: str = Field(description="The name of the collection to retrieve documents from.")


class CreateDocumentArgs(CollectionArgs):
    collectionName: str = Field(description="The name of the collection to create the document in. Collection is created if it doesn't exist.")
    document: dict[str, Any] = Field(description="The document to create as a JSON object. Can optionally include an 'id' property.")


class SetDocumentArgs(CollectionArgs):
    collectionName: str = Field(description="The name of the collection to set the document in.")
    document: dict[str, Any] = Field(description="The document to set as a JSON object. Must include an 'id' property.")


class UpdateDocumentArgs(CollectionArgs):
    collectionName: str = Field(description="The name of the collection containing the document.")
    document: dict[str, Any] = Field(
        description="The document to update as a JSON object. Must include 'id' and '__etag' properties. Set '__etag' to -1 for last-write-wins behavior."
    )


class DeleteDocumentArgs(CollectionArgs):
    collectionName: str = Field(description="The name of the collection containing the document.")
    documentId: str = Field(description="The ID of the document to delete.")
