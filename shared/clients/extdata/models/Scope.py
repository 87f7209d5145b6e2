"""Scope of an extension data collection, independent of the backend."""

from enum import Enum

from pydantic import BaseModel

DEFAULT_SCOPE_VALUE = "Current"
USER_SCOPE_VALUE = "me"


class ScopeType(str, Enum):
    """
    Addressing axis of a collection. "Default" is the organization-wide (project
    collection) scope, "User" is the per-user scope.
    """
    DEFAULT = "Default"
    USER = "User"


class ResolvedScope(BaseModel):
    """
    The two path segments the remote service expects for a scope.
    """
    scope_type: ScopeType
    scope_value: str


def resolve_scope(scope_type: ScopeType | str | None = None, scope_value: str | None = None) -> ResolvedScope:
    """Turn the caller's optional scope arguments into concrete path segments.

    A missing scope type means the default scope. An empty scope value falls back
    to "Current" for the default scope and to "me" (the calling user) for the user
    scope; any other value is used as given, in both scopes.

    Args:
        scope_type (ScopeType | str | None): "Default", "User" or None.
        scope_value (str | None): Optional sub-identifier.

    Returns:
        ResolvedScope: The resolved scope type and value.
    """
    if scope_type is not None and ScopeType(scope_type) == ScopeType.USER:
        return ResolvedScope(scope_type=ScopeType.USER, scope_value=scope_value or USER_SCOPE_VALUE)
    return ResolvedScope(scope_type=ScopeType.DEFAULT, scope_value=scope_value or DEFAULT_SCOPE_VALUE)
