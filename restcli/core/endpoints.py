"""Named endpoints and their URL path templates."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from restcli.core.errors import NotFoundError

PLACEHOLDER_PATTERN = re.compile(r"\{([^{}]+)\}")

DEFAULT_ENDPOINTS: Mapping[str, str] = MappingProxyType({
    # httpbin-style test endpoints
    "get": "get",
    "get-params": "anything/{anythingId}",
    "post": "post",
    "put": "put",
    "delete": "delete",

    # Files
    "files-get": "files/{fileId}",
    "files-full": "files/{fileId}/full",
    "files-list": "files",

    # Users
    "users-get": "users/{userId}",
    "users-list": "users",
    "users-create": "users",

    # Documents
    "docs-get": "documents/{docId}",
    "docs-update": "documents/{docId}",
    "docs-list": "documents",

    # Multiple parameters
    "files-download": "files/{fileId}/download/{version}",
    "users-files": "users/{userId}/files/{fileId}",
})


def placeholders(template: str) -> list[str]:
    """Return the placeholder names in ``template`` in order of appearance."""
    return PLACEHOLDER_PATTERN.findall(template)


class EndpointRegistry:
    """Read-only lookup from endpoint name to path template."""

    def __init__(self, endpoints: Mapping[str, str] = DEFAULT_ENDPOINTS):
        self._endpoints = MappingProxyType(dict(endpoints))

    def __contains__(self, name: object) -> bool:
        return name in self._endpoints

    def __len__(self) -> int:
        return len(self._endpoints)

    def is_valid(self, name: str) -> bool:
        """Check whether ``name`` is a registered endpoint."""
        return name in self._endpoints

    def resolve(self, name: str) -> str:
        """Return the path template for ``name``.

        Raises:
            NotFoundError: If the name is not registered. The error lists
                the valid names.
        """
        try:
            return self._endpoints[name]
        except KeyError:
            raise NotFoundError(name, self.names()) from None

    def names(self) -> list[str]:
        return sorted(self._endpoints)

    def list_endpoints(self) -> list[tuple[str, str]]:
        """All ``(name, template)`` pairs sorted by name."""
        return sorted(self._endpoints.items())


default_registry = EndpointRegistry()


def resolve(name: str) -> str:
    return default_registry.resolve(name)


def is_valid(name: str) -> bool:
    return default_registry.is_valid(name)


def list_endpoints() -> list[tuple[str, str]]:
    return default_registry.list_endpoints()
