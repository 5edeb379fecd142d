"""Entity-tag bookkeeping for conditional requests.

Encapsulates the mapping from a logical resource to the last entity tag the
server issued for it.
"""

from typing import Protocol

from feedcore.fetch.constants import HEADER_IF_NONE_MATCH
from feedcore.observability.logging import get_logger


class EntityTagBackend(Protocol):
    """Protocol for entity-tag storage.

    Abstracts the storage layer so a pool of clients can share tags or an
    application can persist them between runs.
    """

    def get(self, resource: str) -> str | None:
        """Return the stored tag for a resource, if any."""
        ...

    def set(self, resource: str, etag: str) -> None:
        """Store the tag for a resource."""
        ...

    def discard(self, resource: str) -> None:
        """Forget the tag for a resource."""
        ...


class EntityTagStore:
    """In-memory mapping from resource key to entity tag.

    Implements EntityTagBackend. Keys are opaque; the fetch client uses the
    request URL unless the caller names the resource explicitly.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._tags: dict[str, str] = dict(initial or {})

    def get(self, resource: str) -> str | None:
        return self._tags.get(resource)

    def set(self, resource: str, etag: str) -> None:
        self._tags[resource] = etag

    def discard(self, resource: str) -> None:
        self._tags.pop(resource, None)

    def __contains__(self, resource: object) -> bool:
        return resource in self._tags

    def __len__(self) -> int:
        return len(self._tags)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of all stored tags."""
        return dict(self._tags)


class EntityTagManager:
    """Applies entity-tag policy around a single request.

    Encapsulates the logic for:
    - Building the If-None-Match header from the stored tag
    - Recording the tag from a completed response, or clearing it when the
      server omits one or entity tags are disabled
    """

    def __init__(self, backend: EntityTagBackend, enabled: bool = True) -> None:
        """Initialize the manager.

        Args:
            backend: Storage for entity tags.
            enabled: Whether entity-tag revalidation is active.
        """
        self._backend = backend
        self._enabled = enabled
        self._log = get_logger("etag")

    @property
    def enabled(self) -> bool:
        """Whether entity-tag revalidation is active."""
        return self._enabled

    def get_conditional_headers(self, resource: str) -> dict[str, str]:
        """Get conditional request headers for a resource.

        Args:
            resource: Resource key to look up.

        Returns:
            Dictionary with If-None-Match, or empty when nothing applies.
        """
        if not self._enabled:
            return {}

        etag = self._backend.get(resource)
        self._log.debug("etag_lookup", resource=resource, has_etag=bool(etag))
        if not etag:
            return {}
        return {HEADER_IF_NONE_MATCH: etag}

    def record(self, resource: str, etag: str | None) -> str:
        """Record the entity tag observed on a completed response.

        Args:
            resource: Resource key.
            etag: ETag header value, or None when the server sent none.

        Returns:
            The tag now associated with the resource ("" when cleared).
        """
        if self._enabled and etag:
            self._backend.set(resource, etag)
            self._log.debug("etag_stored", resource=resource, etag=etag)
            return etag

        self._backend.discard(resource)
        self._log.debug("etag_cleared", resource=resource)
        return ""
