"""Client repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ...models.client import ChildDependent, Client


class ClientRepository(Protocol):
    """Repository for managing client profiles."""

    def get_by_id(self, client_id: int) -> Optional[Client]:
        """Retrieve a client by ID."""
        ...

    def list_all(self) -> list[Client]:
        """List clients ordered by last then first name."""
        ...

    def search(self, term: str) -> list[Client]:
        """List clients whose name or email contains ``term``."""
        ...

    def create(self, client: Client, *, children: Sequence[ChildDependent] = ()) -> Client:
        """Create a new client with optional children."""
        ...

    def update(self, client_id: int, changes: Mapping[str, Any]) -> Optional[Client]:
        """Apply field changes; returns None when the client does not exist."""
        ...

    def delete(self, client_id: int) -> bool:
        """Delete a client and everything attached to it."""
        ...

    def list_children(self, client_id: int) -> list[ChildDependent]:
        """List children recorded on a client profile."""
        ...

    def replace_children(
        self, client_id: int, children: Sequence[ChildDependent]
    ) -> list[ChildDependent]:
        """Replace the children recorded on a client profile."""
        ...
