"""SQLModel implementation of the client repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Sequence

from sqlmodel import Session, col, or_, select

from ...logging_config import get_logger
from ...models.client import ChildDependent, Client

logger = get_logger(__name__)


class SQLModelClientRepository:
    """SQLModel-based client repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, client_id: int) -> Optional[Client]:
        """Retrieve a client by ID."""
        with self.session_factory() as session:
            return session.get(Client, client_id)

    def list_all(self) -> list[Client]:
        """List clients ordered by last then first name."""
        with self.session_factory() as session:
            statement = select(Client).order_by(Client.last_name, Client.first_name)  # type: ignore
            return list(session.exec(statement).all())

    def search(self, term: str) -> list[Client]:
        """List clients whose name or email contains ``term``."""
        pattern = f"%{term.strip()}%"
        with self.session_factory() as session:
            statement = (
                select(Client)
                .where(
                    or_(
                        col(Client.first_name).ilike(pattern),
                        col(Client.last_name).ilike(pattern),
                        col(Client.email).ilike(pattern),
                    )
                )
                .order_by(Client.last_name, Client.first_name)  # type: ignore
            )
            return list(session.exec(statement).all())

    def create(self, client: Client, *, children: Sequence[ChildDependent] = ()) -> Client:
        """Create a new client with optional children."""
        with self.session_factory() as session:
            session.add(client)
            session.flush()
            for child in children:
                child.client_id = client.id
                session.add(child)
            session.commit()
            session.refresh(client)
            logger.info("Client created", extra={"client_id": client.id})
            return client

    def update(self, client_id: int, changes: Mapping[str, Any]) -> Optional[Client]:
        """Apply field changes; returns None when the client does not exist."""
        with self.session_factory() as session:
            client = session.get(Client, client_id)
            if client is None:
                return None
            for field_name, value in changes.items():
                if field_name in ("id", "created_at"):
                    continue
                setattr(client, field_name, value)
            client.updated_at = datetime.now(timezone.utc)
            session.add(client)
            session.commit()
            session.refresh(client)
            return client

    def delete(self, client_id: int) -> bool:
        """Delete a client; children and analyses cascade."""
        with self.session_factory() as session:
            client = session.get(Client, client_id)
            if client is None:
                return False
            session.delete(client)
            session.commit()
            logger.info("Client deleted", extra={"client_id": client_id})
            return True

    def list_children(self, client_id: int) -> list[ChildDependent]:
        """List children recorded on a client profile."""
        with self.session_factory() as session:
            statement = (
                select(ChildDependent)
                .where(ChildDependent.client_id == client_id)
                .order_by(ChildDependent.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def replace_children(
        self, client_id: int, children: Sequence[ChildDependent]
    ) -> list[ChildDependent]:
        """Replace the children recorded on a client profile."""
        with self.session_factory() as session:
            existing = session.exec(
                select(ChildDependent).where(ChildDependent.client_id == client_id)
            ).all()
            for child in existing:
                session.delete(child)
            for child in children:
                child.client_id = client_id
                session.add(child)
            session.commit()
            for child in children:
                session.refresh(child)
            return list(children)
