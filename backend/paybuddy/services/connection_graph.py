"""Connection Graph — directed "may-pay" edges between users.

Invariants:
    - Friend given by id or by email (ReceiverRef); an email is resolved first
    - Self-connection rejected before any lookup by id
    - Both endpoints must exist: NotFoundError("user") otherwise
    - At most one edge per ordered pair: AlreadyExistsError("connection"),
      also when a concurrent insert trips the composite primary key
    - Removing a missing edge raises NotFoundError("connection"), distinct from
      a missing endpoint
    - Edges are never mirrored

Design Decisions:
    - Endpoint lookups go through CredentialStore: the graph reads users, never writes them
    - list_connections enriches with one aliased join instead of a lookup per edge
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from paybuddy.core.domain_types import ByEmail, ById, ReceiverRef
from paybuddy.core.enforce_connection import check_not_self
from paybuddy.core.errors import AlreadyExistsError, NotFoundError
from paybuddy.core.projections import to_connection_view
from paybuddy.models.connection import Connection
from paybuddy.models.user import User
from paybuddy.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


class ConnectionGraph:
    """Add, remove and list payable counterparties."""

    def __init__(self, db: AsyncSession, users: CredentialStore):
        self.db = db
        self.users = users

    async def _require_user(self, user_id: int) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    async def _edge_exists(self, user_id: int, connection_id: int) -> bool:
        return await self.db.get(Connection, (user_id, connection_id)) is not None

    async def _resolve_friend(self, friend: int | ReceiverRef) -> int:
        match friend:
            case ByEmail(email=email):
                user = await self.users.find_by_email(email)
                if user is None:
                    raise NotFoundError("user", email)
                return user.id
            case ById(user_id=user_id):
                return user_id
            case int():
                return friend
            case _:
                raise TypeError(f"Unsupported friend reference: {friend!r}")

    async def add_connection(
        self, user_id: int, friend: int | ReceiverRef,
    ) -> Connection:
        """Add the edge user_id -> friend, where friend is an id or a ReceiverRef."""
        connection_id = await self._resolve_friend(friend)
        check_not_self(user_id, connection_id)
        await self._require_user(user_id)
        await self._require_user(connection_id)

        edge_label = f"{user_id} -> {connection_id}"
        if await self._edge_exists(user_id, connection_id):
            raise AlreadyExistsError("connection", edge_label)

        edge = Connection(user_id=user_id, connection_id=connection_id)
        self.db.add(edge)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(
                "Connection insert lost a race",
                extra={"user_id": user_id, "connection_id": connection_id},
            )
            raise AlreadyExistsError("connection", edge_label)

        logger.info(
            "Connection added",
            extra={"user_id": user_id, "connection_id": connection_id},
        )
        return edge

    async def remove_connection(self, user_id: int, connection_id: int) -> None:
        await self._require_user(user_id)
        await self._require_user(connection_id)

        edge = await self.db.get(Connection, (user_id, connection_id))
        if edge is None:
            raise NotFoundError("connection", f"{user_id} -> {connection_id}")

        await self.db.delete(edge)
        await self.db.commit()
        logger.info(
            "Connection removed",
            extra={"user_id": user_id, "connection_id": connection_id},
        )

    async def list_connections(self, user_id: int) -> list[dict]:
        """Outgoing edges of user_id, each with both usernames and the friend's email."""
        await self._require_user(user_id)

        owner = aliased(User)
        friend = aliased(User)
        result = await self.db.execute(
            select(Connection, owner.username, friend.email, friend.username)
            .join(owner, owner.id == Connection.user_id)
            .join(friend, friend.id == Connection.connection_id)
            .where(Connection.user_id == user_id)
        )
        return [
            to_connection_view(edge, my_username, friend_email, friend_username)
            for edge, my_username, friend_email, friend_username in result.all()
        ]
