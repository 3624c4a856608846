"""Transfer Ledger — validates, records and lists money movements.

Invariants:
    - Validation order is fixed: sender exists, receiver resolves, amount > 0.
      The first failing check is the one reported
    - Nothing is persisted unless all three checks pass
    - fee_percent defaults to 0.5 and is stored as metadata only (no balances exist)
    - description is truncated to 255 characters, never rejected
    - Ledger rows are append-only: no update or delete operation

Design Decisions:
    - Receiver addressed by ReceiverRef (ById | ByEmail), resolved once up front
    - Receiver email joined in at read time with an OUTER join: a vanished
      receiver reads as UNKNOWN_EMAIL instead of failing the whole list
"""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paybuddy.core.domain_types import ByEmail, ById, ReceiverRef, UNKNOWN_EMAIL
from paybuddy.core.enforce_transfer import (
    resolve_fee_percent, truncate_description, validate_amount,
)
from paybuddy.core.errors import NotFoundError
from paybuddy.core.projections import to_transaction_view
from paybuddy.models.transaction import Transaction
from paybuddy.models.user import User
from paybuddy.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


class TransferLedger:
    """Money movements between registered users."""

    def __init__(self, db: AsyncSession, users: CredentialStore):
        self.db = db
        self.users = users

    async def _resolve_receiver(self, receiver: ReceiverRef) -> User:
        match receiver:
            case ById(user_id=user_id):
                user = await self.users.find_by_id(user_id)
                identifier: object = user_id
            case ByEmail(email=email):
                user = await self.users.find_by_email(email)
                identifier = email
            case _:
                raise TypeError(f"Unsupported receiver reference: {receiver!r}")
        if user is None:
            raise NotFoundError("receiver", identifier)
        return user

    async def create_transaction(
        self,
        sender_id: int,
        receiver: ReceiverRef,
        description: str | None,
        amount: Decimal | int | float | str | None,
        fee_percent: Decimal | int | float | str | None = None,
    ) -> Transaction:
        """Record a transfer from sender_id to the resolved receiver."""
        sender = await self.users.find_by_id(sender_id)
        if sender is None:
            raise NotFoundError("sender", sender_id)
        target = await self._resolve_receiver(receiver)
        checked_amount = validate_amount(amount)

        txn = Transaction(
            sender_id=sender.id,
            receiver_id=target.id,
            description=truncate_description(description),
            amount=checked_amount,
            fee_percent=resolve_fee_percent(fee_percent),
        )
        self.db.add(txn)
        await self.db.commit()

        logger.info(
            f"Transaction recorded: {txn.amount} from {sender.id} to {target.id}",
            extra={"transaction_id": txn.id, "user_id": sender.id},
        )
        return txn

    async def _list_views(self, *conditions) -> list[dict]:
        query = (
            select(Transaction, User.email)
            .outerjoin(User, User.id == Transaction.receiver_id)
            .where(*conditions)
            .order_by(Transaction.id)
        )
        result = await self.db.execute(query)
        return [
            to_transaction_view(txn, email if email is not None else UNKNOWN_EMAIL)
            for txn, email in result.all()
        ]

    async def list_all(self) -> list[dict]:
        return await self._list_views()

    async def list_by_sender(self, sender_id: int) -> list[dict]:
        if await self.users.find_by_id(sender_id) is None:
            raise NotFoundError("sender", sender_id)
        return await self._list_views(Transaction.sender_id == sender_id)

    async def list_by_receiver(self, receiver_id: int) -> list[dict]:
        if await self.users.find_by_id(receiver_id) is None:
            raise NotFoundError("receiver", receiver_id)
        return await self._list_views(Transaction.receiver_id == receiver_id)
