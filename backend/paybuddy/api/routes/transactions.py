"""Transaction Routes — record transfers and read the ledger.

Invariants:
    - receiver in the body may be an id or an email; it becomes a ReceiverRef here
    - POST answers 201 with the stored row (id and fee_percent included)
"""

from fastapi import APIRouter, Depends, status

from paybuddy.api.dependencies import get_current_user, get_transfer_ledger
from paybuddy.core.domain_types import receiver_ref
from paybuddy.schemas.transaction import (
    TransactionCreate, TransactionResponse, TransactionView,
)
from paybuddy.services.transfer_ledger import TransferLedger

router = APIRouter(
    prefix="/api/v1/transactions", tags=["transactions"],
    dependencies=[Depends(get_current_user)],
)


@router.post(
    "", response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_transaction(
    body: TransactionCreate,
    ledger: TransferLedger = Depends(get_transfer_ledger),
):
    txn = await ledger.create_transaction(
        body.sender_id,
        receiver_ref(body.receiver),
        body.description,
        body.amount,
        body.fee_percent,
    )
    return TransactionResponse.model_validate(txn)


@router.get("", response_model=list[TransactionView])
async def list_transactions(
    ledger: TransferLedger = Depends(get_transfer_ledger),
):
    return await ledger.list_all()


@router.get("/sent/{sender_id}", response_model=list[TransactionView])
async def list_sent(
    sender_id: int,
    ledger: TransferLedger = Depends(get_transfer_ledger),
):
    return await ledger.list_by_sender(sender_id)


@router.get("/received/{receiver_id}", response_model=list[TransactionView])
async def list_received(
    receiver_id: int,
    ledger: TransferLedger = Depends(get_transfer_ledger),
):
    return await ledger.list_by_receiver(receiver_id)
