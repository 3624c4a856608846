"""Connection Routes — add, remove and list payable counterparties.

Invariants:
    - Routes hold no rules: ConnectionGraph raises, error handlers map status codes
    - PUT answers 201 with the stored edge (ids only, even when added by email);
      DELETE answers 204
"""

from fastapi import APIRouter, Depends, Response, status

from paybuddy.api.dependencies import get_connection_graph, get_current_user
from paybuddy.core.domain_types import receiver_ref
from paybuddy.schemas.connection import (
    ConnectionAdd, ConnectionRequest, ConnectionView,
)
from paybuddy.services.connection_graph import ConnectionGraph

router = APIRouter(
    prefix="/api/v1/connections", tags=["connections"],
    dependencies=[Depends(get_current_user)],
)


@router.put(
    "", response_model=ConnectionRequest, status_code=status.HTTP_201_CREATED,
)
async def add_connection(
    body: ConnectionAdd,
    graph: ConnectionGraph = Depends(get_connection_graph),
):
    edge = await graph.add_connection(
        body.user_id, receiver_ref(body.connection_id),
    )
    return ConnectionRequest(user_id=edge.user_id, connection_id=edge.connection_id)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def remove_connection(
    body: ConnectionRequest,
    graph: ConnectionGraph = Depends(get_connection_graph),
):
    await graph.remove_connection(body.user_id, body.connection_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}", response_model=list[ConnectionView])
async def list_connections(
    user_id: int,
    graph: ConnectionGraph = Depends(get_connection_graph),
):
    return await graph.list_connections(user_id)
