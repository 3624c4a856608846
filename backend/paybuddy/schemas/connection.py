"""Connection Schemas — edge input and enriched read form.

Invariants:
    - ConnectionAdd.connection_id accepts an int id or the friend's email;
      remove and the stored edge always carry int ids
"""

from pydantic import BaseModel


class ConnectionAdd(BaseModel):
    """Body for adding an edge; the friend may be named by id or email."""
    user_id: int
    connection_id: int | str


class ConnectionRequest(BaseModel):
    """Body for removing an edge, and the edge returned after an add."""
    user_id: int
    connection_id: int


class ConnectionView(BaseModel):
    user_id: int
    connection_id: int
    my_username: str
    friend_email: str
    friend_username: str
