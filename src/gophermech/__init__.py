"""gophermech - a stateful navigator for Gopherspace.

Browse a Gopher-style item tree with history and an item cache::

    from gophermech import LocalCollaborator, Navigator

    nav = Navigator(LocalCollaborator("~/gopher"))
    nav.navigate("localhost")
    nav.select_item("Computers")
    nav.up()
"""

from .cache import ItemCache
from .errors import (
    GopherMechError,
    HistoryBoundaryError,
    ItemSaveError,
    NavigationError,
    NoCurrentItemError,
    NoMatchError,
    ProtocolError,
)
from .history import History
from .local import LocalCollaborator
from .matcher import Literal, Pattern, SelectionTemplate
from .navigator import Navigator
from .protocols import Collaborator, ResponseLike
from .types import Item, ItemType, Request, Response

__all__ = [
    "Collaborator",
    "GopherMechError",
    "History",
    "HistoryBoundaryError",
    "Item",
    "ItemCache",
    "ItemSaveError",
    "ItemType",
    "Literal",
    "LocalCollaborator",
    "NavigationError",
    "Navigator",
    "NoCurrentItemError",
    "NoMatchError",
    "Pattern",
    "ProtocolError",
    "Request",
    "Response",
    "ResponseLike",
    "SelectionTemplate",
]
