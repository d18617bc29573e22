"""gophermech widgets."""

from .content_view import ContentView
from .location_bar import LocationBar
from .menu_list import MenuList

__all__ = [
    "ContentView",
    "LocationBar",
    "MenuList",
]
