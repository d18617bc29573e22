"""Action handler mixins for GopherMechApp."""

from .file_actions import FileActionsMixin
from .navigation_actions import NavigationActionsMixin

__all__ = [
    "FileActionsMixin",
    "NavigationActionsMixin",
]
