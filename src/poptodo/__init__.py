"""poptodo - terminal TODO list with a popup editor."""

import logging

__version__ = "1.0.0"

from .models import Item, InputMode, Key, KeyEvent, Modifier
from .core import CyclicSelectionList, PopupEditor
from .app import Application, run_app
from .layout import Rect, compute_layout, centered_region, cursor_position

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Item",
    "InputMode",
    "Key",
    "KeyEvent",
    "Modifier",
    "CyclicSelectionList",
    "PopupEditor",
    "Application",
    "run_app",
    "Rect",
    "compute_layout",
    "centered_region",
    "cursor_position",
]
