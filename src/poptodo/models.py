"""Data models and constants for poptodo."""

from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Union

DEFAULT_PRIORITY = 1

LAYOUT_MARGIN = 2
POPUP_WIDTH_PERCENT = 60
POPUP_HEIGHT_PERCENT = 10

LIST_TITLE = "TODO List"
POPUP_TITLE = "Add TODO"
HIGHLIGHT_SYMBOL = ">> "

# Milliseconds curses waits after ESC before treating it as a lone key.
ESC_DELAY_MS = 25


@dataclass(frozen=True)
class Item:
    """A single TODO entry."""

    text: str
    priority: int = DEFAULT_PRIORITY


class InputMode(Enum):
    NORMAL = auto()
    EDITING = auto()


class Key(Enum):
    """Non-character keys the driver can report."""

    ENTER = auto()
    ESC = auto()
    BACKSPACE = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    TAB = auto()
    DELETE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()


class Modifier(Flag):
    NONE = 0
    SHIFT = auto()
    CONTROL = auto()
    ALT = auto()


KeyCode = Union[Key, str]


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key press: a Key member or a one-character string."""

    code: KeyCode
    modifiers: Modifier = Modifier.NONE
