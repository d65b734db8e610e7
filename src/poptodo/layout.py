"""Screen geometry helpers (pure functions, no curses)."""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

from .models import InputMode, LAYOUT_MARGIN


@dataclass(frozen=True)
class Rect:
    """A screen rectangle in cells; x is the column, y the row."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def inner(self, margin: int) -> "Rect":
        """Shrink by margin on every side; empty rect if it does not fit."""
        if self.width < 2 * margin or self.height < 2 * margin:
            return Rect(0, 0, 0, 0)
        return Rect(
            self.x + margin,
            self.y + margin,
            self.width - 2 * margin,
            self.height - 2 * margin,
        )


class Layout(NamedTuple):
    help_region: Rect
    list_region: Rect


def compute_layout(size: Rect) -> Layout:
    """Split the screen into a one-row help strip and the list area below it."""
    body = size.inner(LAYOUT_MARGIN)
    help_h = min(1, body.height)
    help_region = Rect(body.x, body.y, body.width, help_h)
    rest = Rect(body.x, body.y + help_h, body.width, body.height - help_h)
    return Layout(help_region, rest.inner(LAYOUT_MARGIN))


def _split(length: int, percent: int) -> Tuple[int, int]:
    """Return (leading margin, body) for a centered percentage split.

    Floor division throughout; leftover cells go to the trailing margin.
    """
    lead = length * ((100 - percent) // 2) // 100
    body = length * percent // 100
    return lead, body


def centered_region(percent_width: int, percent_height: int, bounds: Rect) -> Rect:
    """Rectangle covering the given percentages of bounds, centered in it."""
    left, width = _split(bounds.width, percent_width)
    top, height = _split(bounds.height, percent_height)
    return Rect(bounds.x + left, bounds.y + top, width, height)


def cursor_position(popup: Rect, display_width: int) -> Tuple[int, int]:
    """(column, row) of the text cursor inside the bordered popup."""
    return popup.x + display_width + 1, popup.y + 1


def scroll_offset(selected: Optional[int], offset: int, visible_rows: int) -> int:
    """First visible list row so that the selection stays on screen."""
    if selected is None or visible_rows < 1:
        return offset
    if selected < offset:
        return selected
    if selected >= offset + visible_rows:
        return selected - visible_rows + 1
    return offset


def help_spans(mode: InputMode) -> List[Tuple[str, bool]]:
    """Help line for the current mode as (text, bold) spans."""
    if mode is InputMode.NORMAL:
        return [
            ("Press ", False),
            ("Esc key", True),
            (" to exit, ", False),
            ("p", True),
            (" to input popup.", False),
        ]
    return [
        ("Press ", False),
        ("Esc", True),
        (" to stop edit, ", False),
        ("Enter", True),
        (" to add todo list. ", False),
    ]
