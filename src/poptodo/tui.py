"""poptodo curses-based terminal user interface."""

import curses
import logging
from typing import Optional, Union

from .app import Application, run_app
from .core import CyclicSelectionList
from .layout import (
    Rect,
    centered_region,
    compute_layout,
    cursor_position,
    help_spans,
    scroll_offset,
)
from .models import (
    ESC_DELAY_MS,
    HIGHLIGHT_SYMBOL,
    LIST_TITLE,
    POPUP_HEIGHT_PERCENT,
    POPUP_TITLE,
    POPUP_WIDTH_PERCENT,
    InputMode,
    Item,
    Key,
    KeyEvent,
    Modifier,
)

logger = logging.getLogger(__name__)

_SPECIAL_KEYS = {
    curses.KEY_ENTER: KeyEvent(Key.ENTER),
    curses.KEY_BACKSPACE: KeyEvent(Key.BACKSPACE),
    curses.KEY_UP: KeyEvent(Key.UP),
    curses.KEY_DOWN: KeyEvent(Key.DOWN),
    curses.KEY_LEFT: KeyEvent(Key.LEFT),
    curses.KEY_RIGHT: KeyEvent(Key.RIGHT),
    curses.KEY_SR: KeyEvent(Key.UP, Modifier.SHIFT),
    curses.KEY_SF: KeyEvent(Key.DOWN, Modifier.SHIFT),
    curses.KEY_SLEFT: KeyEvent(Key.LEFT, Modifier.SHIFT),
    curses.KEY_SRIGHT: KeyEvent(Key.RIGHT, Modifier.SHIFT),
    curses.KEY_BTAB: KeyEvent(Key.TAB, Modifier.SHIFT),
    curses.KEY_DC: KeyEvent(Key.DELETE),
    curses.KEY_HOME: KeyEvent(Key.HOME),
    curses.KEY_END: KeyEvent(Key.END),
    curses.KEY_PPAGE: KeyEvent(Key.PAGE_UP),
    curses.KEY_NPAGE: KeyEvent(Key.PAGE_DOWN),
}

_CHAR_KEYS = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x1b": Key.ESC,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
    "\t": Key.TAB,
}


def decode_key(ch: Union[int, str]) -> Optional[KeyEvent]:
    """Translate a get_wch() result into a KeyEvent, or None if not a key."""
    if isinstance(ch, int):
        return _SPECIAL_KEYS.get(ch)
    if ch in _CHAR_KEYS:
        return KeyEvent(_CHAR_KEYS[ch])
    o = ord(ch)
    if o == 0:
        return KeyEvent(" ", Modifier.CONTROL)
    if 0x01 <= o <= 0x1A:
        return KeyEvent(chr(o - 1 + ord("a")), Modifier.CONTROL)
    if 0x1C <= o <= 0x1F:
        return KeyEvent(chr(o - 0x1C + ord("4")), Modifier.CONTROL)
    if not ch.isprintable():
        return None
    if ch.isupper():
        return KeyEvent(ch, Modifier.SHIFT)
    return KeyEvent(ch)


class TUI:
    """Curses driver: reads key events and paints the application state."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.list_offset = 0
        curses.curs_set(0)
        self.stdscr.keypad(True)
        self.height, self.width = self.stdscr.getmaxyx()
        logger.debug("Terminal size %dx%d", self.width, self.height)

        self.has_colors = curses.has_colors()
        if self.has_colors:
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                pass
            curses.init_pair(1, curses.COLOR_BLACK, curses.COLOR_WHITE)
            curses.init_pair(2, curses.COLOR_BLACK, curses.COLOR_GREEN)
            self.COL_ITEM = curses.color_pair(1)
            self.COL_SELECTED = curses.color_pair(2) | curses.A_BOLD
        else:
            self.COL_ITEM = curses.A_NORMAL
            self.COL_SELECTED = curses.A_REVERSE | curses.A_BOLD

    def read_event(self) -> Optional[KeyEvent]:
        """Block for the next key. ESC followed at once by a key means Alt."""
        ch = self.stdscr.get_wch()
        if ch == curses.KEY_RESIZE:
            logger.debug("Terminal resized")
            return None
        if ch != "\x1b":
            return decode_key(ch)

        self.stdscr.nodelay(True)
        try:
            follow = self.stdscr.get_wch()
        except curses.error:
            # Nothing pending: a plain ESC.
            return KeyEvent(Key.ESC)
        finally:
            self.stdscr.nodelay(False)
        if follow == "\x1b":
            # ESC ESC collapses into one plain ESC.
            return KeyEvent(Key.ESC)
        event = decode_key(follow)
        if event is None:
            return None
        return KeyEvent(event.code, event.modifiers | Modifier.ALT)

    def draw(self, app: Application) -> None:
        """Render help line, item list and, when open, the input popup."""
        self.stdscr.erase()
        self.height, self.width = self.stdscr.getmaxyx()
        screen = Rect(0, 0, self.width, self.height)
        layout = compute_layout(screen)

        self.draw_help(layout.help_region, app.mode)
        self.stdscr.noutrefresh()

        self.draw_list(layout.list_region, app.items)
        popup_win = None
        if app.popup_visible:
            area = centered_region(POPUP_WIDTH_PERCENT, POPUP_HEIGHT_PERCENT, screen)
            popup_win = self.draw_popup(area, app)
        if popup_win is None:
            curses.curs_set(0)
        # The hardware cursor ends up wherever the last refreshed window left it.
        curses.doupdate()

    def draw_help(self, region: Rect, mode: InputMode) -> None:
        if region.height < 1 or region.width < 1:
            return
        base = curses.A_BLINK if mode is InputMode.NORMAL else curses.A_NORMAL
        x = region.x
        for text, bold in help_spans(mode):
            avail = region.right - x
            if avail <= 0:
                break
            attrs = base | (curses.A_BOLD if bold else curses.A_NORMAL)
            self.stdscr.addnstr(region.y, x, text, avail, attrs)
            x += min(len(text), avail)

    def draw_list(self, region: Rect, items: CyclicSelectionList[Item]):
        if region.height < 2 or region.width < 2:
            return None
        win = curses.newwin(region.height, region.width, region.y, region.x)
        win.erase()
        win.border()
        win.addnstr(0, 1, LIST_TITLE, region.width - 2)

        rows = region.height - 2
        inner_w = region.width - 2
        self.list_offset = min(self.list_offset, max(0, len(items) - 1))
        self.list_offset = scroll_offset(items.selected, self.list_offset, rows)

        pad = " " * len(HIGHLIGHT_SYMBOL) if items.selected is not None else ""
        for row, idx in enumerate(range(self.list_offset, min(len(items), self.list_offset + rows))):
            if idx == items.selected:
                line = HIGHLIGHT_SYMBOL + items.items[idx].text
                attrs = self.COL_SELECTED
            else:
                line = pad + items.items[idx].text
                attrs = self.COL_ITEM
            if inner_w > 0:
                win.addnstr(row + 1, 1, line.ljust(inner_w), inner_w, attrs)
        win.noutrefresh()
        return win

    def draw_popup(self, area: Rect, app: Application):
        if area.height < 2 or area.width < 2:
            return None
        win = curses.newwin(area.height, area.width, area.y, area.x)
        win.erase()
        win.border()
        win.addnstr(0, 1, POPUP_TITLE, area.width - 2)
        inner_w = area.width - 2
        if area.height > 2 and inner_w > 0:
            win.addnstr(1, 1, app.popup.buffer, inner_w)

        if app.mode is InputMode.EDITING and area.height > 2:
            cx, cy = cursor_position(area, app.popup.display_width)
            curses.curs_set(1)
            win.move(cy - area.y, min(cx - area.x, area.width - 1))
        else:
            curses.curs_set(0)
        win.noutrefresh()
        return win


def start_curses() -> Application:
    """Initialize curses, run the TUI and restore the terminal on exit."""

    def _main(stdscr) -> Application:
        curses.raw()
        curses.set_escdelay(ESC_DELAY_MS)
        tui = TUI(stdscr)
        app = Application()
        run_app(tui, app)
        return app

    return curses.wrapper(_main)


def main() -> None:
    """TUI entry point."""
    app = start_curses()
    logger.info("Exited with %d item(s)", len(app.items))


if __name__ == "__main__":
    main()
