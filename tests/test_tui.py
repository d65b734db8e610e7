import curses

import pytest

from poptodo.app import Application
from poptodo.models import HIGHLIGHT_SYMBOL, Item, Key, KeyEvent, Modifier
from poptodo import tui as tui_module
from poptodo.tui import TUI, decode_key


@pytest.mark.parametrize(
    "ch,expected",
    [
        ("\n", KeyEvent(Key.ENTER)),
        ("\r", KeyEvent(Key.ENTER)),
        (curses.KEY_ENTER, KeyEvent(Key.ENTER)),
        ("\x1b", KeyEvent(Key.ESC)),
        ("\x7f", KeyEvent(Key.BACKSPACE)),
        (curses.KEY_BACKSPACE, KeyEvent(Key.BACKSPACE)),
        (curses.KEY_UP, KeyEvent(Key.UP)),
        (curses.KEY_SLEFT, KeyEvent(Key.LEFT, Modifier.SHIFT)),
        ("p", KeyEvent("p")),
        ("P", KeyEvent("P", Modifier.SHIFT)),
        ("é", KeyEvent("é")),
        ("\x03", KeyEvent("c", Modifier.CONTROL)),
        ("\x00", KeyEvent(" ", Modifier.CONTROL)),
        ("\x1c", KeyEvent("4", Modifier.CONTROL)),
    ],
)
def test_decode_key(ch, expected):
    assert decode_key(ch) == expected


def test_decode_unknown():
    assert decode_key(curses.KEY_F1) is None
    assert decode_key("\u200b") is None


class FakeWindow:
    """Records the curses calls made against a window."""

    def __init__(self, height=40, width=100, y=0, x=0, keys=()):
        self.height, self.width, self.y, self.x = height, width, y, x
        self.keys = list(keys)
        self.nodelay_calls = []
        self.text = []
        self.cursor = None

    def getmaxyx(self):
        return self.height, self.width

    def get_wch(self):
        if not self.keys:
            raise curses.error("no input")
        return self.keys.pop(0)

    def nodelay(self, flag):
        self.nodelay_calls.append(flag)

    def keypad(self, flag):
        pass

    def addnstr(self, y, x, text, n, attrs=0):
        self.text.append((y, x, text[:n], attrs))

    def move(self, y, x):
        self.cursor = (y, x)

    def erase(self):
        self.text = []

    def border(self):
        pass

    def noutrefresh(self):
        pass


class FakeCurses:
    def __init__(self, monkeypatch):
        self.windows = []
        self.curs_set_calls = []
        self.doupdate_calls = 0
        monkeypatch.setattr(curses, "newwin", self.newwin)
        monkeypatch.setattr(curses, "curs_set", self.curs_set_calls.append)
        monkeypatch.setattr(curses, "doupdate", self.doupdate)

    def newwin(self, height, width, y, x):
        win = FakeWindow(height, width, y, x)
        self.windows.append(win)
        return win

    def doupdate(self):
        self.doupdate_calls += 1


def make_tui(keys=(), height=40, width=100):
    tui = TUI.__new__(TUI)
    tui.stdscr = FakeWindow(height, width, keys=keys)
    tui.list_offset = 0
    tui.COL_ITEM = 1
    tui.COL_SELECTED = 2
    return tui


def app_with_items(*texts):
    app = Application()
    for text in texts:
        app.items.append(Item(text))
    return app


def test_read_event_plain_key():
    assert make_tui(["m"]).read_event() == KeyEvent("m")


def test_read_event_lone_escape():
    tui = make_tui(["\x1b"])
    assert tui.read_event() == KeyEvent(Key.ESC)
    assert tui.stdscr.nodelay_calls == [True, False]


def test_read_event_alt_chord():
    assert make_tui(["\x1b", "x"]).read_event() == KeyEvent("x", Modifier.ALT)


def test_read_event_double_escape_is_plain_escape():
    tui = make_tui(["\x1b", "\x1b"])
    event = tui.read_event()
    assert event == KeyEvent(Key.ESC)
    assert tui.stdscr.keys == []

    app = Application()
    app.handle_key("p")
    app.handle_key(event.code, event.modifiers)
    assert not app.popup_visible
    assert app.running


def test_read_event_resize():
    assert make_tui([curses.KEY_RESIZE]).read_event() is None


def test_draw_normal_mode_hides_cursor_and_popup(monkeypatch):
    fake = FakeCurses(monkeypatch)
    tui = make_tui()
    app = app_with_items("a", "b")

    tui.draw(app)

    assert [(w.height, w.width, w.y, w.x) for w in fake.windows] == [(31, 92, 5, 4)]
    assert fake.curs_set_calls == [0]
    assert fake.doupdate_calls == 1
    rows = fake.windows[0].text
    assert (1, 1, "a".ljust(90), 1) in rows
    assert (2, 1, "b".ljust(90), 1) in rows
    help_line = "".join(text for y, _, text, _ in tui.stdscr.text if y == 2)
    assert help_line == "Press Esc key to exit, p to input popup."


def test_draw_highlights_selected_item(monkeypatch):
    fake = FakeCurses(monkeypatch)
    tui = make_tui()
    app = app_with_items("a", "b")
    app.handle_key(Key.UP)
    app.handle_key(Key.DOWN)

    tui.draw(app)

    rows = fake.windows[0].text
    pad = " " * len(HIGHLIGHT_SYMBOL)
    assert (1, 1, (pad + "a").ljust(90), 1) in rows
    assert (2, 1, (HIGHLIGHT_SYMBOL + "b").ljust(90), 2) in rows


def test_draw_scrolls_to_selection(monkeypatch):
    fake = FakeCurses(monkeypatch)
    tui = make_tui(height=24, width=80)
    app = app_with_items(*[f"item{i}" for i in range(20)])
    app.handle_key(Key.UP)
    app.handle_key(Key.UP)

    tui.draw(app)

    list_win = fake.windows[0]
    assert (list_win.height, list_win.width) == (15, 72)
    assert tui.list_offset == 19 - 13 + 1
    assert list_win.text[-1] == (13, 1, (HIGHLIGHT_SYMBOL + "item19").ljust(70), 2)
    assert (1, 1, ("   " + "item7").ljust(70), 1) in list_win.text


def test_draw_editing_places_cursor_in_popup(monkeypatch):
    fake = FakeCurses(monkeypatch)
    tui = make_tui()
    app = Application()
    for key in ("p", "m", "i", "l", "k"):
        app.handle_key(key)

    tui.draw(app)

    list_win, popup = fake.windows
    assert (popup.height, popup.width, popup.y, popup.x) == (4, 60, 18, 20)
    assert (1, 1, "milk", 0) in popup.text
    # cursor_position gives screen (25, 19); the window sits at (20, 18).
    assert popup.cursor == (1, 5)
    assert fake.curs_set_calls == [1]


def test_draw_clamps_cursor_to_popup(monkeypatch):
    fake = FakeCurses(monkeypatch)
    tui = make_tui()
    app = Application()
    app.handle_key("p")
    for _ in range(70):
        app.handle_key("x")

    tui.draw(app)

    popup = fake.windows[1]
    assert popup.cursor == (1, 59)
    assert (1, 1, "x" * 58, 0) in popup.text


def test_draw_short_popup_has_no_cursor(monkeypatch):
    fake = FakeCurses(monkeypatch)
    tui = make_tui(height=24, width=80)
    app = Application()
    app.handle_key("p")
    app.handle_key("a")

    tui.draw(app)

    popup = fake.windows[1]
    assert (popup.height, popup.y) == (2, 10)
    assert popup.cursor is None
    assert all(y == 0 for y, _, _, _ in popup.text)
    assert fake.curs_set_calls == [0]


def test_start_curses_runs_until_quit(monkeypatch):
    fake = FakeCurses(monkeypatch)
    screen = FakeWindow(keys=["p", "x", "\n", curses.KEY_DOWN, "\x1b"])
    calls = []
    monkeypatch.setattr(curses, "wrapper", lambda func: func(screen))
    monkeypatch.setattr(curses, "raw", lambda: calls.append("raw"))
    monkeypatch.setattr(curses, "set_escdelay", calls.append)
    monkeypatch.setattr(curses, "has_colors", lambda: False)

    app = tui_module.start_curses()

    assert calls == ["raw", 25]
    assert app.items.items == [Item("x")]
    assert app.items.selected == 0
    assert not app.running
    assert fake.doupdate_calls == 5
