"""Application state machine: maps key events onto list and popup state."""

import logging

from .core import CyclicSelectionList, PopupEditor
from .models import InputMode, Item, Key, KeyCode, Modifier

logger = logging.getLogger(__name__)


class Application:
    """Owns the TODO list, the input mode and the popup editor.

    The popup is visible exactly when the mode is EDITING; every transition
    in handle_key changes both together.
    """

    def __init__(self) -> None:
        self.items: CyclicSelectionList[Item] = CyclicSelectionList()
        self.mode = InputMode.NORMAL
        self.popup = PopupEditor()
        self.running = True

    @property
    def popup_visible(self) -> bool:
        return self.popup.visible

    def handle_key(self, code: KeyCode, modifiers: Modifier = Modifier.NONE) -> None:
        """Apply one key press to the current state."""
        if self.mode is InputMode.NORMAL:
            self._handle_normal(code, modifiers)
        else:
            self._handle_editing(code, modifiers)
        assert self.popup.visible == (self.mode is InputMode.EDITING), (
            f"popup visible={self.popup.visible} in mode {self.mode.name}"
        )

    def _handle_normal(self, code: KeyCode, modifiers: Modifier) -> None:
        if code == "p" and modifiers == Modifier.NONE:
            self.popup.show()
            self.mode = InputMode.EDITING
            logger.debug("Popup opened")
        elif code is Key.ESC and modifiers == Modifier.NONE:
            self.running = False
            logger.debug("Quit requested")
        elif code is Key.LEFT:
            self.items.unselect()
        elif code is Key.DOWN:
            self.items.next()
        elif code is Key.UP:
            self.items.previous()

    def _handle_editing(self, code: KeyCode, modifiers: Modifier) -> None:
        if code is Key.ENTER:
            if modifiers == Modifier.NONE:
                self.popup.hide()
                item = self.popup.commit()
                self.items.append(item)
                self.mode = InputMode.NORMAL
                logger.debug("Added item %r (%d total)", item.text, len(self.items))
            # Shift+Enter is reserved for multi-line input.
        elif isinstance(code, str):
            if self.popup.visible:
                self.popup.insert_char(code)
        elif code is Key.BACKSPACE and modifiers == Modifier.NONE:
            if self.popup.visible:
                self.popup.backspace()
        elif code is Key.ESC and modifiers == Modifier.NONE:
            if self.popup.visible:
                self.popup.discard()
                self.mode = InputMode.NORMAL
                self.popup.hide()
                logger.debug("Popup cancelled")


def run_app(driver, app: Application) -> None:
    """Main event loop.

    ``driver`` provides ``draw(app)`` and a blocking ``read_event()`` that
    returns a KeyEvent, or None for anything else (resize, unknown input).
    """
    while app.running:
        driver.draw(app)
        event = driver.read_event()
        if event is None:
            continue
        app.handle_key(event.code, event.modifiers)
