"""Selection list and popup editor state (pure, no I/O)."""

from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

from .models import Item, DEFAULT_PRIORITY

T = TypeVar("T")


class CyclicSelectionList(Generic[T]):
    """Ordered items plus an optional selected index that wraps around.

    ``selected`` is either None or a valid index into ``items``.
    """

    def __init__(self) -> None:
        self.items: List[T] = []
        self.selected: Optional[int] = None

    @classmethod
    def with_items(cls, items: Iterable[T]) -> "CyclicSelectionList[T]":
        lst: CyclicSelectionList[T] = cls()
        lst.items = list(items)
        return lst

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    @property
    def selected_item(self) -> Optional[T]:
        if self.selected is None:
            return None
        return self.items[self.selected]

    def next(self) -> None:
        """Select the following item, wrapping to the first. No-op when empty."""
        if not self.items:
            return
        if self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected + 1) % len(self.items)
        self._check()

    def previous(self) -> None:
        """Select the preceding item, wrapping to the last. No-op when empty."""
        if not self.items:
            return
        if self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected - 1 + len(self.items)) % len(self.items)
        self._check()

    def unselect(self) -> None:
        self.selected = None

    def append(self, item: T) -> None:
        self.items.append(item)
        self._check()

    def _check(self) -> None:
        assert self.selected is None or 0 <= self.selected < len(self.items), (
            f"selection {self.selected} out of range for {len(self.items)} items"
        )


class PopupEditor:
    """Text buffer behind the "Add TODO" popup.

    ``display_width`` is the character count of ``buffer`` and is refreshed
    after every mutation. ``visible`` is only toggled through show()/hide().
    """

    def __init__(self) -> None:
        self.buffer = ""
        self.display_width = 0
        self.visible = False

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def insert_char(self, c: str) -> None:
        self.buffer += c
        self._sync_width()

    def backspace(self) -> None:
        self.buffer = self.buffer[:-1]
        self._sync_width()

    def commit(self) -> Item:
        """Return the buffer as a new Item and clear it."""
        item = Item(text=self.buffer, priority=DEFAULT_PRIORITY)
        self.discard()
        return item

    def discard(self) -> None:
        self.buffer = ""
        self._sync_width()

    def _sync_width(self) -> None:
        # Code points, not bytes: one column per character.
        self.display_width = len(self.buffer)
