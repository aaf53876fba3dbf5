"""Stack-based menu system.

Menus are immutable descriptions built once at startup: a unique name, a
title, and numbered items. Each item carries an action invoked with a shared
target object. The `MenuSystem` keeps the active menus on a stack; the top
menu is displayed, submenus are pushed on top of it, and leaving a menu pops
it. Running stops when the last menu is popped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

SELECTION_PROMPT = "Please select: "
MENU_STYLE = "bold white on blue"


class MenuError(Exception):
    """Base class for menu configuration errors."""


class DuplicateMenuName(MenuError, ValueError):
    """Two menus registered with the same name."""


class UnknownMenuName(MenuError, KeyError):
    """No menu registered under the requested name."""


class MenuConsole(Protocol):
    """Console operations the menu system depends on."""

    def print_line(self, text: str = "") -> None: ...

    def print_blank_line(self) -> None: ...

    def print_banner(self, text: str, style: str = "") -> None: ...

    def read_integer(self, prompt: str) -> int | None: ...


@dataclass(frozen=True)
class MenuItem(Generic[T]):
    """One numbered menu entry.

    An item with no action simply leaves its menu when `continues_menu` is false.
    """

    label: str
    action: Callable[[T], None] | None = None
    continues_menu: bool = True


@dataclass(frozen=True)
class Menu(Generic[T]):
    """Named menu with a title and ordered items."""

    name: str
    title: str
    items: tuple[MenuItem[T], ...]


class MenuBuilder(Generic[T]):
    """Collect items in order and produce an immutable menu."""

    def __init__(self) -> None:
        self._items: list[MenuItem[T]] = []

    def add_item(
        self,
        label: str,
        action: Callable[[T], None] | None = None,
        *,
        continues_menu: bool = True,
    ) -> MenuBuilder[T]:
        self._items.append(MenuItem(label, action, continues_menu))
        return self

    def build(self, name: str, title: str) -> Menu[T]:
        return Menu(name=name, title=title, items=tuple(self._items))


class MenuSystem(Generic[T]):
    """Run menus from a stack, invoking selected item actions on `target`."""

    def __init__(self, target: T, console: MenuConsole, menus: Iterable[Menu[T]], start_menu_name: str) -> None:
        self.target = target
        self._console = console
        self._menus: dict[str, Menu[T]] = {}
        for menu in menus:
            if menu.name in self._menus:
                raise DuplicateMenuName(f"Duplicate menu name: {menu.name}")
            self._menus[menu.name] = menu
        self._stack: list[Menu[T]] = []
        self.push_menu(start_menu_name)

    @property
    def current_menu(self) -> Menu[T] | None:
        return self._stack[-1] if self._stack else None

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def running(self) -> bool:
        return bool(self._stack)

    def menu(self, name: str) -> Menu[T]:
        """Look up a registered menu by name."""
        try:
            return self._menus[name]
        except KeyError:
            raise UnknownMenuName(name) from None

    def push_menu(self, name: str) -> None:
        """Make the named menu current; the previous menu resumes once it is popped."""
        menu = self.menu(name)
        self._stack.append(menu)
        logger.debug("Entered menu %s (depth %d)", name, len(self._stack))

    def pop_current_menu(self) -> None:
        """Leave the current menu and return to the one below it."""
        if not self._stack:
            raise IndexError("No menu to pop.")
        menu = self._stack.pop()
        logger.debug("Left menu %s (depth %d)", menu.name, len(self._stack))

    def run(self) -> None:
        """Display and dispatch menus until the stack is empty."""
        while self._stack:
            menu = self._stack[-1]
            self._display(menu)
            selection = self._console.read_integer(SELECTION_PROMPT)
            if selection is None or not 1 <= selection <= len(menu.items):
                continue
            self._select(menu, menu.items[selection - 1])

    def _select(self, menu: Menu[T], item: MenuItem[T]) -> None:
        depth = len(self._stack)
        if item.action is not None:
            item.action(self.target)
        if item.continues_menu:
            return
        # Only pop when the action left the stack as it found it.
        if len(self._stack) == depth and self._stack[-1] is menu:
            self.pop_current_menu()

    def _display(self, menu: Menu[T]) -> None:
        self._console.print_blank_line()
        self._console.print_banner(menu.title, MENU_STYLE)
        for number, item in enumerate(menu.items, start=1):
            self._console.print_line(f"{number}) {item.label}")
