from __future__ import annotations

from typing import Any

import pytest

from terdle.menus import DuplicateMenuName, Menu, MenuBuilder, MenuItem, MenuSystem, UnknownMenuName


class Context:
    def __init__(self) -> None:
        self.calls: list[str] = []
        self.menus: MenuSystem[Context] | None = None


def _record(name: str):
    def action(context: Context) -> None:
        context.calls.append(name)

    return action


def _push(name: str):
    def action(context: Context) -> None:
        assert context.menus is not None
        context.menus.push_menu(name)

    return action


def _pop(context: Context) -> None:
    assert context.menus is not None
    context.menus.pop_current_menu()


def _system(scripted_console: Any, inputs: list[str], menus: list[Menu[Context]], start: str):
    context = Context()
    console = scripted_console(inputs)
    system = MenuSystem(context, console, menus, start)
    context.menus = system
    return context, console, system


def _main_menus() -> list[Menu[Context]]:
    return [
        MenuBuilder[Context]()
        .add_item("Say hi", _record("hi"))
        .add_item("Admin", _push("Admin"))
        .add_item("Quit", continues_menu=False)
        .build("Main", "Main Menu"),
        MenuBuilder[Context]()
        .add_item("Audit", _record("audit"))
        .add_item("Back", continues_menu=False)
        .build("Admin", "Admin Menu"),
    ]


def test_builder_preserves_item_order_and_flags() -> None:
    menu = MenuBuilder[Context]().add_item("One", _record("1")).add_item("One", continues_menu=False).build("m", "M")
    assert menu.name == "m"
    assert menu.title == "M"
    assert [item.label for item in menu.items] == ["One", "One"]
    assert [item.continues_menu for item in menu.items] == [True, False]
    assert isinstance(menu.items, tuple)
    assert menu.items[1] == MenuItem("One", None, False)


def test_duplicate_menu_name_rejected(scripted_console: Any) -> None:
    menus = _main_menus() + [MenuBuilder[Context]().build("Main", "Another Main")]
    with pytest.raises(DuplicateMenuName):
        MenuSystem(Context(), scripted_console([]), menus, "Main")


def test_unknown_start_menu_rejected(scripted_console: Any) -> None:
    with pytest.raises(UnknownMenuName):
        MenuSystem(Context(), scripted_console([]), _main_menus(), "Missing")


def test_push_unknown_menu_rejected(scripted_console: Any) -> None:
    _, _, system = _system(scripted_console, [], _main_menus(), "Main")
    with pytest.raises(UnknownMenuName):
        system.push_menu("Nope")
    assert system.depth == 1


def test_push_then_pop_restores_previous_menu(scripted_console: Any) -> None:
    menus = _main_menus() + [MenuBuilder[Context]().build("Login", "Login Menu")]
    _, _, system = _system(scripted_console, [], menus, "Login")
    system.push_menu("Main")
    system.push_menu("Admin")
    assert system.depth == 3
    assert system.current_menu is not None and system.current_menu.name == "Admin"
    system.pop_current_menu()
    system.pop_current_menu()
    assert system.depth == 1
    assert system.current_menu.name == "Login"


def test_pop_empty_stack_raises(scripted_console: Any) -> None:
    _, _, system = _system(scripted_console, [], _main_menus(), "Main")
    system.pop_current_menu()
    assert system.running is False
    assert system.current_menu is None
    with pytest.raises(IndexError):
        system.pop_current_menu()


def test_same_menu_can_be_pushed_twice(scripted_console: Any) -> None:
    _, _, system = _system(scripted_console, [], _main_menus(), "Main")
    system.push_menu("Main")
    assert system.depth == 2
    system.pop_current_menu()
    assert system.current_menu is not None and system.current_menu.name == "Main"


def test_run_displays_numbered_items_and_dispatches(scripted_console: Any) -> None:
    context, console, system = _system(scripted_console, ["1", "3"], _main_menus(), "Main")
    system.run()
    assert context.calls == ["hi"]
    assert system.running is False
    assert "Main Menu" in console.text
    assert "1) Say hi" in console.text
    assert "3) Quit" in console.text
    assert console.prompts == ["Please select: ", "Please select: "]


def test_out_of_range_and_blank_selection_silently_reprompt(scripted_console: Any) -> None:
    seen: list[tuple[str, int]] = []

    def snapshot(context: Context) -> None:
        assert context.menus is not None and context.menus.current_menu is not None
        seen.append((context.menus.current_menu.name, context.menus.depth))

    menus = [
        MenuBuilder[Context]()
        .add_item("Snapshot", snapshot)
        .add_item("Quit", continues_menu=False)
        .build("Main", "Main Menu")
    ]
    context, console, system = _system(scripted_console, ["0", "3", "-1", "", "1", "2"], menus, "Main")
    system.run()
    assert seen == [("Main", 1)]
    assert console.text.count("Main Menu") == 6
    assert "Enter a number" not in console.text


def test_non_numeric_selection_reports_and_reprompts(scripted_console: Any) -> None:
    context, console, system = _system(scripted_console, ["abc", "1", "3"], _main_menus(), "Main")
    system.run()
    assert context.calls == ["hi"]
    assert "Enter a number, please" in console.text


def test_submenu_returns_to_parent(scripted_console: Any) -> None:
    context, console, system = _system(scripted_console, ["2", "1", "2", "1", "3"], _main_menus(), "Main")
    system.run()
    assert context.calls == ["audit", "hi"]
    assert "Admin Menu" in console.text


def test_terminating_item_that_pushes_keeps_new_menu(scripted_console: Any) -> None:
    menus = _main_menus() + [
        MenuBuilder[Context]()
        .add_item("Enter", _push("Main"), continues_menu=False)
        .build("Start", "Start Menu")
    ]
    _, _, system = _system(scripted_console, [], menus, "Start")
    system._select(system.menu("Start"), system.menu("Start").items[0])
    assert system.depth == 2
    assert system.current_menu is not None and system.current_menu.name == "Main"


def test_terminating_item_that_pops_is_not_popped_again(scripted_console: Any) -> None:
    menus = _main_menus() + [
        MenuBuilder[Context]().add_item("Log out", _pop, continues_menu=False).build("User", "User Menu"),
        MenuBuilder[Context]().add_item("Stay", _record("stay")).build("Login", "Login Menu"),
    ]
    _, _, system = _system(scripted_console, [], menus, "Login")
    system.push_menu("User")
    system._select(system.menu("User"), system.menu("User").items[0])
    assert system.depth == 1
    assert system.current_menu is not None and system.current_menu.name == "Login"


def test_terminating_item_without_stack_change_pops_once(scripted_console: Any) -> None:
    context, _, system = _system(scripted_console, [], _main_menus(), "Main")
    system.push_menu("Admin")
    system._select(system.menu("Admin"), system.menu("Admin").items[1])
    assert system.depth == 1
    assert system.current_menu is not None and system.current_menu.name == "Main"
    assert context.calls == []
