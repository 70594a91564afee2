"""Interactive terminal menu helpers.

Provides the standardized single-select menu based on simple_term_menu,
matching the fc-vps UX conventions.
"""

from simple_term_menu import TerminalMenu


def select_menu(items: list[str], title: str, default: int = 0) -> int | None:
    """Show a single-select menu. Returns selected index or None if cancelled."""
    menu = TerminalMenu(
        items,
        title=title,
        cursor_index=default,
        menu_cursor="> ",
        menu_cursor_style=("fg_cyan", "bold"),
    )
    return menu.show()
