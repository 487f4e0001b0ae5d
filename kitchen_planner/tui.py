"""Interactive TUI for checking off shopping list items."""

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, DataTable, Footer, Header, Static

from .categories import category_label
from .export import format_item
from .shopping import ShoppingItem, ShoppingList


class ShoppingChecker(App[ShoppingList]):
    """Interactive screen for ticking off items while shopping."""

    CSS = """
    Screen {
        background: $surface;
    }

    #checker {
        height: 100%;
        padding: 1;
    }

    #summary {
        height: 3;
        padding: 0 1;
        background: $boost;
        color: $text;
        content-align: center middle;
    }

    #items-table {
        height: 1fr;
        margin: 1 0;
    }

    #actions {
        height: 3;
        align: center middle;
        padding: 0 1;
    }

    #actions Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("space", "toggle", "Check"),
        Binding("u", "uncheck_all", "Reset"),
        Binding("x", "clear_checked", "Clear checked"),
        Binding("q", "done", "Done"),
        Binding("escape", "done", "Done"),
    ]

    def __init__(self, shopping_list: ShoppingList, title: str | None = None) -> None:
        super().__init__()
        self.shopping_list = shopping_list
        self.list_title = title or "Shopping List"

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="checker"):
            yield Static(self._get_summary(), id="summary")
            table = DataTable(id="items-table")
            table.cursor_type = "row"
            table.add_columns("", "Item", "Category", "Recipes")
            yield table
            with Horizontal(id="actions"):
                yield Button("Done (q)", variant="success", id="btn-done")
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.list_title
        self._refresh_table()

    def _get_summary(self) -> str:
        sl = self.shopping_list
        return f"{sl.checked_count} of {sl.total_count} items checked ({sl.progress:.0f}%)"

    def _row(self, item: ShoppingItem) -> tuple[str, str, str, str]:
        return (
            "✓" if item.is_checked else " ",
            format_item(item)[:40],
            category_label(item.category),
            ", ".join(item.recipe_titles)[:40],
        )

    def _refresh_table(self) -> None:
        table = self.query_one("#items-table", DataTable)
        cursor = table.cursor_row
        table.clear()

        for items in self.shopping_list.grouped().values():
            for item in items:
                table.add_row(*self._row(item), key=item.id)

        if self.shopping_list.items and cursor is not None:
            table.move_cursor(row=min(cursor, len(self.shopping_list.items) - 1))

        self.query_one("#summary", Static).update(self._get_summary())

    def _selected_item_id(self) -> str | None:
        table = self.query_one("#items-table", DataTable)
        if not self.shopping_list.items or table.cursor_row is None:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return row_key.value

    def action_toggle(self) -> None:
        item_id = self._selected_item_id()
        if item_id is not None:
            self.shopping_list.toggle(item_id)
            self._refresh_table()

    def action_uncheck_all(self) -> None:
        self.shopping_list.uncheck_all()
        self._refresh_table()

    def action_clear_checked(self) -> None:
        self.shopping_list.clear_checked()
        self._refresh_table()

    def action_done(self) -> None:
        self.exit(self.shopping_list)

    @on(DataTable.RowSelected)
    def on_row_selected(self) -> None:
        self.action_toggle()

    @on(Button.Pressed, "#btn-done")
    def on_done_button(self) -> None:
        self.action_done()


def interactive_check(shopping_list: ShoppingList, title: str | None = None) -> ShoppingList:
    """
    Launch the TUI for checking off items.

    Returns:
        The shopping list with the user's checks applied
    """
    app = ShoppingChecker(shopping_list, title)
    result = app.run()
    # Closed without a result
    if result is None:
        return shopping_list
    return result
