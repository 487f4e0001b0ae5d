"""CLI entry point for Kitchen Planner."""

from datetime import date
from pathlib import Path

import click

from . import __version__
from .categories import CATEGORY_LABELS, category_label, default_catalog
from .config import MENU_FILE, PANTRY_FILE, PARSE_ENDPOINT, RECIPES_FILE
from .export import export_shopping_list, format_item
from .formatting import (
    format_ingredient_line,
    format_quantity,
    format_time,
    highlight_ingredients,
)
from .importer import RecipeImporter, RecipeImportError
from .library import (
    SORT_OPTIONS,
    LibraryError,
    RecipeFilters,
    RecipeLibrary,
    filter_recipes,
    sort_recipes,
)
from .logging_config import configure_logging, get_logger
from .menu import MEAL_SLOTS, MenuError, WeeklyMenu, load_menu_file, save_menu_file, week_days
from .pantry import SIMPLE_STATUSES, Pantry, PantryError, clear_pantry, load_pantry, save_pantry
from .preferences import (
    TIMER_SOUNDS,
    PreferencesError,
    get_preferences,
    reset_preferences,
    update_preferences,
)
from .recipes import Recipe, RecipeFormatError, load_recipe_file, save_recipe_file
from .scaler import ScalingError, format_scale_info, scale_recipe
from .shopping import ShoppingList, ShoppingRequest, build_shopping_list
from .tui import interactive_check

logger = get_logger(__name__)


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    click.echo(f"✗ {message}", err=True)
    raise SystemExit(1)


def get_library() -> RecipeLibrary:
    return RecipeLibrary(RECIPES_FILE)


def parse_recipe_arg(arg: str) -> tuple[str, int | None]:
    """
    Split a RECIPE[:SERVINGS] argument.

    Examples:
        "carbonara.json" -> ("carbonara.json", None)
        "carbonara.json:6" -> ("carbonara.json", 6)
    """
    ref, sep, servings = arg.rpartition(":")
    if sep and ref and servings.isdigit():
        return ref, int(servings)
    return arg, None


def resolve_recipe(ref: str) -> Recipe:
    """Load a recipe from a JSON file path, or from the library by id."""
    if Path(ref).is_file():
        return load_recipe_file(ref)
    return get_library().get_recipe(ref)


def display_recipe(recipe: Recipe, servings: int | None = None) -> None:
    """Display a recipe card, scaled to the given servings."""
    scaled, scale_factor, new_servings = scale_recipe(recipe, servings)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"RECIPE: {recipe.title}")
    click.echo("=" * 60)

    if recipe.description:
        click.echo(recipe.description)
    if recipe.source_url:
        click.echo(f"Source: {recipe.source_url}")
    if recipe.total_time_minutes:
        click.echo(
            f"Time: {format_time(recipe.total_time_minutes)} "
            f"(prep {format_time(recipe.prep_time_minutes)}, "
            f"cook {format_time(recipe.cook_time_minutes)})"
        )
    click.echo(f"Servings: {format_scale_info(scale_factor, recipe.servings, new_servings)}")

    if recipe.equipment:
        click.echo("\nEquipment:")
        for eq in recipe.equipment:
            optional = " (optional)" if eq.is_optional else ""
            click.echo(f"  • {eq.name}{optional}")

    current_section = None
    for ing in scaled:
        if ing.section != current_section:
            current_section = ing.section
            click.echo(f"\n{current_section}:")
        click.echo(f"  • {format_ingredient_line(ing.original, scale_factor)}")

    if recipe.steps:
        click.echo("\nSteps:")
        names = recipe.ingredient_names
        for step in recipe.steps:
            text = highlight_ingredients(
                step.instruction, names, wrap=lambda s: click.style(s, bold=True)
            )
            timer = f" [{format_time(step.timer_minutes)}]" if step.timer_minutes else ""
            click.echo(f"  {step.order}. {text}{timer}")
            if step.tips:
                click.echo(f"     Tip: {step.tips}")

    click.echo()


def display_shopping_list(shopping_list: ShoppingList) -> None:
    """Display a shopping list grouped by category."""
    click.echo()
    click.echo("=" * 60)
    click.echo("SHOPPING LIST")
    click.echo("=" * 60)

    if not shopping_list.items:
        click.echo("  (nothing to buy)")
        click.echo()
        return

    for category, items in shopping_list.grouped().items():
        click.echo(f"\n{category_label(category)}")
        click.echo("-" * 40)
        for item in items:
            box = "☑" if item.is_checked else "☐"
            if item.to_buy_quantity == 0 and item.on_hand_quantity > 0:
                click.echo(f"  {box} {item.name}: covered by pantry")
            else:
                line = f"  {box} {format_item(item)}"
                if item.on_hand_quantity > 0:
                    line += (
                        f"  (need {format_quantity(item.needed_quantity)}, "
                        f"have {format_quantity(item.on_hand_quantity)})"
                    )
                click.echo(line)
            if item.recipe_titles:
                click.echo(f"     for: {', '.join(item.recipe_titles)}")

    click.echo()
    click.echo("-" * 60)
    to_buy = sum(1 for item in shopping_list.items if item.to_buy_quantity > 0)
    click.echo(
        f"Items: {shopping_list.total_count} | To buy: {to_buy} | "
        f"Checked: {shopping_list.checked_count}"
    )
    click.echo("-" * 60)


# ============================================================================
# Main CLI Group
# ============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="kitchen-planner")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Kitchen Planner: recipes, pantry, weekly menu and shopping list.

    Scale recipes to any number of servings and turn a set of recipes into
    one shopping list, minus what's already in your pantry.
    """
    configure_logging("DEBUG" if verbose else None)


# ============================================================================
# Recipe Commands
# ============================================================================


@cli.command("show")
@click.argument("recipe")
@click.option("--servings", "-S", type=int, help="Scale to target servings")
def show_recipe(recipe: str, servings: int | None):
    """Show a recipe, optionally scaled.

    RECIPE is a recipe JSON file or the id of a recipe in your library.

    Examples:

        kitchen show carbonara.json --servings 6
    """
    try:
        display_recipe(resolve_recipe(recipe), servings)
    except (RecipeFormatError, LibraryError, ScalingError) as e:
        fail(str(e))


@cli.command("import")
@click.argument("url")
@click.option("--endpoint", default=PARSE_ENDPOINT, show_default=True, help="Parsing service URL")
@click.option("--save/--no-save", default=True, help="Save to your recipe library")
@click.option("--output", "-o", type=click.Path(), help="Also write the recipe JSON to a file")
def import_recipe(url: str, endpoint: str, save: bool, output: str | None):
    """Import a recipe from a web page via the parsing service."""
    try:
        with RecipeImporter(endpoint) as importer:
            click.echo(f"Importing {url}...")
            recipe = importer.import_recipe(url)
    except RecipeImportError as e:
        fail(f"Import failed: {e}")
        return

    click.echo(f"✓ Imported '{recipe.title}' ({len(recipe.ingredients)} ingredients)")

    if output:
        save_recipe_file(recipe, output)
        click.echo(f"✓ Written to {output}")

    if save:
        try:
            get_library().save_recipe(recipe)
        except LibraryError as e:
            fail(str(e))
        click.echo(f"✓ Saved to library as {recipe.id}")


@cli.group()
def recipes():
    """Manage your recipe library."""
    pass


@recipes.command("list")
@click.option("--search", "-q", default="", help="Search title, tags and ingredients")
@click.option("--cuisine", "cuisines", multiple=True, help="Cuisine type (repeatable)")
@click.option("--meal", "meals", multiple=True, help="Meal type (repeatable)")
@click.option("--tag", "tags", multiple=True, help="Required tag (repeatable)")
@click.option("--max-time", type=int, help="Maximum total time in minutes")
@click.option("--favorites", "-f", is_flag=True, help="Only favorites")
@click.option("--min-rating", type=float, help="Minimum rating")
@click.option("--sort", "sort_by", type=click.Choice(SORT_OPTIONS), default="created_desc")
def recipes_list(
    search: str,
    cuisines: tuple[str, ...],
    meals: tuple[str, ...],
    tags: tuple[str, ...],
    max_time: int | None,
    favorites: bool,
    min_rating: float | None,
    sort_by: str,
):
    """List recipes in your library."""
    filters = RecipeFilters(
        search=search,
        cuisine_types=list(cuisines),
        meal_types=list(meals),
        tags=list(tags),
        max_time_minutes=max_time,
        favorites_only=favorites,
        min_rating=min_rating,
    )

    try:
        found = sort_recipes(filter_recipes(get_library().list_recipes(), filters), sort_by)
    except LibraryError as e:
        fail(str(e))
        return

    if not found:
        click.echo("No recipes found.")
        return

    click.echo()
    for recipe in found:
        star = "★ " if recipe.is_favorite else ""
        time_str = format_time(recipe.total_time_minutes) if recipe.total_time_minutes else "-"
        click.echo(f"  {star}{recipe.title}")
        click.echo(f"     {recipe.id}  |  {recipe.servings} servings  |  {time_str}")
    click.echo()
    click.echo(f"Total: {len(found)} recipe(s)")


@recipes.command("add")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def recipes_add(file: str):
    """Add a recipe JSON file to your library."""
    try:
        recipe = get_library().save_recipe(load_recipe_file(file))
    except (RecipeFormatError, LibraryError) as e:
        fail(str(e))
        return
    click.echo(f"✓ Added '{recipe.title}' ({recipe.id})")


@recipes.command("remove")
@click.argument("recipe_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def recipes_remove(recipe_id: str, yes: bool):
    """Remove a recipe from your library."""
    library = get_library()
    try:
        recipe = library.get_recipe(recipe_id)
        if not yes and not click.confirm(f"Remove '{recipe.title}'?"):
            click.echo("Cancelled.")
            return
        library.delete_recipe(recipe_id)
    except LibraryError as e:
        fail(str(e))
        return
    click.echo(f"✓ Removed '{recipe.title}'")


@recipes.command("favorite")
@click.argument("recipe_id")
@click.option("--off", is_flag=True, help="Unmark as favorite")
def recipes_favorite(recipe_id: str, off: bool):
    """Mark (or unmark) a recipe as favorite."""
    try:
        recipe = get_library().set_favorite(recipe_id, not off)
    except LibraryError as e:
        fail(str(e))
        return
    state = "no longer a favorite" if off else "marked as favorite"
    click.echo(f"✓ '{recipe.title}' {state}")


# ============================================================================
# Shopping Commands
# ============================================================================


@cli.command("shop")
@click.argument("recipe_args", nargs=-1)
@click.option("--menu", "menu_file", type=click.Path(exists=True), help="Shop for a weekly menu")
@click.option("--no-pantry", is_flag=True, help="Ignore what's in the pantry")
@click.option("--export", "export_path", type=click.Path(), help="Export to .json or .md")
@click.option("--title", help="Title for the exported list")
@click.option("--interactive", "-i", is_flag=True, help="Check off items in a TUI")
def shop(
    recipe_args: tuple[str, ...],
    menu_file: str | None,
    no_pantry: bool,
    export_path: str | None,
    title: str | None,
    interactive: bool,
):
    """Build a shopping list from recipes and/or a weekly menu.

    Each RECIPE is a JSON file or library id, optionally followed by
    :SERVINGS to scale it.

    Examples:

        kitchen shop carbonara.json:6 tikka-masala.json

        kitchen shop --menu week.json --export list.md
    """
    try:
        requests: list[ShoppingRequest] = []
        week_start = None

        for arg in recipe_args:
            ref, servings = parse_recipe_arg(arg)
            recipe = resolve_recipe(ref)
            target = servings if servings is not None else recipe.servings
            requests.append(ShoppingRequest(recipe=recipe, target_servings=target))

        if menu_file:
            weekly_menu = load_menu_file(menu_file)
            week_start = weekly_menu.week_start.isoformat()
            requests.extend(weekly_menu.shopping_requests(get_library().recipes_by_id()))

        if not requests:
            fail("Nothing to shop for. Pass recipes or --menu.")

        logger.debug(f"Shopping for {len(requests)} recipe request(s)")
        stock = None if no_pantry else load_pantry(PANTRY_FILE)
        shopping_list = build_shopping_list(
            requests,
            pantry_lookup=stock.on_hand if stock is not None else None,
            category_lookup=default_catalog().category_for,
            week_start=week_start,
        )
    except (RecipeFormatError, LibraryError, MenuError, PantryError, ScalingError) as e:
        fail(str(e))
        return

    if interactive:
        shopping_list = interactive_check(shopping_list, title)

    display_shopping_list(shopping_list)

    if export_path:
        try:
            used_format = export_shopping_list(shopping_list, export_path, title=title)
        except (OSError, ValueError) as e:
            fail(f"Export failed: {e}")
            return
        click.echo(f"✓ Exported to {export_path} ({used_format})")


# ============================================================================
# Pantry Commands
# ============================================================================


@cli.group()
def pantry():
    """Manage your pantry (what you already have at home).

    Items tracked with a precise quantity are subtracted from shopping
    lists when the unit matches. Items tracked by status (none, low,
    medium, plenty) are shown but never subtracted.
    """
    pass


def _load_pantry_or_fail() -> Pantry:
    try:
        return load_pantry(PANTRY_FILE)
    except PantryError as e:
        fail(str(e))


@pantry.command("list")
def pantry_list():
    """List your pantry items."""
    items = list(_load_pantry_or_fail())

    click.echo()
    click.echo("YOUR PANTRY")
    click.echo("=" * 50)

    if items:
        for entry in items:
            click.echo(f"  {entry.name}: {entry.describe()}")
    else:
        click.echo("  (empty)")

    click.echo()
    click.echo(f"Total: {len(items)} items")
    click.echo(f"File: {PANTRY_FILE}")
    click.echo()


@pantry.command("set")
@click.argument("name")
@click.argument("quantity", type=float)
@click.argument("unit")
def pantry_set(name: str, quantity: float, unit: str):
    """Record a precise amount on hand.

    Examples:

        kitchen pantry set eggs 12 piece

        kitchen pantry set "chicken broth" 2 cups
    """
    current = _load_pantry_or_fail()
    try:
        entry = current.set_quantity(name, quantity, unit)
    except PantryError as e:
        fail(str(e))
        return
    save_pantry(current, PANTRY_FILE)
    click.echo(f"✓ {entry.name}: {entry.describe()}")


@pantry.command("status")
@click.argument("name")
@click.argument("status", type=click.Choice(SIMPLE_STATUSES))
def pantry_status(name: str, status: str):
    """Record a rough stock level (none, low, medium, plenty)."""
    current = _load_pantry_or_fail()
    entry = current.set_status(name, status)
    save_pantry(current, PANTRY_FILE)
    click.echo(f"✓ {entry.name}: {entry.describe()}")


@pantry.command("remove")
@click.argument("items", nargs=-1, required=True)
def pantry_remove(items: tuple[str, ...]):
    """Stop tracking items."""
    current = _load_pantry_or_fail()
    removed = [item for item in items if current.remove(item)]
    save_pantry(current, PANTRY_FILE)

    click.echo(f"✓ Removed {len(removed)} item(s) from pantry")
    for item in items:
        if item not in removed:
            click.echo(f"  ⚠ '{item}' was not in the pantry")


@pantry.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def pantry_clear(yes: bool):
    """Remove every pantry item."""
    if not yes:
        if not click.confirm("Clear the whole pantry?"):
            click.echo("Cancelled.")
            return

    clear_pantry(PANTRY_FILE)
    click.echo("✓ Pantry cleared")


@pantry.command("low")
def pantry_low():
    """Show items that are running low."""
    low = _load_pantry_or_fail().running_low()
    if not low:
        click.echo("Nothing is running low.")
        return

    click.echo("Running low:")
    for entry in low:
        click.echo(f"  • {entry.name} ({entry.describe()})")


# ============================================================================
# Menu Commands
# ============================================================================


@cli.group()
def menu():
    """Plan the week's meals."""
    pass


@menu.command("new")
@click.option("--week", "week_of", type=click.DateTime(["%Y-%m-%d"]), help="Any date in the week")
@click.option("--file", "menu_path", type=click.Path(), default=str(MENU_FILE), show_default=True)
@click.option("--yes", "-y", is_flag=True, help="Overwrite without asking")
def menu_new(week_of, menu_path: str, yes: bool):
    """Start an empty menu for a week (Sunday to Saturday)."""
    path = Path(menu_path)
    if path.exists() and not yes:
        if not click.confirm(f"Replace the menu in {path}?"):
            click.echo("Cancelled.")
            return

    new_menu = WeeklyMenu.empty(week_of.date() if week_of else date.today())
    path.parent.mkdir(parents=True, exist_ok=True)
    save_menu_file(new_menu, path)
    click.echo(f"✓ New menu for the week of {new_menu.week_start.isoformat()}")


@menu.command("plan")
@click.argument("day", type=click.DateTime(["%Y-%m-%d"]))
@click.argument("meal", type=click.Choice([*MEAL_SLOTS, "snack"]))
@click.argument("recipe_id")
@click.option("--servings", "-S", type=int, help="Servings (defaults to your preference)")
@click.option("--file", "menu_path", type=click.Path(), default=str(MENU_FILE), show_default=True)
def menu_plan(day, meal: str, recipe_id: str, servings: int | None, menu_path: str):
    """Put a library recipe on the menu.

    Examples:

        kitchen menu plan 2026-10-19 dinner 3f2c... --servings 4
    """
    try:
        recipe = get_library().get_recipe(recipe_id)
        if servings is None:
            servings = get_preferences().default_servings
        current = load_menu_file(menu_path)
        current.assign(day.date(), meal, recipe.id, servings)
    except (LibraryError, MenuError, PreferencesError) as e:
        fail(str(e))
        return

    save_menu_file(current, menu_path)
    click.echo(f"✓ {day.date().isoformat()} {meal}: {recipe.title} ({servings} servings)")


@menu.command("unplan")
@click.argument("day", type=click.DateTime(["%Y-%m-%d"]))
@click.argument("meal", type=click.Choice([*MEAL_SLOTS, "snack"]))
@click.option("--index", type=int, help="Which snack to remove, counting from 0 (default: last)")
@click.option("--file", "menu_path", type=click.Path(), default=str(MENU_FILE), show_default=True)
def menu_unplan(day, meal: str, index: int | None, menu_path: str):
    """Take a meal off the menu.

    Examples:

        kitchen menu unplan 2026-10-19 dinner

        kitchen menu unplan 2026-10-19 snack --index 0
    """
    try:
        current = load_menu_file(menu_path)
        removed = current.unassign(day.date(), meal, index)
    except MenuError as e:
        fail(str(e))
        return

    save_menu_file(current, menu_path)
    click.echo(f"✓ Removed {meal} on {day.date().isoformat()} ({removed.recipe_id})")


@menu.command("show")
@click.option("--file", "menu_path", type=click.Path(), default=str(MENU_FILE), show_default=True)
def menu_show(menu_path: str):
    """Show the planned week."""
    try:
        current = load_menu_file(menu_path)
        titles = {r.id: r.title for r in get_library().list_recipes()}
    except (MenuError, LibraryError) as e:
        fail(str(e))
        return

    click.echo()
    click.echo(f"WEEK OF {current.week_start.isoformat()}")
    click.echo("=" * 50)

    for on in week_days(current.week_start):
        try:
            menu_day = current.day(on)
        except MenuError:
            continue
        click.echo(f"\n{on.strftime('%a %b %d')}")
        slots = [(meal, getattr(menu_day, meal)) for meal in MEAL_SLOTS]
        slots += [("snack", snack) for snack in menu_day.snacks]
        planned = [(meal, slot) for meal, slot in slots if slot is not None]
        if not planned:
            click.echo("  (nothing planned)")
        for meal, slot in planned:
            name = titles.get(slot.recipe_id, slot.recipe_id)
            click.echo(f"  {meal.title()}: {name} ({slot.servings} servings)")
    click.echo()


# ============================================================================
# Preferences Commands
# ============================================================================


@cli.group()
def prefs():
    """View or change your preferences."""
    pass


@prefs.command("show")
def prefs_show():
    """Show current preferences."""
    try:
        current = get_preferences()
    except PreferencesError as e:
        fail(str(e))
        return
    click.echo(f"Timer sound:      {current.timer_sound}")
    click.echo(f"Dark mode:        {'on' if current.dark_mode else 'off'}")
    click.echo(f"Default servings: {current.default_servings}")


@prefs.command("set")
@click.option("--timer-sound", type=click.Choice(TIMER_SOUNDS))
@click.option("--dark-mode/--light-mode", default=None)
@click.option("--default-servings", type=int)
def prefs_set(timer_sound: str | None, dark_mode: bool | None, default_servings: int | None):
    """Change one or more preferences."""
    changes = {
        key: value
        for key, value in {
            "timer_sound": timer_sound,
            "dark_mode": dark_mode,
            "default_servings": default_servings,
        }.items()
        if value is not None
    }
    if not changes:
        click.echo("Nothing to change.")
        return

    try:
        update_preferences(**changes)
    except PreferencesError as e:
        fail(str(e))
        return
    click.echo("✓ Preferences updated")


@prefs.command("reset")
def prefs_reset():
    """Restore default preferences."""
    try:
        reset_preferences()
    except PreferencesError as e:
        fail(str(e))
        return
    click.echo("✓ Preferences reset to defaults")


@cli.command("categories")
def list_categories():
    """List shopping categories."""
    for key, label in CATEGORY_LABELS.items():
        click.echo(f"  {key:<14} {label}")


# ============================================================================
# Entry Point
# ============================================================================


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
