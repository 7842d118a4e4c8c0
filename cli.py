# cli.py
import argparse
import logging
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from inventory.config import configure_logging, get_settings
from inventory.errors import InventoryError
from inventory.models import Product
from inventory.store import InventoryStore
from sdk.inventory_client import InventoryClient

logger = logging.getLogger("inventory.cli")

console = Console()

status_message = "Ready"
product_cache: List[Product] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Input parsing
# ---------------------------
def parse_quantity(raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError("Enter a whole number for quantity")
    if value < 0:
        raise ValueError("Quantity must not be negative")
    return value


def parse_price(raw: str) -> Decimal:
    try:
        value = Decimal(raw.strip().replace(",", "."))
    except InvalidOperation:
        raise ValueError("Enter a valid price")
    if not value.is_finite() or value < 0:
        raise ValueError("Price must be a non-negative number")
    return value


def parse_product_id(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError("Product ID must be a number")


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Product]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Inventory",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right", width=6)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Qty", justify="right", width=8)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("Updated", width=19)

    for p in products:
        table.add_row(
            str(p.id),
            p.name,
            p.description,
            str(p.quantity),
            f"{p.price:.2f}",
            p.category,
            p.last_updated.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# Backend wrapper
# ---------------------------
def try_call(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) and reports the outcome.
    Returns the result, or None if the backend raised.
    """
    global status_message
    try:
        result = fn(*args, **kwargs)
    except (InventoryError, OSError) as e:
        logger.debug("Backend call %s failed", getattr(fn, "__name__", fn), exc_info=True)
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None
    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def get_product_completer():
    names = [p.name for p in product_cache]
    ids = [str(p.id) for p in product_cache]
    return WordCompleter([n for n in (names + ids) if n], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_parsed(message: str, parser, default: str = ""):
    while True:
        raw = Prompt.ask(message, default=default)
        try:
            return parser(raw)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")


def ask_product_fields(current: Optional[Product] = None) -> Product:
    """Collect the editable fields, pre-filled from current when editing."""
    while True:
        name = prompt_with_autocomplete("Name", default=current.name if current else "").strip()
        if name:
            break
        console.print("[red]Enter a product name[/red]")
    description = prompt_with_autocomplete("Description", default=current.description if current else "")
    quantity = ask_parsed("📦 Quantity", parse_quantity, default=str(current.quantity) if current else "0")
    price = ask_parsed("💰 Price", parse_price, default=str(current.price) if current else "0")
    category = prompt_with_autocomplete("🏷️ Category", default=current.category if current else "")
    return Product(
        id=current.id if current else None,
        name=name,
        description=description,
        quantity=quantity,
        price=price,
        category=category,
    )


def create_header(source: str):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        f"📁 {source}",
        "[bold blue]Inventory Manager[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu(backend, source: str):
    global status_message, product_cache

    console.clear()
    console.print(create_header(source))
    product_cache = try_call(backend.get_all_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, not status_message.startswith("Error")))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "4", "✏️ Edit product"),
            ("2", "🔍 Search products", "5", "🗑️ Delete product"),
            ("3", "➕ Add product", "6", "ℹ️ Get product by ID"),
            ("", "", "q", "👋 Quit")
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_call(backend.get_all_products, success_msg="Products loaded")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term", completer=get_product_completer())
            res = try_call(backend.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res)

        elif choice == "3":
            candidate = ask_product_fields()
            added = try_call(backend.add_product, candidate, success_msg=f"Product '{candidate.name}' added")
            if added:
                show_products([added])
                product_cache = try_call(backend.get_all_products) or []

        elif choice == "4":
            pid = ask_parsed("Product ID to edit", parse_product_id)
            current = try_call(backend.get_product, pid)
            if current:
                updated = try_call(backend.update_product, ask_product_fields(current),
                                   success_msg=f"Product {pid} updated")
                if updated:
                    show_products([updated])
                    product_cache = try_call(backend.get_all_products) or []

        elif choice == "5":
            pid = ask_parsed("Product ID to delete", parse_product_id)
            current = try_call(backend.get_product, pid)
            if current and Confirm.ask(f"[red]Delete '{current.name}'?[/red]"):
                try_call(backend.delete_product, pid, success_msg=f"Product {pid} deleted")
                product_cache = try_call(backend.get_all_products) or []

        elif choice == "6":
            pid = ask_parsed("Product ID", parse_product_id)
            resp = try_call(backend.get_product, pid, success_msg=f"Product {pid} loaded")
            if resp:
                show_products([resp])

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                return

        console.print()
        console.rule(style="dim")


def build_backend(args):
    if args.url:
        return InventoryClient(base_url=args.url), args.url
    settings = get_settings()
    path = args.file or settings.data_file
    return InventoryStore(path, strict=settings.strict_load), path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Inventory manager")
    parser.add_argument("--file", help="Inventory JSON file (defaults to INVENTORY_DATA_FILE)")
    parser.add_argument("--url", help="Use a running inventory API instead of a local file")
    args = parser.parse_args(argv)

    configure_logging()
    backend, source = build_backend(args)
    menu(backend, source)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
