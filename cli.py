# cli.py - interactive catalog browser with autocomplete
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.catalog_client import CatalogClient
import requests

console = Console()
c = CatalogClient(
    base_url=os.environ.get("CATALOG_BASE_URL", "http://127.0.0.1:3000"),
    api_key=os.environ.get("CATALOG_API_KEY", "my-secret-key"),
)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=14)
    table.add_column("Name", style="bold", width=16)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=14)
    table.add_column("Stock", width=8)

    for p in products:
        in_stock = p.get("inStock")
        table.add_row(
            str(p.get("id", "N/A")),
            str(p.get("name", "N/A")),
            str(p.get("description", "")),
            f"${float(p.get('price', 0)):.2f}",
            str(p.get("category", "N/A")),
            "[green]yes[/green]" if in_stock else "[red]no[/red]"
        )
    console.print(table)


def show_pagination(pagination: Dict[str, Any]):
    console.print(
        f"[dim]Page {pagination.get('currentPage')} of {pagination.get('totalPages')} "
        f"({pagination.get('totalProducts')} products)[/dim]"
    )


def show_stats(stats: Dict[str, Any]):
    table = Table(title="📊 Catalog Stats", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category", style="bold")
    table.add_column("Products", justify="right")
    for category, count in stats.get("categoryStats", {}).items():
        table.add_row(category, str(count))
    console.print(table)

    stock = stats.get("stockStats", {})
    console.print(Panel.fit(
        f"Total: [bold]{stats.get('totalProducts', 0)}[/bold]   "
        f"In stock: [green]{stock.get('inStock', 0)}[/green]   "
        f"Out of stock: [red]{stock.get('outOfStock', 0)}[/red]",
        title="📦 Stock",
        border_style="yellow"
    ))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def _error_message(e: Exception) -> str:
    # The server always answers errors with {"error": kind, "message": text}
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        try:
            body = e.response.json()
            return f"{body.get('error')}: {body.get('message')}"
        except ValueError:
            return f"HTTP {e.response.status_code}"
    return str(e)


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the decoded result, or None after printing the error.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except requests.exceptions.RequestException as e:
        status_message = f"Error: {_error_message(e)}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        resp = try_api(c.list_products) or {}
        product_cache = resp.get("products", [])

    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    categories = sorted({p.get("category", "") for p in product_cache if p.get("category")})
    return WordCompleter(categories, ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Catalog API",
        "[bold blue]Product Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_id() -> Optional[int]:
    raw = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Product ID must be a whole number.[/red]")
        return None


def ask_product_fields() -> Dict[str, Any]:
    return {
        "name": prompt_with_autocomplete("Enter product name"),
        "description": prompt_with_autocomplete("Enter description"),
        "price": ask_float("💰 Price", default=10.0),
        "category": prompt_with_autocomplete(
            "🏷️ Category", completer=get_category_completer(), default="Electronics"
        ),
        "in_stock": Confirm.ask("In stock?", default=True),
    }


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())

    # Preload products for autocomplete
    product_cache = (try_api(c.list_products) or {}).get("products", [])

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "➕ Create product"),
            ("2", "🔍 Search products", "6", "✏️ Update product"),
            ("3", "📊 Catalog stats", "7", "🗑️ Delete product"),
            ("4", "ℹ️ Get product by ID", "q", "👋 Quit"),
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            category = prompt_with_autocomplete(
                "Category (blank for all)", completer=get_category_completer()
            ).strip() or None
            page = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Per page", default=10)
            resp = try_api(c.list_products, category, page, limit, success_msg="Products loaded successfully")
            if resp is not None:
                if not category and page == 1:
                    product_cache = resp.get("products", [])
                show_products(resp.get("products", []))
                show_pagination(resp.get("pagination", {}))

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            resp = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if resp is not None:
                show_products(resp.get("results", []), title=f"🔍 {resp.get('count', 0)} match(es)")

        elif choice == "3":
            resp = try_api(c.get_stats, success_msg="Stats loaded")
            if resp:
                show_stats(resp)

        elif choice == "4":
            pid = ask_product_id()
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
                if resp:
                    show_products([resp["product"]])

        elif choice == "5":
            fields = ask_product_fields()
            resp = try_api(c.create_product, **fields, success_msg=f"Product '{fields['name']}' created")
            if resp:
                show_products([resp["product"]], title="➕ Created (not stored by the server)")

        elif choice == "6":
            pid = ask_product_id()
            if pid is not None:
                fields = ask_product_fields()
                resp = try_api(c.update_product, pid, **fields, success_msg=f"Product {pid} updated")
                if resp:
                    show_products([resp["product"]], title="✏️ Updated (not stored by the server)")

        elif choice == "7":
            pid = ask_product_id()
            if pid is not None and Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid)
                if resp:
                    status_message = resp.get("message", "Deleted")
                    console.print(show_status(status_message, True))

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
