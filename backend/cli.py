"""
Bistro CLI.

Command-line interface for common operations: schema creation, demo
data and catalog queries against the configured database.
"""

import sys

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shared.utils.exceptions import AppException

app = typer.Typer(
    name="bistro",
    help="Bistro Catalog CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db():
    """Create missing database tables."""
    from shared.infrastructure.db import engine
    from store_api.models import Base

    console.print(f"[blue]Creating tables on: {engine.url.render_as_string(hide_password=True)}[/blue]")
    Base.metadata.create_all(bind=engine)
    console.print(f"[green]✓ {len(Base.metadata.tables)} tables ready[/green]")


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Seed database with demo data (skipped when users already exist)."""
    from shared.config.settings import settings
    from shared.infrastructure.db import engine, get_db_context
    from store_api.models import Base
    from store_api.seed import seed as seed_database

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    Base.metadata.create_all(bind=engine)
    with get_db_context() as db:
        seed_database(db)
    console.print("[green]✓ Seeding complete[/green]")


# =============================================================================
# Catalog Commands
# =============================================================================

@app.command()
def query_catalog(
    search: str = typer.Option(None, "--search", "-s", help="Substring of name or description"),
    category_id: str = typer.Option(None, "--category", help="Category ID"),
    featured: bool = typer.Option(None, "--featured/--not-featured", help="Featured flag"),
    popular: bool = typer.Option(None, "--popular/--not-popular", help="Popular flag"),
    sort: str = typer.Option("created_at_desc", help="Sort token, e.g. price_asc"),
    page: int = typer.Option(1, help="Page number"),
    limit: int = typer.Option(None, help="Items per page (default DEFAULT_PAGE_SIZE)"),
    locale: str = typer.Option(None, "--locale", "-l", help="Display locale"),
):
    """Run a catalog listing and print it as a table."""
    from store_api.services.catalog import (
        PageRequest,
        compile_sort,
        load_product_snapshot,
        normalize_filters,
        query_catalog as run_query,
    )
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context

    params = {
        "search": search,
        "categoryId": category_id,
        "isFeatured": featured,
        "isPopular": popular,
    }

    try:
        filters = normalize_filters(params)
        instruction = compile_sort(sort)
    except AppException as e:
        console.print(f"[red]✗ {e.detail}: {escape(str(e.details))}[/red]")
        raise typer.Exit(1)

    with get_db_context() as db:
        snapshot = load_product_snapshot(db)
    page_request = PageRequest(
        page=page, limit=limit, default_limit=settings.default_page_size, max_limit=settings.max_page_size
    )
    result = run_query(snapshot, filters, instruction, page_request, locale=locale)

    table = Table(title=f"Products (page {result.page}/{result.total_pages or 1}, {result.total} total)")
    table.add_column("Slug", style="cyan")
    table.add_column("Name")
    table.add_column("Price", style="green", justify="right")
    table.add_column("Rating", style="yellow", justify="right")
    table.add_column("Flags", style="magenta")

    for record in result.items:
        flags = [
            label
            for label, on in (
                ("featured", record.is_featured),
                ("popular", record.is_popular),
                ("trending", record.is_trending),
            )
            if on
        ]
        table.add_row(
            record.slug,
            record.display_name(result.locale),
            f"{record.price:.2f}",
            f"{record.rating:.1f}" if record.rating is not None else "-",
            ", ".join(flags),
        )

    console.print(table)


# =============================================================================
# Info Commands
# =============================================================================

@app.command()
def version():
    """Show version information."""
    table = Table(title="Bistro Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
