"""
Catalogos CLI.

Command-line interface for common database and inspection operations.
"""

import sys
import time
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="catalogos",
    help="Catalogos management CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init():
    """Create all database tables."""
    from rest_api.models import Base
    from shared.infrastructure.db import engine

    console.print("[blue]Creating tables...[/blue]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓ Tables created/verified[/green]")


@app.command()
def db_seed(
    force: bool = typer.Option(False, "--force", "-f", help="Seed even in production"),
):
    """Seed database with sample localities and catalogs."""
    from rest_api.seed import seed_catalogs, seed_localities
    from shared.config.logging import cli_logger
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    with get_db_context() as db:
        localities = seed_localities(db)
        catalogs = seed_catalogs(db)

    cli_logger.info("Database seeded", localities=localities, catalog_rows=catalogs)
    console.print(f"[green]✓ Seeded {localities} localities and {catalogs} catalog rows[/green]")


# =============================================================================
# Inventory Commands
# =============================================================================

@app.command()
def localities(
    active_only: bool = typer.Option(False, "--active", "-a", help="Only active localities"),
):
    """List localities with their area count."""
    from rest_api.services.domain import LocalityService
    from shared.infrastructure.db import get_db_context

    with get_db_context() as db:
        service = LocalityService(db)
        rows = service.list_active() if active_only else service.list_all()

        table = Table(title="Localities")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Name", style="green")
        table.add_column("Active")
        table.add_column("Areas", justify="right")

        for loc in rows:
            table.add_row(str(loc.id), loc.name, "✓" if loc.is_active else "✗", str(len(loc.areas)))

    console.print(table)


@app.command()
def areas(
    locality_id: int = typer.Argument(..., help="Locality ID"),
):
    """List the areas of one locality."""
    from rest_api.services.domain import AreaService
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import CatalogError

    with get_db_context() as db:
        try:
            rows = AreaService(db).list_by_parent(locality_id)
        except CatalogError as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

        table = Table(title=f"Areas of locality {locality_id}")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Name", style="green")
        table.add_column("Active")

        for area in rows:
            table.add_row(str(area.id), area.name, "✓" if area.is_active else "✗")

    console.print(table)


@app.command()
def purge_locality(
    locality_id: int = typer.Argument(..., help="Locality ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Permanently delete a locality and all of its areas."""
    from rest_api.services.domain import AreaService
    from shared.config.logging import cli_logger
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import CatalogError

    if not yes:
        typer.confirm(f"Delete locality {locality_id} and all its areas?", abort=True)

    with get_db_context() as db:
        try:
            removed = AreaService(db).delete_parent(locality_id)
        except CatalogError as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

    cli_logger.warning("Locality purged", locality_id=locality_id, removed_areas=removed)
    console.print(f"[green]✓ Locality {locality_id} deleted ({removed} areas removed)[/green]")


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option("http://localhost:8080/api/health/detailed", help="Health endpoint"),
):
    """Check API and database health."""
    import httpx
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError

    from shared.infrastructure.db import engine

    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    try:
        start = time.time()
        response = httpx.get(url, timeout=5.0)
        elapsed = (time.time() - start) * 1000
        if response.status_code == 200:
            table.add_row("REST API", "✓ Healthy", f"{elapsed:.0f}ms")
        else:
            table.add_row("REST API", f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
    except httpx.HTTPError as e:
        table.add_row("REST API", f"✗ {type(e).__name__}", "-")

    try:
        start = time.time()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        elapsed = (time.time() - start) * 1000
        table.add_row("Database", "✓ Healthy", f"{elapsed:.0f}ms")
    except SQLAlchemyError as e:
        table.add_row("Database", f"✗ {type(e).__name__}", "-")

    console.print(table)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Catalogos Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("CLI", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
