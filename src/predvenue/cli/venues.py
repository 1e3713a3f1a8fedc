"""Venues subcommand: list, show, active."""

from __future__ import annotations

import typer

from predvenue.config.venues import VENUE_CONFIGS, get_active_venue_id, get_venue_config

app = typer.Typer(help="Venue configuration")


@app.command("list")
def list_venues() -> None:
    """List configured venues; the active one is starred."""
    active = get_active_venue_id()
    for venue_id, config in VENUE_CONFIGS.items():
        marker = "*" if venue_id == active else " "
        typer.echo(f"{marker} {venue_id:<12} {config.display_name}")


@app.command("active")
def active_venue() -> None:
    """Print the active venue id."""
    typer.echo(get_active_venue_id())


@app.command("show")
def show_venue(venue_id: str = typer.Argument(..., help="Venue id, e.g. polymarket")) -> None:
    """Show rules, features and theme for a venue."""
    config = get_venue_config(venue_id)
    if config is None:
        typer.echo(f"Unknown venue: {venue_id}", err=True)
        raise typer.Exit(code=2)
    typer.echo(config.model_dump_json(indent=2))
