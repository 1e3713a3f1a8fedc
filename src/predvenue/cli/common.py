"""Helpers shared by CLI subcommands."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import typer

from predvenue.adapters.base import VenueAdapter

T = TypeVar("T")


def resolve_adapter(ctx: typer.Context, venue: str | None) -> VenueAdapter:
    """Adapter for --venue, or the active venue. Exits with an error for unknown venues."""
    registry = ctx.obj["registry"]
    if venue is None:
        return registry.get_default()
    adapter = registry.get_or_null(venue)
    if adapter is None:
        typer.echo(f"Unknown venue: {venue} (known: {', '.join(registry.venue_ids())})", err=True)
        raise typer.Exit(code=2)
    return adapter


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(coro)
