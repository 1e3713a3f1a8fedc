"""Markets subcommand: list, show, search; plus top-level resolve and prices."""

from __future__ import annotations

import json

import typer

from predvenue.adapters.base import FetchMarketsParams
from predvenue.cli.common import resolve_adapter, run_async
from predvenue.models import VenueMarket

app = typer.Typer(help="Market discovery through the active (or chosen) venue")

VenueOption = typer.Option(None, "--venue", "-v", help="Venue id (default: active venue)")


def _echo_market_line(m: VenueMarket) -> None:
    probs = " / ".join(f"{o.label} {o.price:.2f}" for o in m.outcomes)
    typer.echo(f"  {m.venue_market_id[:28]:<28}  {m.category.value:<13} {m.title[:60]}  [{probs}]")


@app.command("list")
def list_markets(
    ctx: typer.Context,
    venue: str | None = VenueOption,
    limit: int = typer.Option(20, "--limit", "-n", help="Max markets to fetch"),
    closed: bool = typer.Option(False, "--closed", help="List closed/settled markets instead of active"),
) -> None:
    """Fetch and list normalized markets."""
    adapter = resolve_adapter(ctx, venue)
    params = FetchMarketsParams(limit=limit, active=None if closed else True, closed=closed or None)
    result = run_async(adapter.fetch_markets_result(params))
    if not result.ok:
        typer.echo(f"Fetch failed: {result.error}", err=True)
        raise typer.Exit(code=1)
    markets = result.value or []
    for m in markets:
        _echo_market_line(m)
    typer.echo(f"Total: {len(markets)} markets from {adapter.display_name}")


@app.command("show")
def show_market(
    ctx: typer.Context,
    market_id: str = typer.Argument(..., help="Venue market id / ticker"),
    venue: str | None = VenueOption,
) -> None:
    """Show one market as the Event record the game layer would store."""
    adapter = resolve_adapter(ctx, venue)
    result = run_async(adapter.fetch_market_result(market_id))
    if not result.ok:
        typer.echo(f"Fetch failed: {result.error}", err=True)
        raise typer.Exit(code=1)
    if result.value is None:
        typer.echo(f"No valid market {market_id} on {adapter.venue_id}", err=True)
        raise typer.Exit(code=1)
    payload = {
        "event": adapter.to_event(result.value).to_partial(),
        "tokens": [t.model_dump(mode="json") for t in adapter.extract_token_mappings(result.value)],
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command("search")
def search_markets(
    ctx: typer.Context,
    query: str = typer.Argument(...),
    venue: str | None = VenueOption,
    limit: int = typer.Option(20, "--limit", "-n"),
) -> None:
    """Search markets by text."""
    adapter = resolve_adapter(ctx, venue)
    markets = run_async(adapter.search_markets(query, limit))
    for m in markets:
        _echo_market_line(m)
    typer.echo(f"Total: {len(markets)} markets")


def resolve(
    ctx: typer.Context,
    market_id: str = typer.Argument(..., help="Venue market id / ticker"),
    venue: str | None = VenueOption,
) -> None:
    """Check whether a market has resolved and which outcome won."""
    adapter = resolve_adapter(ctx, venue)
    result = run_async(adapter.check_resolution_result(market_id))
    if not result.ok:
        typer.echo(f"Fetch failed: {result.error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(result.value.model_dump_json(indent=2))


def prices(
    ctx: typer.Context,
    token_ids: list[str] = typer.Argument(..., help="Outcome token ids (Kalshi: TICKER-yes / TICKER-no)"),
    venue: str | None = VenueOption,
) -> None:
    """Fetch current prices for outcome tokens."""
    adapter = resolve_adapter(ctx, venue)
    updates = run_async(adapter.fetch_prices(token_ids))
    found = 0
    for update in updates:
        for tp in update.token_prices:
            found += 1
            typer.echo(f"  {tp.token_id}  {tp.price:.4f}")
    typer.echo(f"Priced {found} of {len(token_ids)} tokens")
