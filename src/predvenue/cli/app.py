"""Root CLI app - entry point and command registration."""

from pathlib import Path

import typer

from predvenue.adapters import initialize_adapters
from predvenue.config import get_settings
from predvenue.config.settings import configure_logging

app = typer.Typer(
    name="predvenue",
    help="predvenue - Venue-agnostic prediction market adapters (Polymarket, Jupiter/Kalshi).",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config_dir: Path | None = typer.Option(
        None, "--config-dir", "-C", help="Config directory (default: ./config or package config)"
    ),
    profile: str | None = typer.Option(
        None, "--profile", "-p", help="Config profile (e.g. dev) to overlay on default.toml"
    ),
) -> None:
    """Configure logging, build the adapter registry and store both in context."""
    settings = get_settings(profile, config_dir)
    configure_logging(settings)
    ctx.obj = {"settings": settings, "registry": initialize_adapters(settings)}


# Subcommands registered from other modules
from predvenue.cli import markets, venues  # noqa: E402

app.add_typer(venues.app, name="venues")
app.add_typer(markets.app, name="markets")
app.command("resolve")(markets.resolve)
app.command("prices")(markets.prices)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
