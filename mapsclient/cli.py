"""Typer CLI for mapsclient."""
from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import List, Optional

import typer

from .config import Config, MissingApiKeyError
from .directions import get_directions
from .distance import get_distance
from .geocoding import geocode_addresses, reverse_geocode_many
from .logging_config import setup_logging
from .places import DEFAULT_RADIUS, nearby_places
from .status import BatchResult, Outcome, run_batch
from .timezone import get_time_zones
from .utils import OUTPUT_FORMATS, render
from .wifi import WifiScanError, geolocate, scan_access_points

app = typer.Typer(help="Query the Google Maps web services from the command line.")


@app.callback()
def main(
    ctx: typer.Context,
    output: str = typer.Option("table", "--output", "-o", help="Output format: table|csv|json."),
    log_level: Optional[str] = typer.Option(None, help="Log level (default: MAPSCLIENT_LOG_LEVEL or WARNING)."),
):
    if output not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"must be one of {', '.join(OUTPUT_FORMATS)}", param_hint="--output")
    config = Config.from_env()
    setup_logging(log_level or config.log_level)
    ctx.obj = {"config": config, "output": output}


@contextmanager
def _fatal_errors():
    try:
        yield
    except (MissingApiKeyError, WifiScanError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _coordinates_or_stdin(coordinates: Optional[List[str]]) -> List[str]:
    if coordinates:
        return coordinates
    items = []
    if sys.stdin is not None and not sys.stdin.isatty():
        items = [line.strip() for line in sys.stdin if line.strip()]
    if not items:
        raise typer.BadParameter("give at least one 'lat,lng' argument or pipe them on stdin")
    return items


def _emit(ctx: typer.Context, batch: BatchResult) -> None:
    text = render(batch.records, ctx.obj["output"])
    if text:
        typer.echo(text)
    _report(batch)


def _report(batch: BatchResult) -> None:
    for notice in batch.notices:
        color = typer.colors.YELLOW if notice.kind == "empty" else typer.colors.RED
        typer.secho(notice.message, fg=color, err=True)


def _single(item: str, outcome: Outcome) -> BatchResult:
    return run_batch([item], lambda _: outcome)


@app.command()
def geocode(
    ctx: typer.Context,
    addresses: List[str] = typer.Argument(..., help="One or more addresses."),
    coordinates_only: bool = typer.Option(False, help="Print only 'lat,lng', one per line, for piping."),
):
    """Convert addresses into coordinates."""
    with _fatal_errors():
        batch = geocode_addresses(addresses, ctx.obj["config"])
    if coordinates_only:
        for record in batch.records:
            typer.echo(str(record.coordinate))
        _report(batch)
        return
    _emit(ctx, batch)


@app.command(name="reverse-geocode")
def reverse_geocode_cmd(
    ctx: typer.Context,
    coordinates: Optional[List[str]] = typer.Argument(None, help="'lat,lng' pairs; read from stdin if omitted."),
):
    """Convert coordinates into the most specific address."""
    with _fatal_errors():
        batch = reverse_geocode_many(_coordinates_or_stdin(coordinates), ctx.obj["config"])
    _emit(ctx, batch)


@app.command()
def directions(
    ctx: typer.Context,
    origin: str = typer.Argument(..., help="Start address."),
    destination: str = typer.Argument(..., help="End address."),
    mode: str = typer.Option("driving", help="driving|bicycling|walking"),
    imperial: bool = typer.Option(False, help="Use miles and feet instead of kilometres."),
):
    """Step-by-step directions between two places."""
    with _fatal_errors():
        outcome = get_directions(
            origin, destination, ctx.obj["config"], mode=mode, units="imperial" if imperial else "metric"
        )
    _emit(ctx, _single(f"{origin} -> {destination}", outcome))


@app.command()
def distance(
    ctx: typer.Context,
    origin: str = typer.Argument(..., help="Start address."),
    destination: str = typer.Argument(..., help="End address."),
    mode: str = typer.Option("driving", help="driving|bicycling|walking|transit"),
    imperial: bool = typer.Option(False, help="Use miles instead of kilometres."),
):
    """Travel distance, duration and (for transit) fare between two places."""
    with _fatal_errors():
        outcome = get_distance(
            origin, destination, ctx.obj["config"], mode=mode, units="imperial" if imperial else "metric"
        )
    _emit(ctx, _single(f"{origin} -> {destination}", outcome))


@app.command()
def timezone(
    ctx: typer.Context,
    coordinates: Optional[List[str]] = typer.Argument(None, help="'lat,lng' pairs; read from stdin if omitted."),
):
    """Time zone and current local time at each coordinate."""
    with _fatal_errors():
        batch = get_time_zones(_coordinates_or_stdin(coordinates), ctx.obj["config"])
    _emit(ctx, batch)


@app.command()
def nearby(
    ctx: typer.Context,
    coordinate: Optional[str] = typer.Argument(None, help="'lat,lng'; read from stdin if omitted."),
    radius: int = typer.Option(DEFAULT_RADIUS, help="Search radius in metres (max 50000)."),
    place_type: Optional[str] = typer.Option(None, "--type", help="Place type, e.g. restaurant."),
    keyword: Optional[List[str]] = typer.Option(None, help="Keyword to match; repeat for OR."),
):
    """Places near a coordinate."""
    with _fatal_errors():
        item = coordinate or _coordinates_or_stdin(None)[0]
        outcome = nearby_places(item, ctx.obj["config"], radius=radius, place_type=place_type, keywords=keyword or ())
    _emit(ctx, _single(item, outcome))


@app.command(name="scan-wifi")
def scan_wifi(ctx: typer.Context):
    """List the wireless access points visible to this machine."""
    with _fatal_errors():
        access_points = scan_access_points()
    if not access_points:
        typer.secho("No wireless access points are visible", fg=typer.colors.YELLOW, err=True)
        return
    _emit(ctx, BatchResult(records=access_points))


@app.command(name="geolocate")
def geolocate_cmd(
    ctx: typer.Context,
    with_coordinates: bool = typer.Option(False, help="Also print coordinates and accuracy."),
    max_access_points: Optional[int] = typer.Option(None, min=1, help="Send at most this many access points."),
):
    """Locate this machine from visible WiFi access points."""
    with _fatal_errors():
        outcome = geolocate(ctx.obj["config"], with_coordinates=with_coordinates, max_access_points=max_access_points)
    _emit(ctx, _single("wifi access points", outcome))


if __name__ == "__main__":
    app()
