"""Command-line interface for exercising the fruit-company services."""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The CLI requires Rich for table rendering. Install the CLI extras via "
        "'pip install fruit-company[cli]' to enable this command."
    ) from exc

from .auth.base import Authority
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .config import ClientConfig, Credentials
from .events import Event, Observer, describe, no_observer
from .exceptions import AuthorityError, FruitError
from .http import RequestsTransport
from .maps import GeocodeAddress, MapsToken, PlaceResults, ReverseGeocodeAddress
from .models.common import LocationCoordinates, parse_coordinate
from .music import MusicCatalogType, MusicDeveloperToken, SearchMusicCatalog
from .perform import perform
from .request import Request
from .weather import ALL_WEATHER_DATA_SETS, WeatherQuery, WeatherToken

app = typer.Typer(help="Apple services REST CLI.", no_args_is_help=True)


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    return {
        "app_id": typer.Option(
            ..., "--app", envvar="FRUIT_APP_ID", help="Identifier of the service app."
        ),
        "team_id": typer.Option(
            ..., "--team", envvar="FRUIT_TEAM_ID", help="Identifier of the developer team."
        ),
        "key_id": typer.Option(
            ..., "--keyid", envvar="FRUIT_KEY_ID", help="Identifier of the signing key."
        ),
        "key_file": typer.Option(
            ...,
            "--keyfile",
            envvar="FRUIT_KEY_FILE",
            help="Path to the PKCS#8 PEM private key.",
        ),
        "verify_ssl": typer.Option(
            True,
            "--verify/--no-verify",
            envvar="FRUIT_VERIFY_SSL",
            help="Enable or disable TLS certificate verification.",
            show_default=True,
        ),
        "timeout": typer.Option(30.0, help="Request timeout (seconds).", show_default=True),
        "verbose": typer.Option(False, "--verbose", "-v", help="Log additional information."),
        "output_json": typer.Option(
            False,
            "--json",
            "-j",
            help="Return raw JSON instead of rendering a table.",
        ),
    }


_SHARED_OPTIONS = _shared_options()


def _load_credentials(app_id: str, team_id: str, key_id: str, key_file: Path) -> Credentials:
    try:
        return Credentials.from_key_file(app_id, team_id, key_id, key_file)
    except AuthorityError as exc:
        raise typer.BadParameter(str(exc), param_hint="--keyfile") from exc


def _coordinate(value: str, option: str) -> float:
    try:
        return parse_coordinate(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=option) from exc


def _verbose_observer(event: Event) -> None:
    typer.secho(describe(event), err=True, fg=typer.colors.BRIGHT_BLACK)


def _configure(verbose: bool) -> Observer:
    if not verbose:
        return no_observer
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    return _verbose_observer


def _run(
    authority: Authority,
    request: Request[Any, Any],
    *,
    timeout: float,
    verify_ssl: bool,
    verbose: bool,
) -> Any:
    observer = _configure(verbose)
    config = ClientConfig(timeout=timeout, verify_ssl=verify_ssl)
    with RequestsTransport(config) as transport:
        try:
            return perform(authority, request, transport=transport, observer=observer)
        except FruitError as exc:
            _handle_error(exc)


def _handle_error(exc: FruitError) -> None:
    message = f"Request failed (status {exc.status_code}): {exc}"
    if exc.details:
        message += f"\nDetails: {exc.details}"
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=_json_default))


console = Console(force_terminal=False, color_system=None)


def _render_rich_table(view: TableView, rows: Sequence[Mapping[str, Any]]) -> None:
    table = Table(
        title=view.title,
        box=box.SIMPLE,
        show_lines=False,
        header_style="bold cyan",
    )
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    ordered_rows = list(rows)
    if view.sort_key:
        ordered_rows.sort(key=view.sort_key)
    for row in ordered_rows:
        table.add_row(*(column.render(row) for column in view.columns))
    console.print(table)


def _present_output(rows: Sequence[Mapping[str, Any]], *, view_id: str, json_output: bool) -> None:
    if json_output or not rows:
        _echo_json(list(rows))
        return
    _render_rich_table(CLI_TABLE_VIEWS[view_id], rows)


def _place_rows(results: PlaceResults) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for place in results.results:
        rows.append(
            {
                "name": place.name,
                "country": place.country,
                "countryCode": place.country_code,
                "formattedAddressLines": list(place.formatted_address_lines),
                "latitude": place.coordinate.latitude if place.coordinate else None,
                "longitude": place.coordinate.longitude if place.coordinate else None,
                "structuredAddress": dict(place.structured_address),
            }
        )
    return rows


@app.command("geocode")
def geocode(
    query: str = typer.Option(..., "--query", "-q", help="Address or place to look up."),
    language: str = typer.Option("en", "--language", help="Language to request details in."),
    country: list[str] = typer.Option(
        [], "--country", help="Limit results to a country code (repeatable)."
    ),
    app_id: str = _SHARED_OPTIONS["app_id"],
    team_id: str = _SHARED_OPTIONS["team_id"],
    key_id: str = _SHARED_OPTIONS["key_id"],
    key_file: Path = _SHARED_OPTIONS["key_file"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """Find places matching an address."""

    token = MapsToken(_load_credentials(app_id, team_id, key_id, key_file))
    request = GeocodeAddress(
        query=query,
        language=language,
        limit_to_countries=country or None,
    )
    results = _run(token, request, timeout=timeout, verify_ssl=verify_ssl, verbose=verbose)
    _present_output(_place_rows(results), view_id="places", json_output=output_json)


@app.command("reverse-geocode")
def reverse_geocode(
    latitude: str = typer.Option(..., "--latitude", help="Latitude of the location."),
    longitude: str = typer.Option(..., "--longitude", help="Longitude of the location."),
    language: str = typer.Option("en", "--language", help="Language to request details in."),
    app_id: str = _SHARED_OPTIONS["app_id"],
    team_id: str = _SHARED_OPTIONS["team_id"],
    key_id: str = _SHARED_OPTIONS["key_id"],
    key_file: Path = _SHARED_OPTIONS["key_file"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """Describe the place at a latitude and longitude."""

    location = LocationCoordinates(
        _coordinate(latitude, "--latitude"),
        _coordinate(longitude, "--longitude"),
    )
    token = MapsToken(_load_credentials(app_id, team_id, key_id, key_file))
    request = ReverseGeocodeAddress(location=location, language=language)
    results = _run(token, request, timeout=timeout, verify_ssl=verify_ssl, verbose=verbose)
    _present_output(_place_rows(results), view_id="places", json_output=output_json)


@app.command("weather")
def weather(
    latitude: str = typer.Option(..., "--latitude", help="Latitude of the location."),
    longitude: str = typer.Option(..., "--longitude", help="Longitude of the location."),
    language: str = typer.Option("en", "--language", help="Language to request details in."),
    tz_name: str = typer.Option(
        "America/New_York", "--timezone", help="Time zone for dates and times."
    ),
    country: str = typer.Option("US", "--country", help="Country code used for weather alerts."),
    days: int = typer.Option(7, "--days", min=1, help="Days to include in the daily forecast."),
    hours: int = typer.Option(24, "--hours", min=1, help="Hours to include in the hourly forecast."),
    app_id: str = _SHARED_OPTIONS["app_id"],
    team_id: str = _SHARED_OPTIONS["team_id"],
    key_id: str = _SHARED_OPTIONS["key_id"],
    key_file: Path = _SHARED_OPTIONS["key_file"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Print every weather data set for a location as JSON."""

    location = LocationCoordinates(
        _coordinate(latitude, "--latitude"),
        _coordinate(longitude, "--longitude"),
    )
    token = WeatherToken(_load_credentials(app_id, team_id, key_id, key_file))
    now = datetime.now(timezone.utc)
    request = WeatherQuery(
        language=language,
        location=location,
        timezone=tz_name,
        country_code=country,
        current_as_of=now,
        daily_start=now,
        daily_end=now + timedelta(days=days),
        hourly_start=now,
        hourly_end=now + timedelta(hours=hours),
        data_sets=ALL_WEATHER_DATA_SETS,
    )
    _echo_json(_run(token, request, timeout=timeout, verify_ssl=verify_ssl, verbose=verbose))


@app.command("song-search")
def song_search(
    query: str = typer.Option(..., "--query", "-q", help="What to search for."),
    storefront: str = typer.Option("us", "--storefront", help="Storefront to search in."),
    language: str = typer.Option("en", "--language", help="Language of the search results."),
    limit: int | None = typer.Option(None, "--limit", min=1, help="Maximum number of songs."),
    app_id: str = _SHARED_OPTIONS["app_id"],
    team_id: str = _SHARED_OPTIONS["team_id"],
    key_id: str = _SHARED_OPTIONS["key_id"],
    key_file: Path = _SHARED_OPTIONS["key_file"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """Search the music catalog for songs."""

    token = MusicDeveloperToken(_load_credentials(app_id, team_id, key_id, key_file))
    request = SearchMusicCatalog(
        storefront=storefront,
        types=(MusicCatalogType.SONGS,),
        term=query,
        language=language,
        limit=limit,
    )
    payload = _run(token, request, timeout=timeout, verify_ssl=verify_ssl, verbose=verbose)
    if output_json:
        _echo_json(payload)
        return
    songs = payload.get("results", {}).get("songs", {}).get("data", [])
    _present_output(
        [song for song in songs if isinstance(song, Mapping)],
        view_id="songs",
        json_output=False,
    )


@app.command("music-token")
def music_token(
    app_id: str = _SHARED_OPTIONS["app_id"],
    team_id: str = _SHARED_OPTIONS["team_id"],
    key_id: str = _SHARED_OPTIONS["key_id"],
    key_file: Path = _SHARED_OPTIONS["key_file"],
) -> None:
    """Print a developer token for the music catalog service."""

    token = MusicDeveloperToken(_load_credentials(app_id, team_id, key_id, key_file))
    try:
        # Developer tokens are signed locally; no transport is needed.
        token.refresh(_no_network)
    except FruitError as exc:
        _handle_error(exc)
    typer.echo(token.bearer_token)


def _no_network(request: Any) -> Any:  # pragma: no cover - never called
    raise AuthorityError(f"Unexpected network access to {request.url}")
