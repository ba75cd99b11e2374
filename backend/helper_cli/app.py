"""Command line interface for the media helper service."""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

import typer
import uvicorn
from pydantic import ValidationError

from backend.helper_api.app import create_app
from backend.helper_api.db import sqlite_url
from backend.helper_api.settings import HelperSettings
from backend.helper_api.stores.catalog_store import SchemaError

from .client import create_client


DEFAULT_API_BASE = "http://localhost:8053"
AUTH_ENVVAR = "MEDIAHELPER_AUTHORIZATION_VALUE"

app = typer.Typer(help="Run and query the popular media helper for autobrr.")
catalog_app = typer.Typer(help="Inspect the popular media catalog.")
app.add_typer(catalog_app, name="catalog")

MEDIA_TYPE_CHOICES = {"movie", "tv"}


def _api_base_option() -> typer.Option:
    return typer.Option(
        DEFAULT_API_BASE,
        "--api-base",
        help="Base URL for the media helper service.",
        show_default=True,
        envvar="MEDIAHELPER_API_BASE",
    )


def _auth_option() -> typer.Option:
    return typer.Option(
        None,
        "--auth",
        help='Value sent in the "Authorization" header.',
        envvar=AUTH_ENVVAR,
    )


def _auth_headers(auth: Optional[str]) -> dict[str, str]:
    return {"Authorization": auth} if auth else {}


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def serve(
    db: Optional[str] = typer.Option(None, "--db", help="Database file name or SQLAlchemy URL."),
    scrape_interval: Optional[str] = typer.Option(
        None, "--scrape-interval", help="Interval to scrape popular media, e.g. 24h or 30m."
    ),
    port: Optional[int] = typer.Option(None, "--port", help="Port to run the webserver on."),
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind the webserver to."),
    auth: Optional[str] = _auth_option(),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
) -> None:
    """Start the webserver and the popular media refresh loop."""

    overrides: dict[str, Any] = {}
    if db is not None:
        overrides["database_url"] = sqlite_url(db)
    if scrape_interval is not None:
        overrides["scrape_interval"] = scrape_interval
    if port is not None:
        overrides["port"] = port
    if host is not None:
        overrides["host"] = host
    if auth is not None:
        overrides["authorization_value"] = auth
    if log_level is not None:
        overrides["log_level"] = log_level

    try:
        settings = HelperSettings(**overrides)
    except ValidationError as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        application = create_app(settings)
    except SchemaError as exc:
        logging.getLogger(__name__).error("failed to initialize media catalog error=%s", exc)
        raise typer.Exit(code=1) from exc

    uvicorn.run(application, host=settings.host, port=settings.port, log_config=None)


@app.command()
def health(api_base: str = _api_base_option()) -> None:
    """Call the /health endpoint and pretty-print the response."""

    with create_client(api_base) as client:
        response = client.get("/health")
        response.raise_for_status()
        _echo_json(response.json())


@app.command()
def check(
    title: str = typer.Option(..., "--title", help="Title of the announced release."),
    year: int = typer.Option(..., "--year", help="Release year of the announced release."),
    auth: Optional[str] = _auth_option(),
    api_base: str = _api_base_option(),
) -> None:
    """Ask the service whether a title should be downloaded.

    Exits with code 0 when the download is approved and 1 otherwise.
    """

    with create_client(api_base) as client:
        response = client.post(
            "/media-check",
            json={"Title": title, "Year": year},
            headers=_auth_headers(auth),
        )
    typer.echo(f"{response.status_code} {response.text}")
    if response.status_code != 200:
        raise typer.Exit(code=1)


@catalog_app.command("list")
def list_catalog(
    media_type: Optional[str] = typer.Option(
        None, "--type", help="Only show movies or tv shows (movie|tv)."
    ),
    auth: Optional[str] = _auth_option(),
    api_base: str = _api_base_option(),
) -> None:
    """Display the media currently considered popular."""

    params: dict[str, str] = {}
    if media_type is not None:
        normalized = media_type.lower()
        if normalized not in MEDIA_TYPE_CHOICES:
            typer.echo(
                f"Invalid media type '{media_type}'. Choose from: movie, tv",
                err=True,
            )
            raise typer.Exit(code=1)
        params["media_type"] = normalized

    with create_client(api_base) as client:
        response = client.get("/catalog", params=params, headers=_auth_headers(auth))
        response.raise_for_status()
        _echo_json(response.json())


@catalog_app.command("metrics")
def catalog_metrics(
    auth: Optional[str] = _auth_option(),
    api_base: str = _api_base_option(),
) -> None:
    """Display aggregate catalog statistics."""

    with create_client(api_base) as client:
        response = client.get("/catalog/metrics", headers=_auth_headers(auth))
        response.raise_for_status()
        _echo_json(response.json())
