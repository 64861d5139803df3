#!/usr/bin/env python

"""
Entry point for scraping vaccination slots
"""
import asyncio
import os
import pathlib
from typing import Callable, Optional, Sequence

import aiohttp
import click
import dotenv

from . import config as booking_config
from .apis import locations as locations_api
from .stages import scrape

VERSION = "0.1.0"


def _env_flag(name: str, default: str) -> Callable[[], bool]:
    return lambda: os.environ.get(name, default).lower() == "true"


# --- Common Click options --- #


def _output_dir_option() -> Callable:
    return click.option(
        "--output-dir",
        "output_dir",
        type=click.Path(file_okay=False, path_type=pathlib.Path),
        default=lambda: os.environ.get("OUTPUT_DIR", "slots"),
    )


def _dry_run_option() -> Callable:
    return click.option("--dry-run/--no-dry-run", type=bool, default=False)


def _ext_ids_argument() -> Callable:
    return click.argument("ext_ids", nargs=-1, type=str)


def _locations_url_option() -> Callable:
    return click.option(
        "--locations-url",
        "locations_url",
        type=str,
        default=lambda: os.environ.get("LOCATIONS_URL", booking_config.LOCATIONS_URL),
    )


def _api_base_url_option() -> Callable:
    return click.option(
        "--api-base-url",
        "api_base_url",
        type=str,
        default=lambda: os.environ.get(
            "BOOKING_API_BASE_URL", booking_config.API_BASE_URL
        ),
    )


def _vaccine_data_option() -> Callable:
    return click.option(
        "--vaccine-data",
        "vaccine_data",
        type=str,
        default=lambda: os.environ.get("VACCINE_DATA", booking_config.VACCINE_DATA),
    )


def _booking_url_option() -> Callable:
    return click.option(
        "--booking-url",
        "booking_url",
        type=str,
        default=lambda: os.environ.get("BOOKING_URL", booking_config.BOOKING_URL),
    )


def _time_zone_option() -> Callable:
    return click.option(
        "--time-zone",
        "time_zone",
        type=str,
        default=lambda: os.environ.get("BOOKING_TIME_ZONE", booking_config.TIME_ZONE),
    )


def _user_agent_option() -> Callable:
    return click.option(
        "--user-agent",
        "user_agent",
        type=str,
        default=lambda: os.environ.get("BOOKING_USER_AGENT", booking_config.USER_AGENT),
    )


def _request_timeout_option() -> Callable:
    return click.option(
        "--request-timeout",
        "request_timeout",
        type=float,
        default=lambda: os.environ.get(
            "REQUEST_TIMEOUT", booking_config.REQUEST_TIMEOUT_SECS
        ),
        help="Seconds to wait for each http call",
    )


def _cancel_on_http_error_option() -> Callable:
    return click.option(
        "--cancel-on-http-error/--no-cancel-on-http-error",
        "cancel_on_http_error",
        type=bool,
        default=_env_flag("CANCEL_ON_HTTP_ERROR", "false"),
        help="Skip slot lookups for a location that are still waiting for "
        "--max-in-flight once one of them gets an http error. Lookups already "
        "sent still finish.",
    )


def _max_in_flight_option() -> Callable:
    return click.option(
        "--max-in-flight",
        "max_in_flight",
        type=click.IntRange(min=1),
        default=lambda: os.environ.get("MAX_IN_FLIGHT"),
        help="Most slot lookups to have outstanding per location. Unbounded "
        "when not set.",
    )


@click.group()
def cli():
    """Run vaccine-slot-ingest commands"""
    dotenv.load_dotenv()


@cli.command()
@_ext_ids_argument()
@_output_dir_option()
@_dry_run_option()
@_locations_url_option()
@_api_base_url_option()
@_vaccine_data_option()
@_booking_url_option()
@_time_zone_option()
@_user_agent_option()
@_request_timeout_option()
@_cancel_on_http_error_option()
@_max_in_flight_option()
def run(
    ext_ids: Optional[Sequence[str]],
    output_dir: pathlib.Path,
    dry_run: bool,
    locations_url: str,
    api_base_url: str,
    vaccine_data: str,
    booking_url: str,
    time_zone: str,
    user_agent: str,
    request_timeout: float,
    cancel_on_http_error: bool,
    max_in_flight: Optional[int],
) -> None:
    """Scrape slots for all locations, or only the passed location ids."""
    if cancel_on_http_error and not max_in_flight:
        raise Exception("Must pass --max-in-flight to use --cancel-on-http-error")

    config = booking_config.BookingConfig(
        locations_url=locations_url,
        api_base_url=api_base_url,
        vaccine_data=vaccine_data,
        booking_url=booking_url,
        time_zone=time_zone,
        user_agent=user_agent,
        request_timeout=request_timeout,
        cancel_on_http_error=cancel_on_http_error,
        max_in_flight=max_in_flight,
    )

    summary = asyncio.run(
        scrape.run_scrape(config, output_dir, ext_ids=ext_ids, dry_run=dry_run)
    )

    click.echo(
        f"{summary.succeeded}/{summary.locations} locations scraped, "
        f"{summary.written} files written to {output_dir}"
    )


@cli.command()
@_locations_url_option()
@_user_agent_option()
def locations(locations_url: str, user_agent: str) -> None:
    """Print the id and address of every location in the location list"""
    config = booking_config.BookingConfig(
        locations_url=locations_url, user_agent=user_agent
    )

    async def _fetch():
        async with aiohttp.ClientSession() as session:
            return await locations_api.fetch_locations(
                session, config.locations_url, headers=config.headers()
            )

    for loc in asyncio.run(_fetch()):
        click.echo(f"{loc.ext_id} {loc.display_address}")


@cli.command()
def version() -> None:
    """Get the library version."""
    click.echo(click.style(VERSION, bold=True))


if __name__ == "__main__":
    cli()
