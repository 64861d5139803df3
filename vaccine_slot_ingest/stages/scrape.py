"""Code for running a scrape of every location"""

import pathlib
from typing import Collection, List, NamedTuple, Optional

import aiohttp

from ..apis.availability import AvailabilityAPI
from ..apis.locations import fetch_locations
from ..config import BookingConfig
from ..errors import IngestError
from ..schema.booking import Location
from ..utils.log import getLogger
from . import aggregate, outputs
from .fanout import SlotFanOut

logger = getLogger(__file__)


class LocationResult(NamedTuple):
    ext_id: str
    available_dates: int = 0
    dates_with_slots: int = 0
    output_path: Optional[pathlib.Path] = None
    error: Optional[str] = None


class RunSummary(NamedTuple):
    locations: int
    succeeded: int
    failed: int
    written: int


async def process_location(
    location: Location,
    availability_api: AvailabilityAPI,
    slot_fanout: SlotFanOut,
    output_dir: pathlib.Path,
    dry_run: bool = False,
) -> LocationResult:
    """Fetch available dates and slots for a location and write them out"""
    try:
        available_dates = await availability_api.fetch_availability(location)
    except IngestError as e:
        logger.error(
            "Skipping location %s because availability lookup failed: %s",
            location.ext_id,
            e,
        )
        return LocationResult(location.ext_id, error=str(e))

    records = await slot_fanout.fetch_all(location, available_dates)
    slot_map = aggregate.combine_slots(records)

    if dry_run:
        logger.info(
            "Dry run, not writing %d dates for %s", len(slot_map), location.ext_id
        )
        return LocationResult(location.ext_id, len(available_dates), len(slot_map))

    try:
        dst_filepath = outputs.generate_output_path(output_dir, location.ext_id)
        outputs.write_slot_map(dst_filepath, slot_map)
    except (OSError, ValueError) as e:
        logger.error("Failed to write slots for %s: %s", location.ext_id, e)
        return LocationResult(
            location.ext_id, len(available_dates), len(slot_map), error=str(e)
        )

    logger.info(
        "Wrote %d dates for %s to %s", len(slot_map), location.ext_id, dst_filepath
    )

    return LocationResult(
        location.ext_id, len(available_dates), len(slot_map), dst_filepath
    )


def select_locations(
    locations: List[Location], ext_ids: Optional[Collection[str]] = None
) -> List[Location]:
    """Restrict locations to ext_ids when any are passed"""
    if not ext_ids:
        return locations

    selected = [loc for loc in locations if loc.ext_id in ext_ids]

    missing = set(ext_ids) - {loc.ext_id for loc in selected}
    if missing:
        logger.warning("No locations found for ids: %s", ", ".join(sorted(missing)))

    return selected


async def run_scrape(
    config: BookingConfig,
    output_dir: pathlib.Path,
    ext_ids: Optional[Collection[str]] = None,
    dry_run: bool = False,
) -> RunSummary:
    """Scrape slots for every location, one location at a time.

    Failing to load the location list aborts the run. Failures for a single
    location are logged and the run moves on to the next one.
    """
    timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async with aiohttp.ClientSession(timeout=timeout) as session:
        locations = await fetch_locations(
            session, config.locations_url, headers=config.headers()
        )
        locations = select_locations(locations, ext_ids)

        availability_api = AvailabilityAPI(session, config)
        slot_fanout = SlotFanOut(session, config)

        results = []
        for location in locations:
            result = await process_location(
                location, availability_api, slot_fanout, output_dir, dry_run=dry_run
            )
            results.append(result)

    summary = RunSummary(
        locations=len(results),
        succeeded=sum(1 for result in results if result.error is None),
        failed=sum(1 for result in results if result.error is not None),
        written=sum(1 for result in results if result.output_path is not None),
    )

    logger.info(
        "Processed %d locations: %d succeeded, %d failed, %d files written",
        summary.locations,
        summary.succeeded,
        summary.failed,
        summary.written,
    )

    return summary
