"""Client for the public list of vaccination locations"""
from typing import List, Mapping, Optional

import aiohttp
import pydantic

from ..errors import DecodeError
from ..schema.booking import Location
from ..utils.log import getLogger
from .common import request_json

logger = getLogger(__file__)

_LOCATION_LIST = pydantic.TypeAdapter(List[Location])


async def fetch_locations(
    session: aiohttp.ClientSession,
    url: str,
    headers: Optional[Mapping[str, str]] = None,
) -> List[Location]:
    """Fetch and decode the master location list.

    Any failure here is fatal to a run, so errors are not caught.
    """
    logger.info("Fetching location list from %s", url)

    data = await request_json(session, "GET", url, headers=headers)

    try:
        locations = _LOCATION_LIST.validate_python(data)
    except pydantic.ValidationError as e:
        raise DecodeError(f"Unexpected location list shape: {e}", url) from e

    logger.info("Found %d locations", len(locations))
    return locations
