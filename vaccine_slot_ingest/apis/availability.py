"""Client for the per location availability endpoint"""
import datetime
from typing import Iterable, List, Optional

import aiohttp

from ..config import BookingConfig
from ..schema.booking import (
    AvailabilityRequest,
    AvailableDate,
    Location,
    LocationAvailability,
)
from ..utils.dates import availability_window
from ..utils.log import getLogger
from .common import encode_body, parse_model, request_json

logger = getLogger(__file__)


def filter_available(dates: Iterable[AvailableDate]) -> List[AvailableDate]:
    """Keep only dates marked available, preserving order"""
    return [date for date in dates if date.available]


class AvailabilityAPI:
    """Looks up which dates have open appointments at a location"""

    def __init__(self, session: aiohttp.ClientSession, config: BookingConfig):
        self.session = session
        self.config = config

    def build_request(
        self, today: Optional[datetime.date] = None
    ) -> AvailabilityRequest:
        start_date, end_date = availability_window(self.config.window_months, today)

        return AvailabilityRequest(
            start_date=start_date,
            end_date=end_date,
            vaccine_data=self.config.vaccine_data,
            group_size=self.config.group_size,
            dose_number=self.config.dose_number,
            url=self.config.booking_url,
            time_zone=self.config.time_zone,
        )

    async def fetch_location_availability(
        self, location: Location, today: Optional[datetime.date] = None
    ) -> LocationAvailability:
        url = self.config.availability_url(location.ext_id)
        body = encode_body(self.build_request(today))

        data = await request_json(
            self.session, "POST", url, body=body, headers=self.config.headers()
        )

        return parse_model(LocationAvailability, data, url)

    async def fetch_availability(
        self, location: Location, today: Optional[datetime.date] = None
    ) -> List[AvailableDate]:
        """Return the available dates for a location in the booking window"""
        location_availability = await self.fetch_location_availability(
            location, today
        )

        available = filter_available(location_availability.availability)

        logger.info(
            "Location %s has %d of %d dates available",
            location.ext_id,
            len(available),
            len(location_availability.availability),
        )

        return available
