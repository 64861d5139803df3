"""Concurrently fetch the slots for every available date at a location.

One task is started per date. By default all of them run at once; with
`max_in_flight` set, at most that many requests are outstanding and the rest
wait their turn. A task that fails logs the failure and returns nothing, so a
bad date never takes down its siblings. Results come back as the return values
of the tasks and are only collected by `SlotFanOut.fetch_all` once every task
has finished.

When `cancel_on_http_error` is set, the first non-success status raises a
shared flag. A task checks the flag when it gets its turn to send: tasks that
already sent their request are not interrupted, so this is advisory. Without
`max_in_flight` every task gets its turn before any response arrives, so the
flag only takes effect with a bounded number of requests in flight.
"""
import asyncio
from typing import Iterable, List, Optional

import aiohttp

from ..apis.common import encode_body, parse_model, request_json
from ..config import BookingConfig
from ..errors import HTTPStatusError, IngestError
from ..schema.booking import AvailableDate, Location, SlotRecord, SlotRequest
from ..utils.log import getLogger

logger = getLogger(__file__)


class SlotFanOut:
    """Fetches slots for many dates of one location in parallel"""

    def __init__(self, session: aiohttp.ClientSession, config: BookingConfig):
        self.session = session
        self.config = config

    def build_request(self) -> SlotRequest:
        return SlotRequest(
            vaccine_data=self.config.vaccine_data,
            group_size=self.config.group_size,
            url=self.config.booking_url,
            time_zone=self.config.time_zone,
        )

    async def fetch_one(self, location: Location, date: str) -> SlotRecord:
        """Fetch slots for a single date, raising IngestError on failure.

        The record is keyed by the requested date, whatever date the response
        body carries.
        """
        url = self.config.slots_url(location.ext_id, date)

        data = await request_json(
            self.session,
            "POST",
            url,
            body=encode_body(self.build_request()),
            headers=self.config.headers(),
        )

        record = parse_model(SlotRecord, data, url)

        if record.date is not None and record.date != date:
            logger.warning(
                "Slots response for %s on %s says it is for %s",
                location.ext_id,
                date,
                record.date,
            )

        return record.model_copy(update={"date": date})

    async def _fetch_task(
        self,
        location: Location,
        date: str,
        cancelled: asyncio.Event,
        in_flight: Optional[asyncio.Semaphore] = None,
    ) -> Optional[SlotRecord]:
        if in_flight is None:
            return await self._fetch_date(location, date, cancelled)

        async with in_flight:
            return await self._fetch_date(location, date, cancelled)

    async def _fetch_date(
        self,
        location: Location,
        date: str,
        cancelled: asyncio.Event,
    ) -> Optional[SlotRecord]:
        if cancelled.is_set():
            logger.debug(
                "Skipping slots for %s on %s after an earlier failure",
                location.ext_id,
                date,
            )
            return None

        try:
            record = await self.fetch_one(location, date)
        except HTTPStatusError as e:
            if self.config.cancel_on_http_error:
                cancelled.set()
            logger.error(
                "Failed to fetch slots for %s on %s: %s %s",
                location.ext_id,
                date,
                e,
                e.body,
            )
            return None
        except IngestError as e:
            logger.error(
                "Failed to fetch slots for %s on %s: %s", location.ext_id, date, e
            )
            return None

        return record

    async def fetch_all(
        self, location: Location, dates: Iterable[AvailableDate]
    ) -> List[SlotRecord]:
        """Fetch slots for all dates, returning the records that succeeded"""
        cancelled = asyncio.Event()

        in_flight = None
        if self.config.max_in_flight:
            in_flight = asyncio.Semaphore(self.config.max_in_flight)

        tasks = [
            self._fetch_task(location, available_date.date, cancelled, in_flight)
            for available_date in dates
        ]

        if not tasks:
            return []

        results = await asyncio.gather(*tasks)

        records = [record for record in results if record is not None]

        logger.info(
            "Fetched slots for %d of %d dates at %s",
            len(records),
            len(tasks),
            location.ext_id,
        )

        return records
