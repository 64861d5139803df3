from typing import Dict, List, Tuple

import pytest
import pytest_asyncio
from aiohttp import test_utils, web

from vaccine_slot_ingest.config import BookingConfig
from vaccine_slot_ingest.schema.booking import LatLng, Location

LOCATIONS_PATH = "/uniqLocations.json"


class FakeBookingAPI:
    """In-process stand in for the location list and booking api.

    Tests fill in the canned responses, then point a BookingConfig at
    `server`. Every request received is recorded in `requests`.
    """

    def __init__(self):
        self.locations: object = []
        self.locations_status = 200
        # ext_id -> (status, json body)
        self.availability: Dict[str, Tuple[int, object]] = {}
        # (ext_id, date) -> (status, json body)
        self.slots: Dict[Tuple[str, str], Tuple[int, object]] = {}
        self.requests: List[dict] = []

        self.app = web.Application()
        self.app.router.add_get(LOCATIONS_PATH, self._handle_locations)
        self.app.router.add_post(
            "/public/locations/{ext_id}/availability", self._handle_availability
        )
        self.app.router.add_post(
            "/public/locations/{ext_id}/date/{date}/slots", self._handle_slots
        )

    async def _record(self, request: web.Request) -> None:
        body = await request.json() if request.can_read_body else None
        self.requests.append(
            {
                "method": request.method,
                "path": request.path,
                "headers": dict(request.headers),
                "body": body,
            }
        )

    async def _handle_locations(self, request: web.Request) -> web.Response:
        await self._record(request)
        if isinstance(self.locations, str):
            return web.Response(text=self.locations, status=self.locations_status)
        return web.json_response(self.locations, status=self.locations_status)

    async def _handle_availability(self, request: web.Request) -> web.Response:
        await self._record(request)
        ext_id = request.match_info["ext_id"]
        status, body = self.availability.get(ext_id, (404, {"error": "not found"}))
        if isinstance(body, str):
            return web.Response(text=body, status=status)
        return web.json_response(body, status=status)

    async def _handle_slots(self, request: web.Request) -> web.Response:
        await self._record(request)
        key = (request.match_info["ext_id"], request.match_info["date"])
        status, body = self.slots.get(key, (404, {"error": "not found"}))
        if isinstance(body, str):
            return web.Response(text=body, status=status)
        return web.json_response(body, status=status)

    def add_available_dates(self, ext_id: str, dates: Dict[str, bool]) -> None:
        self.availability[ext_id] = (
            200,
            {
                "locationExtId": ext_id,
                "vaccineData": "token",
                "availability": [
                    {"date": date, "available": available, "vaccineData": "token"}
                    for date, available in dates.items()
                ],
            },
        )

    def add_slots(self, ext_id: str, date: str, slots: List[dict]) -> None:
        self.slots[(ext_id, date)] = (
            200,
            {"locationExtId": ext_id, "date": date, "slotsWithAvailability": slots},
        )

    def requests_to(self, suffix: str) -> List[dict]:
        return [req for req in self.requests if req["path"].endswith(suffix)]


@pytest_asyncio.fixture
async def booking_api():
    fake = FakeBookingAPI()
    server = test_utils.TestServer(fake.app)
    await server.start_server()
    fake.server = server
    yield fake
    await server.close()


@pytest.fixture
def booking_config(booking_api):
    base_url = str(booking_api.server.make_url("/")).rstrip("/")
    return BookingConfig(
        locations_url=f"{base_url}{LOCATIONS_PATH}",
        api_base_url=base_url,
        request_timeout=5.0,
    )


@pytest.fixture
def location_abc():
    return Location(
        ext_id="abc",
        location=LatLng(lat=-36.8485, lng=174.7633),
        vaccine_data="WyJhMVQ0YTAwMDAwMEdiVGdFQUsiXQ==",
        type="Location",
        region_external_id="region-1",
        display_address="1 Queen Street, Auckland",
    )


@pytest.fixture
def location_list_json():
    return [
        {
            "vaccineData": "WyJhMVQ0YTAwMDAwMEdiVGdFQUsiXQ==",
            "type": "Location",
            "location": {"lat": -36.8485, "lng": 174.7633},
            "extId": "abc",
            "regionExternalId": "region-1",
            "displayAddress": "1 Queen Street, Auckland",
        },
        {
            "vaccineData": "WyJhMVQ0YTAwMDAwMEdiVGdFQUsiXQ==",
            "type": "Location",
            "location": {"lat": -41.2865, "lng": 174.7762},
            "extId": "def",
            "regionExternalId": "region-2",
            "displayAddress": "2 Lambton Quay, Wellington",
        },
    ]
