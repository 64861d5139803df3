"""Settings shared by the booking api clients"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

LOCATIONS_URL = (
    "https://raw.githubusercontent.com/CovidEngine/vaxxnzlocations/main/uniqLocations.json"
)
API_BASE_URL = "https://skl-api.bookmyvaccine.covid19.health.nz"
BOOKING_URL = "https://app.bookmyvaccine.covid19.health.nz/appointment-select"

# Product token the booking site sends for a first dose of Pfizer
VACCINE_DATA = "WyJhMVQ0YTAwMDAwMEdiVGdFQUsiXQ=="

TIME_ZONE = "Pacific/Auckland"

# The booking api rejects requests without a browser-ish user agent
USER_AGENT = "node-fetch/1.0 (+https://github.com/bitinn/node-fetch)"

REQUEST_TIMEOUT_SECS = 30.0


class BookingConfig(BaseModel):
    """Static request values for the location list and booking api"""

    model_config = ConfigDict(frozen=True)

    locations_url: str = LOCATIONS_URL
    api_base_url: str = API_BASE_URL
    vaccine_data: str = VACCINE_DATA
    group_size: int = 1
    dose_number: int = 1
    booking_url: str = BOOKING_URL
    time_zone: str = TIME_ZONE
    user_agent: str = USER_AGENT
    window_months: int = 2
    request_timeout: float = REQUEST_TIMEOUT_SECS
    # Unbounded when None: every date is requested at once
    max_in_flight: Optional[int] = None
    cancel_on_http_error: bool = False

    def headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/JSON",
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }

    def location_url(self, ext_id: str) -> str:
        return f"{self.api_base_url.rstrip('/')}/public/locations/{ext_id}"

    def availability_url(self, ext_id: str) -> str:
        return f"{self.location_url(ext_id)}/availability"

    def slots_url(self, ext_id: str, date: str) -> str:
        return f"{self.location_url(ext_id)}/date/{date}/slots"
