from vaccine_slot_ingest.config import BookingConfig
from vaccine_slot_ingest.errors import HTTPStatusError


def test_headers():
    config = BookingConfig(user_agent="agent/1.0")

    assert config.headers() == {
        "Accept": "application/JSON",
        "Content-Type": "application/json",
        "User-Agent": "agent/1.0",
    }


def test_endpoint_urls():
    config = BookingConfig(api_base_url="https://booking.example.org/")

    assert (
        config.availability_url("abc")
        == "https://booking.example.org/public/locations/abc/availability"
    )
    assert (
        config.slots_url("abc", "2024-03-01")
        == "https://booking.example.org/public/locations/abc/date/2024-03-01/slots"
    )


def test_defaults():
    config = BookingConfig()

    assert config.group_size == 1
    assert config.dose_number == 1
    assert config.time_zone == "Pacific/Auckland"
    assert config.window_months == 2
    assert not config.cancel_on_http_error


def test_http_status_error_str():
    error = HTTPStatusError(502, "https://booking.example.org/x")

    assert error.status == 502
    assert str(error) == "Unexpected HTTP status 502 (https://booking.example.org/x)"
