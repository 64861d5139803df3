"""Records exchanged with the location list and the booking api"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


class WireModel(BaseModel):
    """Base for models that are read from and written to camelCase json"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LatLng(WireModel):
    """
    {
        "lat": float,
        "lng": float,
    }
    """

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Location(WireModel):
    """
    {
        "vaccineData": str,
        "type": str,
        "location": {"lat": float, "lng": float},
        "extId": str,
        "regionExternalId": str,
        "displayAddress": str,
    }
    """

    model_config = ConfigDict(frozen=True)

    ext_id: str = Field(alias="extId")
    location: LatLng
    vaccine_data: Optional[str] = Field(default=None, alias="vaccineData")
    type: Optional[str] = None
    region_external_id: Optional[str] = Field(default=None, alias="regionExternalId")
    display_address: str = Field(default="", alias="displayAddress")


class AvailableDate(WireModel):
    date: str
    available: StrictBool = False
    vaccine_data: Optional[str] = Field(default=None, alias="vaccineData")


class LocationAvailability(WireModel):
    location_ext_id: Optional[str] = Field(default=None, alias="locationExtId")
    vaccine_data: Optional[str] = Field(default=None, alias="vaccineData")
    availability: List[AvailableDate] = Field(default_factory=list)

    @field_validator("availability", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class TimeSlot(WireModel):
    local_start_time: str = Field(alias="localStartTime")
    duration_seconds: int = Field(alias="durationSeconds")


class SlotRecord(WireModel):
    """Slots for one location on one date"""

    location_ext_id: Optional[str] = Field(default=None, alias="locationExtId")
    date: Optional[str] = None
    slots: List[TimeSlot] = Field(default_factory=list, alias="slotsWithAvailability")

    @field_validator("slots", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class AvailabilityRequest(WireModel):
    end_date: str = Field(alias="endDate")
    start_date: str = Field(alias="startDate")
    vaccine_data: str = Field(alias="vaccineData")
    group_size: int = Field(alias="groupSize")
    dose_number: int = Field(alias="doseNumber")
    url: str
    time_zone: str = Field(alias="timeZone")


class SlotRequest(WireModel):
    vaccine_data: str = Field(alias="vaccineData")
    group_size: int = Field(alias="groupSize")
    url: str
    time_zone: str = Field(alias="timeZone")


# Output document for a single location: date -> slots on that date
DateSlotMap = Dict[str, List[TimeSlot]]
