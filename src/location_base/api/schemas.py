from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from location_base.data.models import LocationRecord


class LocationOut(BaseModel):
    """One stored location."""
    id: int
    latitude: float
    longitude: float

    @classmethod
    def from_record(cls, record: LocationRecord) -> "LocationOut":
        return cls(id=record.id, latitude=record.latitude, longitude=record.longitude)


class LocationItem(LocationOut):
    """A location as rendered in the screen's list."""
    title: str = Field(..., description="List item title, e.g. 'Localização 3'.")
    description: str = Field(..., description="Latitude/longitude line shown under the title.")

    @classmethod
    def from_record(cls, record: LocationRecord) -> "LocationItem":
        return cls(
            id=record.id,
            latitude=record.latitude,
            longitude=record.longitude,
            title=f"Localização {record.id}",
            description=f"Latitude: {record.latitude} | Longitude: {record.longitude}",
        )


class AlertOut(BaseModel):
    title: str
    message: str


class ThemeOut(BaseModel):
    """Active theme and its palette."""
    dark_mode: bool
    colors: Dict[str, str]


class ScreenOut(BaseModel):
    """Everything the single screen renders."""
    title: str
    theme: ThemeOut
    is_loading: bool
    locations: List[LocationItem] = Field(default_factory=list)
    alert: Optional[AlertOut] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "My Location BASE",
                "theme": {"dark_mode": False, "colors": {"background": "rgb(250, 253, 253)"}},
                "is_loading": False,
                "locations": [
                    {
                        "id": 1,
                        "latitude": 10.5,
                        "longitude": -20.25,
                        "title": "Localização 1",
                        "description": "Latitude: 10.5 | Longitude: -20.25",
                    }
                ],
                "alert": None,
            }
        }
    )


class CaptureOut(BaseModel):
    """Response of a successful capture."""
    location: LocationOut
    total: int
