# backend/app/schemas/records.py
from pydantic import BaseModel, ConfigDict

# --- Pydantic models for data built from provider responses ---
# Frozen value structs: transformers build them, the gateway stores them.

class LocationData(BaseModel):
    model_config = ConfigDict(frozen=True)

    created_at: int # Epoch milliseconds
    latitude: float
    longitude: float
    search_query: str
    formatted_query: str | None = None


class RecordData(BaseModel):
    """Fields every batch record carries."""
    model_config = ConfigDict(frozen=True)

    created_at: int # Cache timestamp of the batch, epoch milliseconds
    location_id: int


class WeatherRecordData(RecordData):
    forecast: str | None = None
    time: str | None = None


class EventRecordData(RecordData):
    link: str | None = None
    name: str | None = None
    event_date: str | None = None
    summary: str | None = None


class MovieRecordData(RecordData):
    title: str | None = None
    overview: str | None = None
    average_votes: float | None = None
    total_votes: int | None = None
    image_url: str | None = None
    popularity: float | None = None
    released_on: str | None = None


class BusinessRecordData(RecordData):
    name: str | None = None
    image_url: str | None = None
    price: str | None = None
    rating: float | None = None
    url: str | None = None


# --- Response models (read straight off the ORM rows) ---

class LocationOut(LocationData):
    model_config = ConfigDict(from_attributes=True)

    id: int


class WeatherRecordOut(WeatherRecordData):
    model_config = ConfigDict(from_attributes=True)

    id: int


class EventRecordOut(EventRecordData):
    model_config = ConfigDict(from_attributes=True)

    id: int


class MovieRecordOut(MovieRecordData):
    model_config = ConfigDict(from_attributes=True)

    id: int


class BusinessRecordOut(BusinessRecordData):
    model_config = ConfigDict(from_attributes=True)

    id: int
