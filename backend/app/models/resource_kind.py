# backend/app/models/resource_kind.py
import enum

from backend.app.models.business_record import BusinessRecord
from backend.app.models.event_record import EventRecord
from backend.app.models.movie_record import MovieRecord
from backend.app.models.weather_record import WeatherRecord


class ResourceKind(str, enum.Enum):
    """Batch-cached resources, valued by their table name."""
    WEATHER = "weathers"
    EVENTS = "events"
    MOVIES = "movies"
    BUSINESSES = "yelps"


# Fixed mapping used for every query, so table names never come from input
RECORD_MODELS = {
    ResourceKind.WEATHER: WeatherRecord,
    ResourceKind.EVENTS: EventRecord,
    ResourceKind.MOVIES: MovieRecord,
    ResourceKind.BUSINESSES: BusinessRecord,
}
