# backend/app/services/transformers.py
"""
Pure mappings from one provider item to the value struct we store.

No I/O happens here. Missing provider fields become None rather than
errors; type coercion (votes, ratings, epochs) is left to the pydantic
models, which raise ValidationError for values that cannot be coerced.
"""
from datetime import datetime

import pytz
from pydantic import ValidationError

from backend.app.core import config
from backend.app.core.exceptions import ProviderResponseError
from backend.app.schemas.records import (
    LocationData,
    WeatherRecordData,
    EventRecordData,
    MovieRecordData,
    BusinessRecordData,
)

# Calendar date as clients display it, e.g. 'Tue Jan 15 2019'
DATE_STRING_FORMAT = "%a %b %d %Y"


def _text(node):
    # Eventbrite wraps strings as {"text": ..., "html": ...}
    return node.get("text") if isinstance(node, dict) else None


def to_location(search_query: str, body: dict, created_at: int) -> LocationData:
    try:
        result = body["results"][0]
        coords = result["geometry"]["location"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderResponseError(f"No geocoding result for '{search_query}'") from e

    try:
        return LocationData(
            created_at=created_at,
            search_query=search_query,
            formatted_query=result.get("formatted_address"),
            latitude=coords.get("lat"),
            longitude=coords.get("lng"),
        )
    except ValidationError as e:
        raise ProviderResponseError(f"Unusable geocoding result for '{search_query}': {e}") from e


def to_weather(item: dict, location_id: int, created_at: int) -> WeatherRecordData:
    epoch_seconds = item.get("time")
    day = None
    if epoch_seconds is not None:
        tz = pytz.timezone(config.DISPLAY_TIMEZONE)
        day = datetime.fromtimestamp(epoch_seconds, tz=tz).strftime(DATE_STRING_FORMAT)

    return WeatherRecordData(
        created_at=created_at,
        location_id=location_id,
        forecast=item.get("summary"),
        time=day,
    )


def to_event(item: dict, location_id: int, created_at: int) -> EventRecordData:
    start_local = (item.get("start") or {}).get("local")
    event_date = None
    if start_local:
        try:
            event_date = datetime.fromisoformat(start_local).strftime(DATE_STRING_FORMAT)
        except (TypeError, ValueError):
            pass # Unparseable start: keep the event without a date

    return EventRecordData(
        created_at=created_at,
        location_id=location_id,
        link=item.get("url"),
        name=_text(item.get("name")),
        event_date=event_date,
        summary=_text(item.get("description")),
    )


def to_movie(item: dict, location_id: int, created_at: int) -> MovieRecordData:
    return MovieRecordData(
        created_at=created_at,
        location_id=location_id,
        title=item.get("title"),
        overview=item.get("overview"),
        average_votes=item.get("vote_average"),
        total_votes=item.get("vote_count"),
        # No poster still yields a URL (ending in 'None'); clients show a broken image
        image_url=f"{config.MOVIE_IMAGE_BASE_URL}/{item.get('poster_path')}",
        popularity=item.get("popularity"),
        released_on=item.get("release_date"),
    )


def to_business(item: dict, location_id: int, created_at: int) -> BusinessRecordData:
    return BusinessRecordData(
        created_at=created_at,
        location_id=location_id,
        name=item.get("name"),
        image_url=item.get("image_url"),
        price=item.get("price"),
        rating=item.get("rating"),
        url=item.get("url"),
    )
