# backend/app/services/providers/endpoints.py
"""Provider URL builders and per-provider auth headers."""
from urllib.parse import urlencode, quote

from backend.app.core import config
from backend.app.models.resource_kind import ResourceKind


def geocode_url(search_query: str) -> str:
    return f"{config.GEOCODE_API_URL}?" + urlencode({"address": search_query, "key": config.GEOCODE_API_KEY or ""})


def weather_url(latitude, longitude) -> str:
    # Dark Sky takes the key and the coordinates as path segments
    key = quote(config.WEATHER_API_KEY or "", safe="")
    coords = quote(f"{latitude},{longitude}", safe=",")
    return f"{config.WEATHER_API_URL}/{key}/{coords}"


def events_url(latitude, longitude) -> str:
    return f"{config.EVENTBRITE_API_URL}?" + urlencode({
        "location.latitude": latitude,
        "location.longitude": longitude,
        "token": config.EVENTBRITE_API_KEY or "",
    })


def movies_url(search_query: str) -> str:
    return f"{config.MOVIE_API_URL}?" + urlencode({"query": search_query, "api_key": config.MOVIE_API_KEY or ""})


def businesses_url(search_query: str) -> str:
    # No key in the URL: Yelp authenticates through the bearer header
    return f"{config.YELP_API_URL}?" + urlencode({"location": search_query})


def auth_headers(kind: ResourceKind) -> dict | None:
    if kind is ResourceKind.BUSINESSES:
        return {"Authorization": f"Bearer {config.YELP_API_KEY}"}
    return None
