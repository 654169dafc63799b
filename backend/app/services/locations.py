# backend/app/services/locations.py
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from backend.app.db.gateway import PersistenceGateway
from backend.app.models.location import Location
from backend.app.services.cache_policy import now_ms
from backend.app.services.providers.client import fetch_provider_json
from backend.app.services.providers.endpoints import geocode_url
from backend.app.services.transformers import to_location


def find_or_create_location(gateway: PersistenceGateway, search_query: str) -> Location:
    """
    Return the stored location for this exact search text, geocoding it first
    if it has never been seen. Locations never expire.
    """
    location = gateway.find_location_by_query(search_query)
    if location is not None:
        print(f"[{datetime.now()}] Location '{search_query}' found in cache (id={location.id}).")
        return location

    print(f"[{datetime.now()}] Geocoding new location '{search_query}'...")
    body = fetch_provider_json(geocode_url(search_query))
    data = to_location(search_query, body, now_ms())
    try:
        location = gateway.insert_location(data)
    except SQLAlchemyError:
        gateway.rollback()
        raise
    print(f"[{datetime.now()}] Stored location '{search_query}' (id={location.id}).")
    return location
