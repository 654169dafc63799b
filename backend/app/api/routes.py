# backend/app/api/routes.py
import json
import re

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from backend.app.db.gateway import PersistenceGateway
from backend.app.db.session import get_db
from backend.app.models.resource_kind import ResourceKind
from backend.app.schemas.queries import CoordinatesQuery, SearchQuery
from backend.app.schemas.records import (
    LocationOut,
    WeatherRecordOut,
    EventRecordOut,
    MovieRecordOut,
    BusinessRecordOut,
)
from backend.app.services.fetch_orchestrator import lookup_or_fetch
from backend.app.services.locations import find_or_create_location
from backend.app.services.providers import endpoints

router = APIRouter()

# Browser clients send nested objects as data[id]=5&data[latitude]=...
DATA_KEY = re.compile(r"data\[(\w+)\]")


def get_gateway(db: Session = Depends(get_db)) -> PersistenceGateway:
    return PersistenceGateway(db)


def read_data_param(request: Request) -> dict:
    """Collect the `data` object from bracketed keys or a JSON-encoded `data` value."""
    params = request.query_params
    data = {}
    for key, value in params.multi_items():
        match = DATA_KEY.fullmatch(key)
        if match:
            data[match.group(1)] = value
    if data:
        return data

    raw = params.get("data")
    if raw is None:
        raise HTTPException(status_code=400, detail="Missing query parameter: data")
    try:
        decoded = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Query parameter 'data' must be an object")
    if not isinstance(decoded, dict):
        raise HTTPException(status_code=400, detail="Query parameter 'data' must be an object")
    return decoded


def read_query(request: Request, model):
    """Validate the `data` object against a query model; bad input is a 400."""
    try:
        return model.model_validate(read_data_param(request))
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in e.errors()})
        raise HTTPException(status_code=400, detail=f"Invalid data fields: {', '.join(fields)}")


@router.get("/health")
def health_check():
    return {"status": "ok", "message": "City explorer API is up and running!"}


@router.get("/location", response_model=LocationOut)
def get_location(request: Request, gateway: PersistenceGateway = Depends(get_gateway)):
    search_query = request.query_params.get("data")
    if not search_query:
        raise HTTPException(status_code=400, detail="Missing query parameter: data")
    return find_or_create_location(gateway, search_query)


@router.get("/weather", response_model=list[WeatherRecordOut])
def get_weather(request: Request, gateway: PersistenceGateway = Depends(get_gateway)):
    query = read_query(request, CoordinatesQuery)
    url = endpoints.weather_url(query.latitude, query.longitude)
    return lookup_or_fetch(gateway, ResourceKind.WEATHER, url, query.id)


@router.get("/events", response_model=list[EventRecordOut])
def get_events(request: Request, gateway: PersistenceGateway = Depends(get_gateway)):
    query = read_query(request, CoordinatesQuery)
    url = endpoints.events_url(query.latitude, query.longitude)
    return lookup_or_fetch(gateway, ResourceKind.EVENTS, url, query.id)


@router.get("/movies", response_model=list[MovieRecordOut])
def get_movies(request: Request, gateway: PersistenceGateway = Depends(get_gateway)):
    query = read_query(request, SearchQuery)
    url = endpoints.movies_url(query.search_query)
    return lookup_or_fetch(gateway, ResourceKind.MOVIES, url, query.id)


@router.get("/yelp", response_model=list[BusinessRecordOut])
def get_businesses(request: Request, gateway: PersistenceGateway = Depends(get_gateway)):
    query = read_query(request, SearchQuery)
    url = endpoints.businesses_url(query.search_query)
    return lookup_or_fetch(
        gateway, ResourceKind.BUSINESSES, url, query.id,
        headers=endpoints.auth_headers(ResourceKind.BUSINESSES),
    )
