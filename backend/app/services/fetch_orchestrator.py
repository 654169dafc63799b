# backend/app/services/fetch_orchestrator.py
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from backend.app.core.exceptions import ProviderResponseError
from backend.app.db.gateway import PersistenceGateway
from backend.app.models.resource_kind import ResourceKind
from backend.app.services import transformers
from backend.app.services.cache_policy import needs_refresh, now_ms
from backend.app.services.providers.client import fetch_provider_json

# Where each provider keeps its result array inside the response body
RESULT_PATHS = {
    ResourceKind.WEATHER: ("daily", "data"),
    ResourceKind.EVENTS: ("events",),
    ResourceKind.MOVIES: ("results",),
    ResourceKind.BUSINESSES: ("businesses",),
}

TRANSFORMERS = {
    ResourceKind.WEATHER: transformers.to_weather,
    ResourceKind.EVENTS: transformers.to_event,
    ResourceKind.MOVIES: transformers.to_movie,
    ResourceKind.BUSINESSES: transformers.to_business,
}


def extract_items(kind: ResourceKind, body) -> list:
    node = body
    try:
        for key in RESULT_PATHS[kind]:
            node = node[key]
    except (KeyError, TypeError) as e:
        raise ProviderResponseError(f"No '{'.'.join(RESULT_PATHS[kind])}' array in {kind.value} response") from e
    if not isinstance(node, list):
        raise ProviderResponseError(f"'{'.'.join(RESULT_PATHS[kind])}' in {kind.value} response is not an array")
    return node


def fetch_and_store(gateway: PersistenceGateway, kind: ResourceKind, url: str, location_id: int,
                    headers: dict | None = None) -> list:
    """
    Fetch one provider batch, store every item that can be stored and commit.

    Items are independent: one that fails to transform or insert is logged and
    dropped, the others are kept. A provider failure (or a failing commit)
    rolls back the open transaction, including any delete the caller made in
    it, and re-raises.
    """
    print(f"[{datetime.now()}] Requesting new {kind.value} data for location {location_id}...")
    try:
        body = fetch_provider_json(url, headers=headers)
        items = extract_items(kind, body)

        created_at = now_ms() # One cache timestamp for the whole batch
        transform = TRANSFORMERS[kind]
        stored = []
        for index, item in enumerate(items):
            try:
                data = transform(item, location_id, created_at)
            except Exception as e: # A bad item is skipped on its own
                print(f"[{datetime.now()}] Could not transform {kind.value} item {index}: {e}. Skipping record.")
                continue
            try:
                stored.append(gateway.insert_record(kind, data))
            except SQLAlchemyError as e:
                print(f"[{datetime.now()}] Database error storing {kind.value} item {index}: {e}. Skipping record.")

        gateway.commit()
    except Exception:
        gateway.rollback()
        raise

    print(f"[{datetime.now()}] Stored {len(stored)} of {len(items)} {kind.value} records for location {location_id}.")
    return stored


def lookup_or_fetch(gateway: PersistenceGateway, kind: ResourceKind, url: str, location_id: int,
                    headers: dict | None = None) -> list:
    """
    Serve the cached batch for a location, refreshing it when missing or stale.

    Stale batches are deleted and refilled inside one transaction, so a failed
    refresh leaves the old batch in place.
    """
    batch = gateway.find_records(kind, location_id)
    if not batch:
        print(f"[{datetime.now()}] Cache miss for {kind.value}, location {location_id}.")
        return fetch_and_store(gateway, kind, url, location_id, headers)

    if not needs_refresh(kind, batch):
        print(f"[{datetime.now()}] Sending cached {kind.value} for location {location_id}.")
        return batch

    print(f"[{datetime.now()}] Cached {kind.value} for location {location_id} is stale, age {now_ms() - batch[0].created_at} ms.")
    try:
        deleted = gateway.delete_records(kind, location_id)
    except SQLAlchemyError:
        gateway.rollback()
        raise
    print(f"[{datetime.now()}] Deleted {deleted} stale {kind.value} records.")
    return fetch_and_store(gateway, kind, url, location_id, headers)
