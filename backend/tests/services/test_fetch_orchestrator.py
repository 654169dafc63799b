# backend/tests/services/test_fetch_orchestrator.py
from unittest.mock import patch

import pytest
import requests
from sqlalchemy.exc import SQLAlchemyError

from backend.app.core.exceptions import ProviderResponseError
from backend.app.models.resource_kind import ResourceKind
from backend.app.schemas.records import WeatherRecordData
from backend.app.services.cache_policy import now_ms
from backend.app.services.fetch_orchestrator import TRANSFORMERS, extract_items, fetch_and_store, lookup_or_fetch
from backend.app.services.transformers import to_weather

FETCH = 'backend.app.services.fetch_orchestrator.fetch_provider_json'
WEATHER_URL = "https://api.darksky.net/forecast/key/47.6,-122.3"
EVENTS_URL = "https://www.eventbriteapi.com/v3/events/search/?location.latitude=47.6"


class FlakyGateway:
    """Gateway double whose insert_record fails on chosen call numbers."""

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.insert_calls = 0
        self.commits = 0
        self.rollbacks = 0

    def insert_record(self, kind, data):
        self.insert_calls += 1
        if self.insert_calls in self.fail_on:
            raise SQLAlchemyError("insert failed")
        return data

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


@pytest.fixture
def mock_events_body():
    return {
        "events": [
            {"url": f"https://www.eventbrite.com/e/{n}", "name": {"text": f"Event {n}"}}
            for n in range(1, 6)
        ]
    }


@pytest.fixture
def mock_weather_body():
    return {
        "daily": {
            "data": [
                {"time": 1547539200, "summary": "Fresh rain."},
                {"time": 1547625600, "summary": "Fresh sun."},
            ]
        }
    }


def seed_weather(gateway, location_id, created_at, count=3):
    for n in range(count):
        gateway.insert_record(ResourceKind.WEATHER, WeatherRecordData(
            created_at=created_at, location_id=location_id, forecast=f"Old {n}",
        ))
    gateway.commit()


def test_extract_items_follows_the_resource_path():
    assert extract_items(ResourceKind.WEATHER, {"daily": {"data": [1, 2]}}) == [1, 2]
    assert extract_items(ResourceKind.EVENTS, {"events": [1]}) == [1]
    assert extract_items(ResourceKind.MOVIES, {"results": []}) == []
    assert extract_items(ResourceKind.BUSINESSES, {"businesses": [3]}) == [3]


def test_extract_items_rejects_unexpected_shapes():
    with pytest.raises(ProviderResponseError):
        extract_items(ResourceKind.WEATHER, {"currently": {}})
    with pytest.raises(ProviderResponseError):
        extract_items(ResourceKind.EVENTS, {"events": {"not": "a list"}})


@patch(FETCH)
def test_partial_insert_failure_keeps_the_other_items(mock_fetch, mock_events_body):
    mock_fetch.return_value = mock_events_body
    gateway = FlakyGateway(fail_on={1, 3, 5})

    stored = fetch_and_store(gateway, ResourceKind.EVENTS, EVENTS_URL, 7)

    assert [record.name for record in stored] == ["Event 2", "Event 4"]
    assert gateway.insert_calls == 5
    assert gateway.commits == 1
    assert gateway.rollbacks == 0


@patch(FETCH)
def test_untransformable_item_is_skipped(mock_fetch):
    mock_fetch.return_value = {"results": [{"title": "Good"}, {"title": "Bad", "vote_count": "many"}]}
    gateway = FlakyGateway()

    stored = fetch_and_store(gateway, ResourceKind.MOVIES, "https://api.themoviedb.org/3/search/movie", 7)

    assert [record.title for record in stored] == ["Good"]


@patch(FETCH)
def test_batch_shares_one_created_at(mock_fetch, mock_events_body):
    mock_fetch.return_value = mock_events_body

    stored = fetch_and_store(FlakyGateway(), ResourceKind.EVENTS, EVENTS_URL, 7)

    assert len({record.created_at for record in stored}) == 1
    assert all(record.location_id == 7 for record in stored)


@patch(FETCH)
def test_provider_failure_rolls_back_and_raises(mock_fetch):
    mock_fetch.side_effect = requests.exceptions.ConnectionError("unreachable")
    gateway = FlakyGateway()

    with pytest.raises(requests.exceptions.ConnectionError):
        fetch_and_store(gateway, ResourceKind.EVENTS, EVENTS_URL, 7)

    assert gateway.rollbacks == 1
    assert gateway.commits == 0


@patch(FETCH)
def test_cache_miss_fetches_and_persists(mock_fetch, gateway, seattle, mock_weather_body):
    mock_fetch.return_value = mock_weather_body

    records = lookup_or_fetch(gateway, ResourceKind.WEATHER, WEATHER_URL, seattle.id)

    mock_fetch.assert_called_once_with(WEATHER_URL, headers=None)
    assert [r.forecast for r in records] == ["Fresh rain.", "Fresh sun."]
    assert all(r.id is not None for r in records)
    assert len(gateway.find_records(ResourceKind.WEATHER, seattle.id)) == 2


@patch(FETCH)
def test_fresh_weather_is_served_from_the_store(mock_fetch, gateway, seattle):
    seed_weather(gateway, seattle.id, now_ms())

    records = lookup_or_fetch(gateway, ResourceKind.WEATHER, WEATHER_URL, seattle.id)

    mock_fetch.assert_not_called()
    assert [r.forecast for r in records] == ["Old 0", "Old 1", "Old 2"]


@patch(FETCH)
def test_stale_weather_is_replaced(mock_fetch, gateway, db_session, seattle, mock_weather_body):
    two_days_ms = 2 * 24 * 60 * 60 * 1000
    seed_weather(gateway, seattle.id, now_ms() - two_days_ms)
    mock_fetch.return_value = mock_weather_body

    records = lookup_or_fetch(gateway, ResourceKind.WEATHER, WEATHER_URL, seattle.id)

    mock_fetch.assert_called_once()
    assert [r.forecast for r in records] == ["Fresh rain.", "Fresh sun."]
    db_session.expire_all()
    stored = gateway.find_records(ResourceKind.WEATHER, seattle.id)
    assert [r.forecast for r in stored] == ["Fresh rain.", "Fresh sun."]


@patch(FETCH)
def test_failed_refresh_keeps_the_stale_batch(mock_fetch, gateway, db_session, seattle):
    two_days_ms = 2 * 24 * 60 * 60 * 1000
    seed_weather(gateway, seattle.id, now_ms() - two_days_ms)
    mock_fetch.side_effect = requests.exceptions.HTTPError("500 Server Error")

    with pytest.raises(requests.exceptions.HTTPError):
        lookup_or_fetch(gateway, ResourceKind.WEATHER, WEATHER_URL, seattle.id)

    db_session.expire_all()
    assert len(gateway.find_records(ResourceKind.WEATHER, seattle.id)) == 3


@pytest.mark.parametrize("kind", [ResourceKind.EVENTS, ResourceKind.MOVIES, ResourceKind.BUSINESSES])
@patch(FETCH)
def test_cached_non_weather_kinds_never_refetch(mock_fetch, kind, gateway, seattle):
    a_year_ms = 365 * 24 * 60 * 60 * 1000
    data = TRANSFORMERS[kind]({"name": "Cached", "title": "Cached"}, seattle.id, now_ms() - a_year_ms)
    gateway.insert_record(kind, data)
    gateway.commit()

    for _ in range(3):
        records = lookup_or_fetch(gateway, kind, "https://provider.example/search", seattle.id)
        assert len(records) == 1

    mock_fetch.assert_not_called()


@patch(FETCH)
def test_stale_refresh_stores_items_around_failed_inserts(mock_fetch, monkeypatch, gateway, db_session, seattle):
    two_days_ms = 2 * 24 * 60 * 60 * 1000
    seed_weather(gateway, seattle.id, now_ms() - two_days_ms)
    mock_fetch.return_value = {
        "daily": {"data": [{"summary": s} for s in ("a", "bad", "b", "bad", "bad")]}
    }

    def transform_with_null_timestamps(item, location_id, created_at):
        if item["summary"] == "bad":
            # Skips validation so the NOT NULL created_at column rejects the insert
            return WeatherRecordData.model_construct(
                created_at=None, location_id=location_id, forecast="bad", time=None,
            )
        return to_weather(item, location_id, created_at)

    monkeypatch.setitem(TRANSFORMERS, ResourceKind.WEATHER, transform_with_null_timestamps)

    records = lookup_or_fetch(gateway, ResourceKind.WEATHER, WEATHER_URL, seattle.id)

    assert [r.forecast for r in records] == ["a", "b"]
    db_session.expire_all()
    stored = gateway.find_records(ResourceKind.WEATHER, seattle.id)
    assert [r.forecast for r in stored] == ["a", "b"] # Old batch gone, good items kept
