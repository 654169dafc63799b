# backend/app/schemas/queries.py
from pydantic import BaseModel, Field, field_validator

# --- Pydantic models for the `data` query parameter ---
# Bracketed query values arrive as strings ("5", "47.6") and are coerced;
# booleans and fractional ids are rejected so they never alias location 1.


def _reject_bool(value):
    if isinstance(value, bool):
        raise ValueError("booleans are not accepted")
    return value


class LocationRefQuery(BaseModel):
    id: int

    @field_validator("id", mode="before")
    @classmethod
    def id_is_not_bool(cls, value):
        return _reject_bool(value)


class CoordinatesQuery(LocationRefQuery):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def coordinate_is_not_bool(cls, value):
        return _reject_bool(value)


class SearchQuery(LocationRefQuery):
    search_query: str = Field(..., min_length=1)
