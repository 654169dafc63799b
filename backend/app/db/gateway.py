# backend/app/db/gateway.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from backend.app.models.location import Location
from backend.app.models.resource_kind import ResourceKind, RECORD_MODELS
from backend.app.schemas.records import LocationData, RecordData


class PersistenceGateway:
    """
    Every store operation the request pipeline needs, over one Session.

    Handlers and the fetch pipeline receive a gateway instead of reaching for
    a global connection, so tests can hand in a fake. Statements are built
    from the fixed RECORD_MODELS mapping; no identifier is ever interpolated.
    Record inserts are not committed here: the pipeline commits a whole batch
    (including any delete that preceded it) in one go.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_location_by_query(self, search_query: str) -> Location | None:
        return self.db.execute(
            select(Location).where(Location.search_query == search_query)
        ).scalars().first()

    def insert_location(self, data: LocationData) -> Location:
        location = Location(**data.model_dump())
        self.db.add(location)
        self.db.commit()
        self.db.refresh(location) # Pick up the store-assigned id
        return location

    def find_records(self, kind: ResourceKind, location_id: int) -> list:
        """Return the cached batch for a location in insertion order."""
        model = RECORD_MODELS[kind]
        return list(self.db.execute(
            select(model).where(model.location_id == location_id).order_by(model.id)
        ).scalars())

    def delete_records(self, kind: ResourceKind, location_id: int) -> int:
        model = RECORD_MODELS[kind]
        result = self.db.execute(
            delete(model).where(model.location_id == location_id)
        )
        return result.rowcount

    def insert_record(self, kind: ResourceKind, data: RecordData):
        """
        Insert one record inside its own SAVEPOINT.

        A failing insert rolls back only its savepoint and re-raises, leaving
        the rest of the batch (and the surrounding transaction) usable.
        """
        row = RECORD_MODELS[kind](**data.model_dump())
        with self.db.begin_nested():
            self.db.add(row)
        return row

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
