from typing import Generic, TypeVar, Type, Optional, List, Any, Dict, Sequence
from sqlalchemy.orm import Session
from sqlalchemy import select, delete, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from app.database import Base

ModelType = TypeVar("ModelType", bound=Base)

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def dialect_insert(db: Session, model):
    """
    Return an INSERT construct that supports ON CONFLICT for the bound dialect.

    Raises:
        NotImplementedError: If the database has no ON CONFLICT support here
    """
    dialect = db.get_bind().dialect.name
    try:
        return _INSERTS[dialect](model)
    except KeyError:
        raise NotImplementedError(f"Upserts are not supported on {dialect}")


def upsert_many(
    db: Session,
    model,
    rows: Sequence[Dict[str, Any]],
    *,
    index_elements: List[str],
    update_fields: List[str]
) -> None:
    """
    INSERT ... ON CONFLICT DO UPDATE for a batch of rows.

    Only ``update_fields`` are overwritten on conflict, so columns left out
    keep whatever the existing row holds. Does NOT commit.
    """
    if not rows:
        return
    stmt = dialect_insert(db, model).values(list(rows))
    set_ = {field: getattr(stmt.excluded, field) for field in update_fields}
    if hasattr(model, "updated_at"):
        set_["updated_at"] = func.now()
    stmt = stmt.on_conflict_do_update(index_elements=index_elements, set_=set_)
    db.execute(stmt)


class CRUDBase(Generic[ModelType]):
    """
    Generic CRUD class with per-user isolation via explicit user_id.

    Every read and delete filters by user_id, which is always passed
    explicitly from the service layer.

    Type Parameters:
        ModelType: SQLAlchemy model class with a user_id column
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: int, user_id: int) -> Optional[ModelType]:
        """
        Retrieve a single record by ID, or None if it doesn't belong to the user.
        """
        stmt = select(self.model).where(
            self.model.id == id,
            self.model.user_id == user_id
        )
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def get_multi(self, db: Session, *, user_id: int) -> List[ModelType]:
        """
        Retrieve all records belonging to the user, oldest first.
        """
        stmt = select(self.model).where(
            self.model.user_id == user_id
        ).order_by(self.model.id)
        result = db.execute(stmt)
        return list(result.scalars().all())

    def delete_for_user(self, db: Session, *, user_id: int) -> int:
        """
        Delete every record belonging to the user. Does NOT commit.

        Returns:
            Number of rows deleted
        """
        result = db.execute(delete(self.model).where(self.model.user_id == user_id))
        return result.rowcount
