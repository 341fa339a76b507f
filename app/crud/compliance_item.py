from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase, upsert_many
from app.models.compliance_item import ComplianceItem, ItemStatus
from app.schemas.compliance_item import ComplianceItemCreate

# Refreshed when onboarding is re-run. Status and type stay as the user left them.
_REFRESHED_FIELDS = ["title", "description", "industry", "official_site_url"]


class CRUDComplianceItem(CRUDBase[ComplianceItem]):
    """
    CRUD operations for ComplianceItem model.

    Inherits user-scoped reads and deletes from CRUDBase.
    """

    def upsert(self, db: Session, *, user_id: int, items: List[ComplianceItemCreate]) -> None:
        rows = [{"user_id": user_id, **item.model_dump()} for item in items]
        upsert_many(
            db,
            ComplianceItem,
            rows,
            index_elements=["user_id", "question_id"],
            update_fields=_REFRESHED_FIELDS,
        )
        db.commit()

    def set_status(
        self,
        db: Session,
        *,
        id: int,
        user_id: int,
        status: ItemStatus
    ) -> Optional[ComplianceItem]:
        item = self.get(db, id=id, user_id=user_id)
        if item is None:
            return None
        item.status = status
        db.commit()
        db.refresh(item)
        return item


compliance_item = CRUDComplianceItem(ComplianceItem)
