import math
from typing import Iterable, List, Optional, TypeVar
from fastapi import HTTPException, status
from app.models.compliance_item import ComplianceType, ItemStatus
from app.schemas.compliance_item import (
    ComplianceItemBase,
    ComplianceItemListResponse,
    ComplianceItemResponse,
    ItemFilter,
    ProgressResponse,
)
from app.stores.base import ComplianceStore
from app.core.logging_config import logger

ItemT = TypeVar("ItemT", bound=ComplianceItemBase)


def compute_progress(items: Iterable[ComplianceItemBase]) -> int:
    """Percentage of completed items, rounded half up. 0 for an empty list."""
    items = list(items)
    if not items:
        return 0
    completed = sum(1 for item in items if item.status == ItemStatus.Completed)
    return int(math.floor(100 * completed / len(items) + 0.5))


def summarize_progress(items: Iterable[ComplianceItemBase]) -> ProgressResponse:
    items = list(items)
    return ProgressResponse(
        total=len(items),
        completed=sum(1 for item in items if item.status == ItemStatus.Completed),
        percentage=compute_progress(items),
    )


def matches_search(item: ComplianceItemBase, search: Optional[str]) -> bool:
    if not search:
        return True
    term = search.lower()
    return term in item.title.lower() or term in item.description.lower()


def matches_filter(item: ComplianceItemBase, predicate: ItemFilter) -> bool:
    if predicate == ItemFilter.REQUIRED:
        return item.type == ComplianceType.Required
    if predicate == ItemFilter.RECOMMENDED:
        return item.type == ComplianceType.Recommended
    if predicate == ItemFilter.COMPLETED:
        return item.status == ItemStatus.Completed
    if predicate == ItemFilter.PENDING:
        return item.status == ItemStatus.Pending
    return True


def filter_items(
    items: Iterable[ItemT],
    predicate: ItemFilter = ItemFilter.ALL,
    search: Optional[str] = None
) -> List[ItemT]:
    """Items matching both the search term (title or description) and the predicate."""
    return [
        item for item in items
        if matches_search(item, search) and matches_filter(item, predicate)
    ]


def toggled(current: ItemStatus) -> ItemStatus:
    return ItemStatus.Pending if current == ItemStatus.Completed else ItemStatus.Completed


class DashboardService:
    """
    Service layer for the compliance dashboard.

    Reads a user's generated items, reports progress and flips item status.
    """

    def list_items(
        self,
        store: ComplianceStore,
        user_id: int,
        predicate: ItemFilter = ItemFilter.ALL,
        search: Optional[str] = None
    ) -> ComplianceItemListResponse:
        """
        Filtered items plus progress over ALL of the user's items.
        """
        items = store.list_items(user_id)
        return ComplianceItemListResponse(
            items=filter_items(items, predicate, search),
            progress=summarize_progress(items),
        )

    def get_progress(self, store: ComplianceStore, user_id: int) -> ProgressResponse:
        return summarize_progress(store.list_items(user_id))

    def get_item(self, store: ComplianceStore, user_id: int, item_id: int) -> ComplianceItemResponse:
        """
        Raises:
            HTTPException 404: If the item does not exist or belongs to someone else
        """
        item = store.get_item(user_id, item_id)
        if not item:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Compliance item not found"
            )
        return item

    def toggle_status(self, store: ComplianceStore, user_id: int, item_id: int) -> ComplianceItemResponse:
        """
        Flip Completed <-> Pending and persist it. Touches nothing else.

        Raises:
            HTTPException 404: If the item does not exist
        """
        item = self.get_item(store, user_id, item_id)
        new_status = toggled(item.status)
        updated = store.set_item_status(user_id, item_id, new_status)
        if not updated:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Compliance item not found"
            )
        logger.info(f"Item {item_id} for user {user_id}: {item.status.value} -> {new_status.value}")
        return updated


# Create a singleton instance
dashboard_service = DashboardService()
