from typing import Optional
from fastapi import APIRouter, Depends, Query
from app.dependencies import get_store, get_current_user
from app.schemas.compliance_item import (
    ComplianceItemListResponse,
    ComplianceItemResponse,
    ItemFilter,
    ProgressResponse,
)
from app.schemas.user import UserAccount
from app.services.dashboard import dashboard_service
from app.stores import ComplianceStore
from app.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=ComplianceItemListResponse)
def get_compliance_items(
    filter: ItemFilter = Query(ItemFilter.ALL),
    search: Optional[str] = Query(None, max_length=200),
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    """
    Retrieve your compliance items with optional filter and search.

    Args:
        filter: All, Required, Recommended, Completed or Pending
        search: Case-insensitive match against title or description

    Returns:
        Matching items and progress across all of your items
    """
    return dashboard_service.list_items(store, current_user.id, filter, search)


@router.get("/progress", response_model=ProgressResponse)
def get_progress(
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    return dashboard_service.get_progress(store, current_user.id)


@router.get("/{item_id}", response_model=ComplianceItemResponse)
def get_compliance_item(
    item_id: int,
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    """
    Raises:
        HTTPException 404: If the item is not found
    """
    return dashboard_service.get_item(store, current_user.id, item_id)


@router.post("/{item_id}/toggle", response_model=ComplianceItemResponse)
def toggle_compliance_item(
    item_id: int,
    store: ComplianceStore = Depends(get_store),
    current_user: UserAccount = Depends(get_current_user)
):
    """
    Flip an item between Completed and Pending.
    """
    logger.info(f"Toggling compliance item {item_id} for user {current_user.id}")
    return dashboard_service.toggle_status(store, current_user.id, item_id)
