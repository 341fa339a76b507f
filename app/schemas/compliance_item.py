from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum
from app.models.compliance_item import ComplianceType, ItemStatus


class ItemFilter(str, Enum):
    ALL = "All"
    REQUIRED = "Required"
    RECOMMENDED = "Recommended"
    COMPLETED = "Completed"
    PENDING = "Pending"


class ComplianceItemBase(BaseModel):
    title: str
    description: str
    type: ComplianceType = ComplianceType.Required
    status: ItemStatus = ItemStatus.Pending
    industry: Optional[str] = None
    document_url: Optional[str] = None
    official_site_url: Optional[str] = None
    question_id: Optional[int] = None


class ComplianceItemCreate(ComplianceItemBase):
    pass


class ComplianceItemResponse(ComplianceItemBase):
    id: int
    user_id: int

    class Config:
        from_attributes = True


class ProgressResponse(BaseModel):
    total: int
    completed: int
    percentage: int = Field(..., ge=0, le=100)


class ComplianceItemListResponse(BaseModel):
    items: List[ComplianceItemResponse]
    progress: ProgressResponse
