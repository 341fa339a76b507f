from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

class UserAccount(BaseModel):
    """Identity as stored by the auth gateway. Never returned to clients."""
    id: int
    email: EmailStr
    hashed_password: Optional[str] = None
    is_active: bool = True

    class Config:
        from_attributes = True

class UserProfile(BaseModel):
    id: int
    full_name: str
    company: Optional[str] = None
    industry: Optional[str] = None

    class Config:
        from_attributes = True

class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def full_name_not_null(cls, v):
        # Omit the field to leave it unchanged; it can never be cleared
        if v is None:
            raise ValueError("full_name cannot be null")
        return v

class UserRead(BaseModel):
    id: int
    email: EmailStr
    full_name: str
    company: Optional[str] = None
    industry: Optional[str] = None
