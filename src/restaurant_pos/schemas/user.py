from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from restaurant_pos.models.user import RoleEnum


class UserPublic(BaseModel):
    id: int
    name: str
    email: str
    role: RoleEnum

    class Config:
        from_attributes = True


class StaffRead(UserPublic):
    active: bool


class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    role: RoleEnum


class StaffUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=72)
    role: Optional[RoleEnum] = None
    active: Optional[bool] = None

    class Config:
        extra = "forbid"


class StaffEnvelope(BaseModel):
    staff: StaffRead


class StaffList(BaseModel):
    staff: List[StaffRead]
