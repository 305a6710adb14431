from typing import Optional
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from jobboard.models.user import UserRole

PHONE_PATTERN = r"^[+]?[1-9][\d\s\-\(\)]{7,15}$"


class UserBase(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.APPLICANT


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class User(BaseModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: UserRole
    profile_image: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class EmployerSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    profile_image: Optional[str] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    profile_image: Optional[str] = Field(None, max_length=500)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class UserPasswordUpdate(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)
