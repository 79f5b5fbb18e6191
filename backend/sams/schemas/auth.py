"""Request bodies for login and user management."""
from typing import Optional

from pydantic import Field, EmailStr, model_validator

from sams.models.user import UserRole
from sams.schemas.base import RequestSchema, reject_null


class LoginRequest(RequestSchema):
    username: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)


class UserCreate(RequestSchema):
    username: str = Field(..., min_length=3, max_length=80)
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role: UserRole = UserRole.STUDENT
    student_id: Optional[str] = Field(None, max_length=50)

    @model_validator(mode='after')
    def student_id_only_for_students(self):
        if self.student_id and self.role != UserRole.STUDENT:
            raise ValueError("Only students carry a student ID")
        return self


class UserUpdate(RequestSchema):
    """Role and profile edits; usernames and passwords are not editable here."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    student_id: Optional[str] = Field(None, max_length=50)
    is_active: Optional[bool] = None

    not_null = reject_null('first_name', 'last_name', 'email', 'role', 'is_active')
