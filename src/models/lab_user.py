"""Lab user model for instructors and administrators."""

from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import DateTime, Enum as SQLEnum

from .base import BaseModel
from .enums import UserRole


class LabUser(BaseModel, SQLModel, table=True):
    """Staff account provisioned on first sign-in through the auth provider."""

    __tablename__ = "lab_users"

    id: int = Field(primary_key=True)
    email: str = Field(max_length=255, unique=True, nullable=False, index=True)
    name: str = Field(max_length=200, nullable=False)
    role: UserRole = Field(
        sa_column=Column(
            SQLEnum(UserRole, name="lab_user_role", values_callable=lambda e: [m.value for m in e]),
            nullable=False,
            default=UserRole.GUEST
        ),
        description="Role determining access level"
    )
    is_active: bool = Field(default=True, index=True)
    last_login_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<LabUser(id={self.id}, role={self.role})>"
