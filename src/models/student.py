"""Student model."""

from typing import Optional, TYPE_CHECKING
from sqlmodel import Field, SQLModel, Relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .cohort import Cohort


class Student(BaseModel, SQLModel, table=True):
    """Student enrolled in a cohort."""

    __tablename__ = "students"

    id: int = Field(primary_key=True)
    first_name: str = Field(max_length=100, nullable=False)
    last_name: str = Field(max_length=100, nullable=False, index=True)
    email: Optional[str] = Field(default=None, max_length=255)
    cohort_id: Optional[int] = Field(default=None, foreign_key="cohorts.id", index=True)

    # Relationships
    cohort: Optional["Cohort"] = Relationship(back_populates="students")

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, cohort_id={self.cohort_id})>"

    @property
    def full_name(self) -> str:
        """Get student's display name."""
        return f"{self.first_name} {self.last_name}"
