"""Cohort model."""

from typing import List, Optional, TYPE_CHECKING
from sqlmodel import Field, SQLModel, Relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .student import Student


class Cohort(BaseModel, SQLModel, table=True):
    """A group of students progressing through the program together."""

    __tablename__ = "cohorts"

    id: int = Field(primary_key=True)
    cohort_number: int = Field(nullable=False, index=True)
    program_abbreviation: str = Field(max_length=20, nullable=False)
    is_active: bool = Field(default=True, index=True)
    description: Optional[str] = Field(default=None)

    # Relationships
    students: List["Student"] = Relationship(back_populates="cohort")

    def __repr__(self) -> str:
        return f"<Cohort(id={self.id}, {self.display_name})>"

    @property
    def display_name(self) -> str:
        """Get formatted cohort name, e.g. 'PM Group 14'."""
        return f"{self.program_abbreviation} Group {self.cohort_number}"
