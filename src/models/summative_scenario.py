"""Summative scenario model - final practical exam scenarios."""

from typing import List, Optional, TYPE_CHECKING
from sqlmodel import Field, SQLModel, Relationship, Column, JSON

from .base import BaseModel

if TYPE_CHECKING:
    from .summative_evaluation import SummativeEvaluation


class SummativeScenario(BaseModel, SQLModel, table=True):
    """Scenario used for summative evaluations, separate from regular lab scenarios."""

    __tablename__ = "summative_scenarios"

    id: int = Field(primary_key=True)
    scenario_number: int = Field(nullable=False, index=True)
    title: str = Field(max_length=200, nullable=False)
    description: Optional[str] = Field(default=None)
    patient_presentation: Optional[str] = Field(default=None)
    expected_interventions: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list),
        description="Interventions the examiner expects to see"
    )
    is_active: bool = Field(default=True, index=True)

    # Relationships
    evaluations: List["SummativeEvaluation"] = Relationship(back_populates="scenario")

    def __repr__(self) -> str:
        return f"<SummativeScenario(id={self.id}, number={self.scenario_number})>"
