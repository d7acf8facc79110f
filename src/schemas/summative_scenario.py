"""Summative scenario schemas."""

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class SummativeScenarioBase(BaseModel):
    """Base summative scenario schema."""
    scenario_number: int = Field(..., ge=1, description="Scenario number shown to examiners")
    title: str = Field(..., min_length=1, max_length=200, description="Scenario title")
    description: Optional[str] = Field(None, description="Scenario description")
    patient_presentation: Optional[str] = Field(None, description="Brief patient presentation")
    expected_interventions: List[str] = Field(default_factory=list, description="Expected interventions")


class SummativeScenarioCreate(SummativeScenarioBase):
    """Schema for creating a summative scenario."""
    is_active: bool = Field(default=True)


class SummativeScenarioResponse(SummativeScenarioBase):
    """Schema for summative scenario response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    is_active: bool
