"""Summative scenario repository."""

from typing import List, Optional
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.summative_scenario import SummativeScenario
from src.schemas.summative_scenario import SummativeScenarioCreate


class SummativeScenarioRepository:
    """Repository for summative exam scenarios."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, scenario_data: SummativeScenarioCreate, created_by: Optional[int] = None) -> SummativeScenario:
        """Create a new scenario."""
        scenario = SummativeScenario(
            scenario_number=scenario_data.scenario_number,
            title=scenario_data.title,
            description=scenario_data.description,
            patient_presentation=scenario_data.patient_presentation,
            expected_interventions=scenario_data.expected_interventions,
            is_active=scenario_data.is_active,
            created_by=created_by
        )

        self.session.add(scenario)
        await self.session.commit()
        await self.session.refresh(scenario)
        return scenario

    async def get_by_id(self, scenario_id: int) -> Optional[SummativeScenario]:
        """Get scenario by ID."""
        query = select(SummativeScenario).where(SummativeScenario.id == scenario_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_active_by_number(self, scenario_number: int) -> Optional[SummativeScenario]:
        """Get the active scenario with a given number."""
        query = select(SummativeScenario).where(
            and_(
                SummativeScenario.scenario_number == scenario_number,
                SummativeScenario.is_active.is_(True)
            )
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_active(self) -> List[SummativeScenario]:
        """Get active scenarios ordered by number."""
        query = select(SummativeScenario).where(
            SummativeScenario.is_active.is_(True)
        ).order_by(SummativeScenario.scenario_number)
        result = await self.session.execute(query)
        return list(result.scalars().all())
