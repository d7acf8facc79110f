"""Seeding script for the default summative scenarios."""

import asyncio
import sys
import argparse
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from src.core.database import get_db
from src.repositories.summative_scenario import SummativeScenarioRepository
from src.schemas.summative_scenario import SummativeScenarioCreate


DEFAULT_SCENARIOS = [
    {
        "scenario_number": 1,
        "title": "Medical Emergency - Cardiac",
        "description": "Cardiac emergency scenario",
        "patient_presentation": "Patient presenting with chest pain and cardiac symptoms",
    },
    {
        "scenario_number": 2,
        "title": "Trauma - Multi-System",
        "description": "Multi-system trauma scenario",
        "patient_presentation": "Trauma patient with multiple injuries requiring rapid assessment",
    },
    {
        "scenario_number": 3,
        "title": "Medical Emergency - Respiratory",
        "description": "Respiratory emergency scenario",
        "patient_presentation": "Patient with acute respiratory distress",
    },
    {
        "scenario_number": 4,
        "title": "Trauma - Isolated",
        "description": "Isolated trauma scenario",
        "patient_presentation": "Single-system trauma requiring focused assessment",
    },
    {
        "scenario_number": 5,
        "title": "Medical Emergency - Neurological",
        "description": "Neurological emergency scenario",
        "patient_presentation": "Patient presenting with altered mental status or stroke symptoms",
    },
    {
        "scenario_number": 6,
        "title": "Pediatric Emergency",
        "description": "Pediatric patient scenario",
        "patient_presentation": "Pediatric patient requiring age-appropriate assessment and treatment",
    },
]


class ScenarioSeeder:
    """Seeds the summative scenario catalogue."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.scenario_repo = SummativeScenarioRepository(session)

    async def run_seeding(self):
        """Create default scenarios that are not already active."""
        print("Creating summative scenarios...")

        created = 0
        for scenario_data in DEFAULT_SCENARIOS:
            existing = await self.scenario_repo.get_active_by_number(scenario_data["scenario_number"])
            if existing:
                print(f"Scenario {scenario_data['scenario_number']} already exists")
                continue

            scenario = await self.scenario_repo.create(SummativeScenarioCreate(**scenario_data))
            print(f"Created scenario {scenario.scenario_number}: {scenario.title}")
            created += 1

        print(f"Seeding completed: {created} scenarios created")

    async def clear_all_data(self):
        """Clear summative data, scores and evaluations first."""
        print("Clearing summative data...")

        try:
            await self.session.execute(text("DELETE FROM summative_evaluation_scores"))
            await self.session.execute(text("DELETE FROM summative_evaluations"))
            await self.session.execute(text("DELETE FROM summative_scenarios"))
            await self.session.commit()
            print("Summative data cleared")
        except Exception:
            await self.session.rollback()
            raise


async def main():
    """Main seeding function."""
    parser = argparse.ArgumentParser(description='Summative scenario seeding script')
    parser.add_argument('action', choices=['up', 'down'], help='up: create data, down: clear data')
    args = parser.parse_args()

    try:
        async for session in get_db():
            seeder = ScenarioSeeder(session)

            if args.action == 'down':
                await seeder.clear_all_data()
            else:
                await seeder.run_seeding()
            break

    except Exception as e:
        print(f"Seeding failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
