"""Student repository."""

from typing import List, Set
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.student import Student


class StudentRepository:
    """Read access to students for evaluation membership checks."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_existing_ids(self, student_ids: List[int]) -> Set[int]:
        """Return the subset of student_ids that exist."""
        if not student_ids:
            return set()
        query = select(Student.id).where(Student.id.in_(student_ids))
        result = await self.session.execute(query)
        return set(result.scalars().all())
