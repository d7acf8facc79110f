"""Lab user repository."""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.lab_user import LabUser


class LabUserRepository:
    """Lookup of staff accounts for authentication."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[LabUser]:
        """Get lab user by ID."""
        query = select(LabUser).where(LabUser.id == user_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

