"""PostgreSQL implementation of Vote repository."""

from typing import Optional

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from quotevote.domain.model import Vote
from quotevote.domain.repository import VoteRepository
from quotevote.domain.value import QuoteId, UserId, VoteId
from quotevote.persistence.mappers import row_to_vote, vote_to_dict
from quotevote.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user(self, user_id: UserId) -> Optional[Vote]:
        """Find a user's single active vote."""
        stmt = select(votes_table).where(votes_table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_quote(
        self, user_id: UserId, quote_id: QuoteId
    ) -> Optional[Vote]:
        """Find a user's vote on a specific quote."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.quote_id == quote_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create)."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_by_quote(self, quote_id: QuoteId) -> int:
        """Count the active votes referencing a quote."""
        stmt = (
            select(func.count())
            .select_from(votes_table)
            .where(votes_table.c.quote_id == quote_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
