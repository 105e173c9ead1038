"""PostgreSQL implementation of the aggregation read repository."""

from typing import List

import logfire
from sqlalchemy import desc, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from quotevote.domain.model import Quote, UserStats
from quotevote.domain.repository import SummaryRepository
from quotevote.domain.value import UserId
from quotevote.persistence.mappers import row_to_quote
from quotevote.persistence.tables import quotes_table


class PostgresSummaryRepository(SummaryRepository):
    """PostgreSQL implementation of SummaryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_top_voted(self, limit: int) -> List[Quote]:
        """Quotes ordered by vote count, then newest first."""
        stmt = (
            select(quotes_table)
            .order_by(
                desc(quotes_table.c.vote_count),
                desc(quotes_table.c.created_at),
                desc(quotes_table.c.id),
            )
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_quote(row._asdict()) for row in result.fetchall()]

    async def find_user_stats(self, user_id: UserId) -> UserStats:
        """Read a user's aggregates in a single statement.

        One statement sees one snapshot, so totals, rank and categories
        always agree with each other even at READ COMMITTED.
        """
        with logfire.span("summary_repository.find_user_stats", user_id=user_id):
            total = func.sum(quotes_table.c.vote_count)
            user_totals = (
                select(quotes_table.c.user_id, total.label("total_votes"))
                .group_by(quotes_table.c.user_id)
                .having(total > 0)
                .cte("user_totals")
            )
            ranked = select(
                user_totals.c.user_id,
                func.dense_rank()
                .over(order_by=desc(user_totals.c.total_votes))
                .label("rank"),
            ).cte("ranked_users")

            totals = (
                select(
                    func.count().label("total_quotes"),
                    func.coalesce(total, 0).label("total_votes"),
                    select(ranked.c.rank)
                    .where(ranked.c.user_id == user_id)
                    .scalar_subquery()
                    .label("ranking"),
                )
                .where(quotes_table.c.user_id == user_id)
                .cte("totals")
            )

            category = func.lower(quotes_table.c.category)
            categories = (
                select(category.label("category"), func.count().label("quote_count"))
                .where(quotes_table.c.user_id == user_id)
                .where(quotes_table.c.category.is_not(None))
                .group_by(category)
                .cte("categories")
            )

            stmt = (
                select(
                    totals.c.total_quotes,
                    totals.c.total_votes,
                    totals.c.ranking,
                    categories.c.category,
                    categories.c.quote_count,
                )
                .select_from(totals.outerjoin(categories, true()))
                .order_by(desc(categories.c.quote_count), categories.c.category)
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()

            # The totals CTE always yields exactly one row
            first = rows[0]
            return UserStats(
                total_quotes_created=int(first.total_quotes),
                total_votes_received=int(first.total_votes),
                ranking=int(first.ranking) if first.ranking is not None else None,
                categories=[
                    (row.category, int(row.quote_count))
                    for row in rows
                    if row.category is not None
                ],
            )
