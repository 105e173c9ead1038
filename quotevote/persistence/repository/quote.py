"""PostgreSQL implementation of Quote repository."""

from typing import List, Optional

import logfire
from sqlalchemy import and_, asc, delete, desc, func, insert, or_, select, update
from sqlalchemy.dialects.postgresql import aggregate_order_by
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import Label

from quotevote.domain.model import Quote, QuoteChanges, QuoteDraft
from quotevote.domain.repository.quote import QuoteQuery, QuoteRepository
from quotevote.domain.value import QuoteId, QuoteSortField, SortDirection, UserId
from quotevote.persistence.mappers import changes_to_dict, draft_to_dict, row_to_quote
from quotevote.persistence.tables import quotes_table, votes_table

SORT_COLUMNS = {
    QuoteSortField.VOTE_COUNT: quotes_table.c.vote_count,
    QuoteSortField.CREATED_AT: quotes_table.c.created_at,
    QuoteSortField.UPDATED_AT: quotes_table.c.updated_at,
    QuoteSortField.AUTHOR: quotes_table.c.author,
}


def voted_user_ids_column() -> Label:
    """Correlated array of the users voting for each selected quote.

    NULL when nobody has voted; the mapper reads that as an empty list.
    """
    return (
        select(
            func.array_agg(
                aggregate_order_by(votes_table.c.user_id, votes_table.c.created_at)
            )
        )
        .where(votes_table.c.quote_id == quotes_table.c.id)
        .scalar_subquery()
        .label("voted_user_ids")
    )


class PostgresQuoteRepository(QuoteRepository):
    """PostgreSQL implementation of QuoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, quote_id: QuoteId) -> Optional[Quote]:
        """Find a quote by ID."""
        stmt = select(quotes_table, voted_user_ids_column()).where(
            quotes_table.c.id == quote_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_quote(row._asdict()) if row else None

    async def exists(self, quote_id: QuoteId) -> bool:
        """Check whether a quote exists."""
        stmt = select(quotes_table.c.id).where(quotes_table.c.id == quote_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_vote_count(self, quote_id: QuoteId) -> Optional[int]:
        """Read a quote's vote counter."""
        stmt = select(quotes_table.c.vote_count).where(quotes_table.c.id == quote_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def increment_vote_count(self, quote_id: QuoteId) -> None:
        """Atomically increment the vote counter by 1."""
        stmt = (
            update(quotes_table)
            .where(quotes_table.c.id == quote_id)
            .values(vote_count=quotes_table.c.vote_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_vote_count(self, quote_id: QuoteId) -> None:
        """Atomically decrement the vote counter by 1 (minimum 0)."""
        stmt = (
            update(quotes_table)
            .where(quotes_table.c.id == quote_id)
            .where(quotes_table.c.vote_count > 0)  # Don't go below 0
            .values(vote_count=quotes_table.c.vote_count - 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def create(self, draft: QuoteDraft) -> Quote:
        """Insert a quote and return it with its assigned ID."""
        with logfire.span("quote_repository.create", user_id=draft.user_id):
            stmt = (
                insert(quotes_table)
                .values(**draft_to_dict(draft))
                .returning(quotes_table)
            )
            result = await self.session.execute(stmt)
            row = result.one()
            await self.session.flush()
            return row_to_quote(row._asdict())

    async def find_by_user_and_content(
        self, user_id: UserId, content: str
    ) -> Optional[Quote]:
        """Find a user's quote with the same text (case-insensitive, trimmed)."""
        stmt = select(quotes_table).where(
            and_(
                quotes_table.c.user_id == user_id,
                func.lower(func.trim(quotes_table.c.content))
                == content.strip().lower(),
            )
        )
        result = await self.session.execute(stmt)
        row = result.first()
        return row_to_quote(row._asdict()) if row else None

    async def update_unvoted(
        self, quote_id: QuoteId, changes: QuoteChanges
    ) -> Optional[Quote]:
        """Apply changes only while the quote has zero votes."""
        with logfire.span("quote_repository.update_unvoted", quote_id=quote_id):
            stmt = (
                update(quotes_table)
                .where(quotes_table.c.id == quote_id)
                .where(quotes_table.c.vote_count == 0)
                .values(**changes_to_dict(changes), updated_at=func.now())
                .returning(quotes_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if row is None:
                logfire.warn("Quote missing or voted on", quote_id=quote_id)
                return None

            await self.session.flush()
            return row_to_quote(row._asdict())

    async def delete_unvoted(self, quote_id: QuoteId) -> bool:
        """Delete a quote only while it has zero votes."""
        stmt = (
            delete(quotes_table)
            .where(quotes_table.c.id == quote_id)
            .where(quotes_table.c.vote_count == 0)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def find_all(
        self, query: QuoteQuery, limit: int = 10, offset: int = 0
    ) -> List[Quote]:
        """Find quotes matching a query, ordered and paginated."""
        with logfire.span(
            "quote_repository.find_all",
            sort_by=query.sort_by.value,
            sort_order=query.sort_order.value,
            limit=limit,
            offset=offset,
        ):
            column = SORT_COLUMNS[query.sort_by]
            direction = asc if query.sort_order == SortDirection.ASC else desc

            stmt = (
                self._filtered(select(quotes_table, voted_user_ids_column()), query)
                .order_by(direction(column), desc(quotes_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_quote(row._asdict()) for row in result.fetchall()]

    async def count(self, query: QuoteQuery) -> int:
        """Count quotes matching a query's filters."""
        stmt = self._filtered(
            select(func.count()).select_from(quotes_table), query
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @staticmethod
    def _filtered(stmt: Select, query: QuoteQuery) -> Select:
        """Apply a query's filters to a select statement."""
        if query.user_id is not None:
            stmt = stmt.where(quotes_table.c.user_id == query.user_id)
        if query.category:
            stmt = stmt.where(quotes_table.c.category == query.category.lower())
        if query.author:
            stmt = stmt.where(quotes_table.c.author.ilike(f"%{query.author}%"))
        if query.search:
            pattern = f"%{query.search}%"
            stmt = stmt.where(
                or_(
                    quotes_table.c.content.ilike(pattern),
                    quotes_table.c.author.ilike(pattern),
                )
            )
        return stmt
