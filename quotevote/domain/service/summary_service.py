"""Aggregation read service.

Computes listings and statistics purely from stored quotes and their
ledger-maintained counters. Nothing here writes.
"""

from decimal import ROUND_HALF_UP, Decimal

import logfire

from quotevote.domain.model.summary import CategoryShare, PersonalSummary, TopVotedQuote
from quotevote.domain.repository import SummaryRepository
from quotevote.domain.value import UserId

from .base import Service


def category_percentage(count: int, total: int) -> float:
    """Percentage of ``count`` in ``total`` rounded half-up to two decimals."""
    if total <= 0:
        return 0.0
    ratio = Decimal(count * 100) / Decimal(total)
    return float(ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class SummaryService(Service):
    """Domain service for read-side aggregates."""

    def __init__(self, summary_repository: SummaryRepository, top_voted_limit: int = 3):
        """Initialize summary service.

        Args:
            summary_repository: Aggregate query repository
            top_voted_limit: Number of quotes in the top-voted listing
        """
        self.summary_repository = summary_repository
        self.top_voted_limit = top_voted_limit

    async def get_top_voted(self) -> list[TopVotedQuote]:
        """Get the most voted quotes, newest first among equals."""
        with logfire.span("summary_service.get_top_voted", limit=self.top_voted_limit):
            quotes = await self.summary_repository.find_top_voted(self.top_voted_limit)
            return [
                TopVotedQuote(
                    rank=position,
                    id=quote.id,
                    user_id=quote.user_id,
                    content=quote.content,
                    author=quote.author,
                    category=quote.category,
                    vote_count=quote.vote_count,
                    created_at=quote.created_at,
                )
                for position, quote in enumerate(quotes, start=1)
            ]

    async def get_personal_summary(self, user_id: UserId) -> PersonalSummary:
        """Summarize a user's quotes, votes received, rank and categories."""
        with logfire.span("summary_service.get_personal_summary", user_id=user_id):
            stats = await self.summary_repository.find_user_stats(user_id)
            total_quotes = stats.total_quotes_created
            total_votes = stats.total_votes_received
            ranking = stats.ranking
            categories = stats.categories

            # Denominator is categorized quotes only
            categorized = sum(count for _, count in categories)
            distribution = [
                CategoryShare(
                    category=category,
                    count=count,
                    percentage=category_percentage(count, categorized),
                )
                for category, count in categories
            ]

            logfire.info(
                "Personal summary computed",
                user_id=user_id,
                total_quotes=total_quotes,
                total_votes=total_votes,
                ranking=ranking,
            )
            return PersonalSummary(
                user_id=user_id,
                total_quotes_created=total_quotes,
                total_votes_received=total_votes,
                ranking=ranking,
                category_distribution=distribution,
            )
