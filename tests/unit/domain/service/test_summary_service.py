"""Unit tests for SummaryService."""

import pytest

from quotevote.domain.service import QuoteService, SummaryService, VoteService
from quotevote.domain.service.summary_service import category_percentage
from quotevote.domain.value import UserId
from quotevote.persistence.repository.inmemory import InMemoryQuoteRepository
from tests.conftest import make_draft
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def give_votes(quotes: InMemoryQuoteRepository, quote_id, count: int) -> None:
    """Bump a counter directly; these tests only read counters."""
    for _ in range(count):
        await quotes.increment_vote_count(quote_id)


class TestCategoryPercentage:
    """Tests for category_percentage helper."""

    def test_rounds_to_two_decimals(self):
        assert category_percentage(1, 3) == 33.33
        assert category_percentage(2, 3) == 66.67

    def test_rounds_half_up(self):
        assert category_percentage(1, 800) == 0.13

    def test_empty_total_is_zero(self):
        assert category_percentage(0, 0) == 0.0


class TestTopVoted:
    """Tests for get_top_voted method."""

    @pytest.mark.asyncio
    async def test_orders_by_votes_then_newest(self, unit_env):
        # Arrange
        summary_service = await unit_env.get(SummaryService)
        quote_service = await unit_env.get(QuoteService)
        vote_service = await unit_env.get(VoteService)

        low = await quote_service.create_quote(make_draft(content="Low votes quote."))
        old_tie = await quote_service.create_quote(make_draft(content="Old tie quote."))
        new_tie = await quote_service.create_quote(make_draft(content="New tie quote."))
        top = await quote_service.create_quote(make_draft(content="Top voted quote."))
        await quote_service.create_quote(make_draft(content="Unvoted quote here."))

        for i in range(3):
            await vote_service.cast(top.id, UserId(f"top-{i}"))
        for i in range(2):
            await vote_service.cast(old_tie.id, UserId(f"old-{i}"))
            await vote_service.cast(new_tie.id, UserId(f"new-{i}"))
        await vote_service.cast(low.id, UserId("low-0"))

        # Act
        result = await summary_service.get_top_voted()

        # Assert - default limit is 3
        assert [q.id for q in result] == [top.id, new_tie.id, old_tie.id]
        assert [q.rank for q in result] == [1, 2, 3]
        assert [q.vote_count for q in result] == [3, 2, 2]

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_list(self, unit_env):
        summary_service = await unit_env.get(SummaryService)

        assert await summary_service.get_top_voted() == []


class TestPersonalSummary:
    """Tests for get_personal_summary method."""

    @pytest.mark.asyncio
    async def test_totals_and_category_distribution(self, unit_env):
        # Arrange
        summary_service = await unit_env.get(SummaryService)
        quote_service = await unit_env.get(QuoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)

        first = await quote_service.create_quote(
            make_draft(user_id="alice", content="Life quote one.", category="Life")
        )
        await quote_service.create_quote(
            make_draft(user_id="alice", content="Life quote two.", category="life")
        )
        await quote_service.create_quote(
            make_draft(user_id="alice", content="Humor quote one.", category="humor")
        )
        await quote_service.create_quote(
            make_draft(user_id="alice", content="Quote with no category.")
        )
        await give_votes(quotes, first.id, 4)

        # Act
        summary = await summary_service.get_personal_summary(UserId("alice"))

        # Assert
        assert summary.total_quotes_created == 4
        assert summary.total_votes_received == 4
        assert summary.ranking == 1
        distribution = [
            (share.category, share.count, share.percentage)
            for share in summary.category_distribution
        ]
        assert distribution == [("life", 2, 66.67), ("humor", 1, 33.33)]

    @pytest.mark.asyncio
    async def test_ranking_is_dense(self, unit_env):
        """Users tied on total votes share a rank and the next rank follows on."""
        summary_service = await unit_env.get(SummaryService)
        quote_service = await unit_env.get(QuoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)

        for user, votes in [("alice", 3), ("bob", 3), ("carol", 1)]:
            quote = await quote_service.create_quote(
                make_draft(user_id=user, content=f"A quote written by {user}.")
            )
            await give_votes(quotes, quote.id, votes)

        alice = await summary_service.get_personal_summary(UserId("alice"))
        bob = await summary_service.get_personal_summary(UserId("bob"))
        carol = await summary_service.get_personal_summary(UserId("carol"))

        assert alice.ranking == 1
        assert bob.ranking == 1
        assert carol.ranking == 2

    @pytest.mark.asyncio
    async def test_user_without_votes_is_unranked(self, unit_env):
        summary_service = await unit_env.get(SummaryService)
        quote_service = await unit_env.get(QuoteService)
        await quote_service.create_quote(make_draft(user_id="dave"))

        summary = await summary_service.get_personal_summary(UserId("dave"))

        assert summary.total_quotes_created == 1
        assert summary.total_votes_received == 0
        assert summary.ranking is None
        assert summary.category_distribution == []
