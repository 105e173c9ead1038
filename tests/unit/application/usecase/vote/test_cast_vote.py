"""Unit tests for the vote use cases."""

import pytest

from quotevote.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    CheckEligibilityRequest,
    CheckEligibilityUseCase,
    GetCurrentVoteRequest,
    GetCurrentVoteUseCase,
    RetractVoteRequest,
    RetractVoteUseCase,
)
from quotevote.domain.error import ConflictingActiveVoteError
from quotevote.domain.repository import QuoteRepository
from tests.conftest import make_draft
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_cast_returns_vote_details(self, unit_env):
        # Arrange
        cast_vote = await unit_env.get(CastVoteUseCase)
        quote_repo = await unit_env.get(QuoteRepository)
        quote = await quote_repo.create(make_draft())

        # Act
        response = await cast_vote.execute(
            CastVoteRequest(quote_id=quote.id, user_id="alice")
        )

        # Assert
        assert response.success is True
        assert response.data.quote_id == quote.id
        assert response.data.vote_value == 1

    @pytest.mark.asyncio
    async def test_conflict_propagates_as_domain_error(self, unit_env):
        cast_vote = await unit_env.get(CastVoteUseCase)
        quote_repo = await unit_env.get(QuoteRepository)
        first = await quote_repo.create(make_draft(content="First quote to vote."))
        second = await quote_repo.create(make_draft(content="Second quote to vote."))
        await cast_vote.execute(CastVoteRequest(quote_id=first.id, user_id="alice"))

        with pytest.raises(ConflictingActiveVoteError):
            await cast_vote.execute(
                CastVoteRequest(quote_id=second.id, user_id="alice")
            )


class TestRetractVoteUseCase:
    """Tests for RetractVoteUseCase."""

    @pytest.mark.asyncio
    async def test_retract_reports_removal(self, unit_env):
        cast_vote = await unit_env.get(CastVoteUseCase)
        retract_vote = await unit_env.get(RetractVoteUseCase)
        quote_repo = await unit_env.get(QuoteRepository)
        quote = await quote_repo.create(make_draft())
        await cast_vote.execute(CastVoteRequest(quote_id=quote.id, user_id="alice"))

        response = await retract_vote.execute(
            RetractVoteRequest(quote_id=quote.id, user_id="alice")
        )

        assert response.success is True
        assert response.data.removed is True
        assert await quote_repo.get_vote_count(quote.id) == 0


class TestEligibilityAndCurrentVote:
    """Tests for CheckEligibilityUseCase and GetCurrentVoteUseCase."""

    @pytest.mark.asyncio
    async def test_eligibility_and_current_vote_follow_the_ledger(self, unit_env):
        cast_vote = await unit_env.get(CastVoteUseCase)
        check = await unit_env.get(CheckEligibilityUseCase)
        current = await unit_env.get(GetCurrentVoteUseCase)
        quote_repo = await unit_env.get(QuoteRepository)
        quote = await quote_repo.create(make_draft())

        before = await check.execute(
            CheckEligibilityRequest(quote_id=quote.id, user_id="alice")
        )
        assert before.can_vote is True
        assert await current.execute(GetCurrentVoteRequest(user_id="alice")) is None

        await cast_vote.execute(CastVoteRequest(quote_id=quote.id, user_id="alice"))

        after = await check.execute(
            CheckEligibilityRequest(quote_id=quote.id, user_id="alice")
        )
        assert after.can_vote is False
        assert after.existing_vote_value == 1

        vote = await current.execute(GetCurrentVoteRequest(user_id="alice"))
        assert vote is not None
        assert vote.quote_id == quote.id
        assert vote.vote_count == 1
