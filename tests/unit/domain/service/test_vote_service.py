"""Unit tests for VoteService."""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional
from uuid import uuid4

import pytest

from quotevote.domain.error import (
    AlreadyVotedError,
    ConflictingActiveVoteError,
    NoActiveVoteError,
    QuoteNotFoundError,
    StoreUnavailableError,
    TransientTransactionError,
)
from quotevote.domain.model import Quote, Vote
from quotevote.domain.repository import LedgerTransaction, UnitOfWork
from quotevote.domain.service import VoteService
from quotevote.domain.value import ConflictReason, QuoteId, UserId, VoteId, VoteValue
from quotevote.persistence.repository.inmemory import (
    InMemoryQuoteRepository,
    InMemoryUnitOfWork,
    InMemoryVoteRepository,
)
from tests.conftest import make_draft
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def create_quote(
    quotes: InMemoryQuoteRepository, owner: str = "owner", text: str = "first"
) -> Quote:
    return await quotes.create(
        make_draft(user_id=owner, content=f"A quote about {text} things, long enough.")
    )


async def assert_ledger_consistent(
    quotes: InMemoryQuoteRepository, votes: InMemoryVoteRepository
) -> None:
    """Every counter matches its vote rows and no user holds two votes."""
    all_votes = votes.all()
    for quote in quotes.all():
        assert quote.vote_count == await votes.count_by_quote(quote.id)
        assert quote.vote_count >= 0

    voters = [v.user_id for v in all_votes]
    assert len(voters) == len(set(voters))


class TestCast:
    """Tests for cast method."""

    @pytest.mark.asyncio
    async def test_cast_creates_vote_and_increments_counter(self, unit_env):
        """Casting should store one vote and bump the counter by exactly one."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        votes = await unit_env.get(InMemoryVoteRepository)
        quote = await create_quote(quotes)
        user_id = UserId("alice")

        # Act
        vote = await vote_service.cast(quote.id, user_id)

        # Assert
        assert vote.quote_id == quote.id
        assert vote.user_id == user_id
        assert vote.vote_value == VoteValue.UP
        assert await votes.find_by_user(user_id) == vote
        assert await quotes.get_vote_count(quote.id) == 1
        await assert_ledger_consistent(quotes, votes)

    @pytest.mark.asyncio
    async def test_cast_on_missing_quote_raises_not_found(self, unit_env):
        """Casting on a quote that doesn't exist should fail without a vote."""
        vote_service = await unit_env.get(VoteService)
        votes = await unit_env.get(InMemoryVoteRepository)

        with pytest.raises(QuoteNotFoundError):
            await vote_service.cast(QuoteId(999), UserId("alice"))

        assert votes.all() == []

    @pytest.mark.asyncio
    async def test_cast_twice_on_same_quote_raises_already_voted(self, unit_env):
        """A second cast on the same quote should leave the counter alone."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        quote = await create_quote(quotes)
        await vote_service.cast(quote.id, UserId("alice"))

        # Act & Assert
        with pytest.raises(AlreadyVotedError) as exc_info:
            await vote_service.cast(quote.id, UserId("alice"))

        assert exc_info.value.reason == ConflictReason.ALREADY_VOTED
        assert await quotes.get_vote_count(quote.id) == 1

    @pytest.mark.asyncio
    async def test_cast_on_other_quote_names_current_vote(self, unit_env):
        """Casting while holding a vote elsewhere should report where it is."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        votes = await unit_env.get(InMemoryVoteRepository)
        first = await create_quote(quotes, text="first")
        second = await create_quote(quotes, text="second")
        await vote_service.cast(first.id, UserId("alice"))

        # Act & Assert
        with pytest.raises(ConflictingActiveVoteError) as exc_info:
            await vote_service.cast(second.id, UserId("alice"))

        assert exc_info.value.current_voted_quote_id == first.id
        assert exc_info.value.reason == ConflictReason.CONFLICTING_ACTIVE_VOTE
        assert await quotes.get_vote_count(second.id) == 0
        await assert_ledger_consistent(quotes, votes)


class TestRetract:
    """Tests for retract method."""

    @pytest.mark.asyncio
    async def test_cast_then_retract_restores_counter(self, unit_env):
        """Retracting should delete the vote and undo the increment."""
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        votes = await unit_env.get(InMemoryVoteRepository)
        quote = await create_quote(quotes)
        await vote_service.cast(quote.id, UserId("alice"))

        removed = await vote_service.retract(quote.id, UserId("alice"))

        assert removed.quote_id == quote.id
        assert await votes.find_by_user(UserId("alice")) is None
        assert await quotes.get_vote_count(quote.id) == 0
        await assert_ledger_consistent(quotes, votes)

    @pytest.mark.asyncio
    async def test_retract_without_vote_raises_no_active_vote(self, unit_env):
        """Retracting with no vote should fail and keep the counter at zero."""
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        quote = await create_quote(quotes)

        with pytest.raises(NoActiveVoteError) as exc_info:
            await vote_service.retract(quote.id, UserId("alice"))

        assert exc_info.value.reason == ConflictReason.NO_ACTIVE_VOTE
        assert await quotes.get_vote_count(quote.id) == 0

    @pytest.mark.asyncio
    async def test_retract_on_other_quote_raises_no_active_vote(self, unit_env):
        """A vote on another quote doesn't count as a vote on this one."""
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        first = await create_quote(quotes, text="first")
        second = await create_quote(quotes, text="second")
        await vote_service.cast(first.id, UserId("alice"))

        with pytest.raises(NoActiveVoteError):
            await vote_service.retract(second.id, UserId("alice"))

        assert await quotes.get_vote_count(first.id) == 1
        assert await quotes.get_vote_count(second.id) == 0

    @pytest.mark.asyncio
    async def test_retract_on_missing_quote_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(QuoteNotFoundError):
            await vote_service.retract(QuoteId(42), UserId("alice"))

    @pytest.mark.asyncio
    async def test_retract_with_counter_already_at_zero_stays_at_zero(
        self, unit_env
    ):
        """A vote row left behind with a zero counter retracts to zero, not -1."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        votes = await unit_env.get(InMemoryVoteRepository)
        quote = await create_quote(quotes)
        await votes.save(
            Vote(
                id=VoteId(uuid4()),
                user_id=UserId("alice"),
                quote_id=quote.id,
                vote_value=VoteValue.UP,
                created_at=datetime.now(timezone.utc),
            )
        )

        # Act
        removed = await vote_service.retract(quote.id, UserId("alice"))

        # Assert
        assert removed.quote_id == quote.id
        assert await quotes.get_vote_count(quote.id) == 0
        with pytest.raises(NoActiveVoteError):
            await vote_service.retract(quote.id, UserId("alice"))
        assert await quotes.get_vote_count(quote.id) == 0
        await assert_ledger_consistent(quotes, votes)

    @pytest.mark.asyncio
    async def test_concurrent_retracts_remove_the_vote_once(self, unit_env):
        """Two racing retracts of one vote: one removes it, the other finds none."""
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        votes = await unit_env.get(InMemoryVoteRepository)
        quote = await create_quote(quotes)
        await vote_service.cast(quote.id, UserId("alice"))

        results = await asyncio.gather(
            vote_service.retract(quote.id, UserId("alice")),
            vote_service.retract(quote.id, UserId("alice")),
            return_exceptions=True,
        )

        removed = [r for r in results if isinstance(r, Vote)]
        missing = [r for r in results if isinstance(r, NoActiveVoteError)]
        assert len(removed) == 1
        assert len(missing) == 1
        assert await quotes.get_vote_count(quote.id) == 0
        await assert_ledger_consistent(quotes, votes)


class TestSwitchingVotes:
    """The full cast / conflict / retract / re-cast sequence."""

    @pytest.mark.asyncio
    async def test_switching_requires_retracting_first(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        votes = await unit_env.get(InMemoryVoteRepository)
        q = await create_quote(quotes, text="q")
        r = await create_quote(quotes, text="r")
        alice = UserId("alice")

        # Cast on Q
        await vote_service.cast(q.id, alice)
        assert await quotes.get_vote_count(q.id) == 1
        current = await vote_service.get_current_vote(alice)
        assert current is not None and current.quote_id == q.id

        # Cast on R is blocked by the vote on Q
        with pytest.raises(ConflictingActiveVoteError) as exc_info:
            await vote_service.cast(r.id, alice)
        assert exc_info.value.current_voted_quote_id == q.id

        # Retract Q
        await vote_service.retract(q.id, alice)
        assert await quotes.get_vote_count(q.id) == 0
        assert await vote_service.get_current_vote(alice) is None

        # Cast on R now succeeds
        await vote_service.cast(r.id, alice)
        assert await quotes.get_vote_count(r.id) == 1
        await assert_ledger_consistent(quotes, votes)


class TestCheckEligibility:
    """Tests for check_eligibility method."""

    @pytest.mark.asyncio
    async def test_fresh_quote_is_votable(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        quote = await create_quote(quotes)

        eligibility = await vote_service.check_eligibility(quote.id, UserId("alice"))

        assert eligibility.can_vote is True
        assert eligibility.quote_has_zero_votes is True
        assert eligibility.user_has_not_voted is True
        assert eligibility.existing_vote_value is None

    @pytest.mark.asyncio
    async def test_quote_with_votes_is_never_votable(self, unit_env):
        """A quote with two votes reports can_vote=False to a new voter."""
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        quote = await create_quote(quotes)
        await vote_service.cast(quote.id, UserId("bob"))
        await vote_service.cast(quote.id, UserId("carol"))

        eligibility = await vote_service.check_eligibility(quote.id, UserId("alice"))

        assert eligibility.can_vote is False
        assert eligibility.quote_has_zero_votes is False
        assert eligibility.user_has_not_voted is True

    @pytest.mark.asyncio
    async def test_own_vote_is_reported(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        quote = await create_quote(quotes)
        await vote_service.cast(quote.id, UserId("alice"))

        eligibility = await vote_service.check_eligibility(quote.id, UserId("alice"))

        assert eligibility.can_vote is False
        assert eligibility.user_has_not_voted is False
        assert eligibility.existing_vote_value == VoteValue.UP

    @pytest.mark.asyncio
    async def test_missing_quote_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(QuoteNotFoundError):
            await vote_service.check_eligibility(QuoteId(7), UserId("alice"))


class TestGetCurrentVote:
    """Tests for get_current_vote method."""

    @pytest.mark.asyncio
    async def test_returns_none_without_vote(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        assert await vote_service.get_current_vote(UserId("alice")) is None

    @pytest.mark.asyncio
    async def test_includes_quote_summary(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        quote = await create_quote(quotes)
        await vote_service.cast(quote.id, UserId("alice"))

        current = await vote_service.get_current_vote(UserId("alice"))

        assert current is not None
        assert current.quote_id == quote.id
        assert current.content == quote.content
        assert current.author == quote.author
        assert current.vote_count == 1


class TestConcurrentCasts:
    """Concurrent casts by one user must leave exactly one vote."""

    @pytest.mark.asyncio
    async def test_two_concurrent_casts_one_wins(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        votes = await unit_env.get(InMemoryVoteRepository)
        first = await create_quote(quotes, text="first")
        second = await create_quote(quotes, text="second")
        alice = UserId("alice")

        # Act
        results = await asyncio.gather(
            vote_service.cast(first.id, alice),
            vote_service.cast(second.id, alice),
            return_exceptions=True,
        )

        # Assert
        winners = [r for r in results if isinstance(r, Vote)]
        losers = [r for r in results if isinstance(r, ConflictingActiveVoteError)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert losers[0].current_voted_quote_id == winners[0].quote_id
        await assert_ledger_consistent(quotes, votes)

    @pytest.mark.asyncio
    async def test_many_users_casting_at_once_keep_counter_exact(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        quotes = await unit_env.get(InMemoryQuoteRepository)
        votes = await unit_env.get(InMemoryVoteRepository)
        quote = await create_quote(quotes)

        await asyncio.gather(
            *(vote_service.cast(quote.id, UserId(f"user-{i}")) for i in range(20))
        )

        assert await quotes.get_vote_count(quote.id) == 20
        await assert_ledger_consistent(quotes, votes)


class StaleReadVoteRepository(InMemoryVoteRepository):
    """Misses the user's vote on the first lookup, like a read that raced
    a concurrent commit."""

    def __init__(self) -> None:
        super().__init__()
        self.stale_reads = 1

    async def find_by_user(self, user_id: UserId) -> Optional[Vote]:
        if self.stale_reads > 0:
            self.stale_reads -= 1
            return None
        return await super().find_by_user(user_id)


class TestUniqueConstraintTranslation:
    """A duplicate caught by the store is reported against the winning vote."""

    @pytest.mark.asyncio
    async def test_integrity_error_becomes_conflicting_active_vote(self):
        # Arrange
        quotes = InMemoryQuoteRepository()
        votes = StaleReadVoteRepository()
        vote_service = VoteService(InMemoryUnitOfWork(quotes, votes))
        first = await create_quote(quotes, text="first")
        second = await create_quote(quotes, text="second")

        votes.stale_reads = 0
        await vote_service.cast(first.id, UserId("alice"))
        votes.stale_reads = 1

        # Act & Assert
        with pytest.raises(ConflictingActiveVoteError) as exc_info:
            await vote_service.cast(second.id, UserId("alice"))

        assert exc_info.value.current_voted_quote_id == first.id
        assert await quotes.get_vote_count(second.id) == 0
        await assert_ledger_consistent(quotes, votes)

    @pytest.mark.asyncio
    async def test_integrity_error_on_same_quote_becomes_already_voted(self):
        quotes = InMemoryQuoteRepository()
        votes = StaleReadVoteRepository()
        vote_service = VoteService(InMemoryUnitOfWork(quotes, votes))
        quote = await create_quote(quotes)

        votes.stale_reads = 0
        await vote_service.cast(quote.id, UserId("alice"))
        votes.stale_reads = 1

        with pytest.raises(AlreadyVotedError):
            await vote_service.cast(quote.id, UserId("alice"))

        assert await quotes.get_vote_count(quote.id) == 1


class FlakyUnitOfWork(UnitOfWork):
    """Fails the first ``failures`` transactions at commit time."""

    def __init__(self, inner: UnitOfWork, failures: int) -> None:
        self.inner = inner
        self.failures = failures
        self.attempts = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[LedgerTransaction]:
        async with self.inner.transaction() as tx:
            self.attempts += 1
            yield tx
            if self.failures > 0:
                self.failures -= 1
                raise TransientTransactionError("could not serialize access")


class TestTransactionRetry:
    """Transient failures re-run the whole transaction."""

    @pytest.mark.asyncio
    async def test_retries_once_after_serialization_failure(self):
        quotes = InMemoryQuoteRepository()
        votes = InMemoryVoteRepository()
        unit_of_work = FlakyUnitOfWork(InMemoryUnitOfWork(quotes, votes), failures=1)
        vote_service = VoteService(unit_of_work, max_transaction_retries=1)
        quote = await create_quote(quotes)

        vote = await vote_service.cast(quote.id, UserId("alice"))

        assert vote.quote_id == quote.id
        assert unit_of_work.attempts == 2
        assert await quotes.get_vote_count(quote.id) == 1
        await assert_ledger_consistent(quotes, votes)

    @pytest.mark.asyncio
    async def test_gives_up_after_retry_budget(self):
        quotes = InMemoryQuoteRepository()
        votes = InMemoryVoteRepository()
        unit_of_work = FlakyUnitOfWork(InMemoryUnitOfWork(quotes, votes), failures=2)
        vote_service = VoteService(unit_of_work, max_transaction_retries=1)
        quote = await create_quote(quotes)

        with pytest.raises(TransientTransactionError):
            await vote_service.cast(quote.id, UserId("alice"))

        # Both attempts were rolled back
        assert votes.all() == []
        assert await quotes.get_vote_count(quote.id) == 0

    @pytest.mark.asyncio
    async def test_state_conflicts_are_not_retried(self):
        quotes = InMemoryQuoteRepository()
        votes = InMemoryVoteRepository()
        unit_of_work = FlakyUnitOfWork(InMemoryUnitOfWork(quotes, votes), failures=0)
        vote_service = VoteService(unit_of_work, max_transaction_retries=3)
        quote = await create_quote(quotes)

        with pytest.raises(NoActiveVoteError):
            await vote_service.retract(quote.id, UserId("alice"))

        assert unit_of_work.attempts == 1


class BrokenCounterQuoteRepository(InMemoryQuoteRepository):
    """Fails every counter increment, after the vote row is written."""

    async def increment_vote_count(self, quote_id: QuoteId) -> None:
        raise StoreUnavailableError("connection lost")


class TestRollback:
    """A failure part-way through a write leaves no partial state."""

    @pytest.mark.asyncio
    async def test_failed_increment_discards_vote_row(self):
        quotes = BrokenCounterQuoteRepository()
        votes = InMemoryVoteRepository()
        vote_service = VoteService(InMemoryUnitOfWork(quotes, votes))
        quote = await create_quote(quotes)

        with pytest.raises(StoreUnavailableError):
            await vote_service.cast(quote.id, UserId("alice"))

        assert votes.all() == []
        assert await quotes.get_vote_count(quote.id) == 0

    @pytest.mark.asyncio
    async def test_cancelled_cast_rolls_back(self):
        """Cancelling a cast mid-transaction must not leave the vote behind."""
        started = asyncio.Event()
        release = asyncio.Event()

        class SlowQuoteRepository(InMemoryQuoteRepository):
            async def increment_vote_count(self, quote_id: QuoteId) -> None:
                started.set()
                await release.wait()
                await super().increment_vote_count(quote_id)

        quotes = SlowQuoteRepository()
        votes = InMemoryVoteRepository()
        vote_service = VoteService(InMemoryUnitOfWork(quotes, votes))
        quote = await create_quote(quotes)

        task = asyncio.create_task(vote_service.cast(quote.id, UserId("alice")))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert votes.all() == []
        assert await quotes.get_vote_count(quote.id) == 0
