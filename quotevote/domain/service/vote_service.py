"""Vote ledger domain service.

Every write runs as one transaction: the caller's vote is looked up, the
rules are checked, and the vote row and the quote counter change together
or not at all. Checks made here are re-done under each write's own
transaction; an earlier eligibility answer is never trusted.
"""

from datetime import datetime, timezone
from functools import partial
from typing import Awaitable, Callable, Optional, TypeVar
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from quotevote.domain.error import (
    AlreadyVotedError,
    ConflictingActiveVoteError,
    NoActiveVoteError,
    QuoteNotFoundError,
    TransientTransactionError,
)
from quotevote.domain.model.vote import CurrentVote, Vote, VoteEligibility
from quotevote.domain.repository import LedgerTransaction, UnitOfWork
from quotevote.domain.value import QuoteId, UserId, VoteId, VoteValue

from .base import Service

T = TypeVar("T")


class VoteService(Service):
    """Domain service for the single-active-vote ledger."""

    def __init__(
        self, unit_of_work: UnitOfWork, max_transaction_retries: int = 1
    ) -> None:
        """Initialize vote service.

        Args:
            unit_of_work: Scoped transaction factory for ledger access
            max_transaction_retries: Re-runs allowed after a transient
                serialization failure or deadlock
        """
        self.unit_of_work = unit_of_work
        self.max_transaction_retries = max_transaction_retries

    async def cast(self, quote_id: QuoteId, user_id: UserId) -> Vote:
        """Cast the user's vote on a quote.

        Inserts the vote row and increments the quote counter by one in a
        single transaction.

        Args:
            quote_id: Quote ID
            user_id: User ID

        Returns:
            Created vote

        Raises:
            QuoteNotFoundError: If the quote does not exist
            AlreadyVotedError: If the user's vote is already on this quote
            ConflictingActiveVoteError: If the user's vote is on another quote
        """
        with logfire.span("vote_service.cast", quote_id=quote_id, user_id=user_id):
            attempt = 0
            while True:
                attempt += 1
                try:
                    vote = await self._run_in_transaction(
                        "cast", partial(self._cast, quote_id, user_id)
                    )
                    logfire.info("Vote cast", quote_id=quote_id, user_id=user_id)
                    return vote
                except IntegrityError:
                    # A concurrent cast by the same user committed first.
                    # Report against whatever vote actually won.
                    logfire.warn(
                        "Vote unique constraint violated",
                        quote_id=quote_id,
                        user_id=user_id,
                    )
                    winner = await self._run_in_transaction(
                        "cast.resolve_conflict", partial(self._find_vote, user_id)
                    )
                    if winner is not None:
                        self._reject_existing_vote(winner, quote_id)
                    if attempt > self.max_transaction_retries:
                        raise TransientTransactionError(
                            "Vote changed concurrently, please retry"
                        )

    async def retract(self, quote_id: QuoteId, user_id: UserId) -> Vote:
        """Remove the user's vote from a quote.

        Deletes the vote row and decrements the quote counter (minimum 0)
        in a single transaction.

        Args:
            quote_id: Quote ID
            user_id: User ID

        Returns:
            The removed vote

        Raises:
            QuoteNotFoundError: If the quote does not exist
            NoActiveVoteError: If the user has no vote on this quote
        """
        with logfire.span("vote_service.retract", quote_id=quote_id, user_id=user_id):
            vote = await self._run_in_transaction(
                "retract", partial(self._retract, quote_id, user_id)
            )
            logfire.info("Vote retracted", quote_id=quote_id, user_id=user_id)
            return vote

    async def check_eligibility(
        self, quote_id: QuoteId, user_id: UserId
    ) -> VoteEligibility:
        """Answer whether a cast would currently succeed.

        The answer is a point-in-time hint; ``cast`` re-validates.

        Raises:
            QuoteNotFoundError: If the quote does not exist
        """
        with logfire.span(
            "vote_service.check_eligibility", quote_id=quote_id, user_id=user_id
        ):
            eligibility = await self._run_in_transaction(
                "check_eligibility",
                partial(self._check_eligibility, quote_id, user_id),
            )
            logfire.debug(
                "Vote eligibility checked",
                quote_id=quote_id,
                user_id=user_id,
                can_vote=eligibility.can_vote,
            )
            return eligibility

    async def get_current_vote(self, user_id: UserId) -> Optional[CurrentVote]:
        """Get the user's active vote with the voted quote's summary.

        Returns:
            The current vote, or None if the user has not voted
        """
        with logfire.span("vote_service.get_current_vote", user_id=user_id):
            return await self._run_in_transaction(
                "get_current_vote", partial(self._current_vote, user_id)
            )

    async def _cast(
        self, quote_id: QuoteId, user_id: UserId, tx: LedgerTransaction
    ) -> Vote:
        if not await tx.quotes.exists(quote_id):
            logfire.warn("Vote on non-existent quote", quote_id=quote_id)
            raise QuoteNotFoundError(quote_id)

        existing = await tx.votes.find_by_user(user_id)
        if existing is not None:
            self._reject_existing_vote(existing, quote_id)

        vote = Vote(
            id=VoteId(uuid4()),
            user_id=user_id,
            quote_id=quote_id,
            vote_value=VoteValue.UP,
            created_at=datetime.now(timezone.utc),
        )
        # Raises IntegrityError if a concurrent cast committed first
        saved = await tx.votes.save(vote)
        await tx.quotes.increment_vote_count(quote_id)
        return saved

    async def _retract(
        self, quote_id: QuoteId, user_id: UserId, tx: LedgerTransaction
    ) -> Vote:
        if not await tx.quotes.exists(quote_id):
            logfire.warn("Vote removal on non-existent quote", quote_id=quote_id)
            raise QuoteNotFoundError(quote_id)

        vote = await tx.votes.find_by_user_and_quote(user_id, quote_id)
        if vote is None:
            logfire.info("No vote to remove", quote_id=quote_id, user_id=user_id)
            raise NoActiveVoteError(quote_id)

        # A concurrent retract may have deleted the row after our read
        if not await tx.votes.delete(vote.id):
            logfire.info("Vote already removed", quote_id=quote_id, user_id=user_id)
            raise NoActiveVoteError(quote_id)

        await tx.quotes.decrement_vote_count(quote_id)
        return vote

    async def _check_eligibility(
        self, quote_id: QuoteId, user_id: UserId, tx: LedgerTransaction
    ) -> VoteEligibility:
        vote_count = await tx.quotes.get_vote_count(quote_id)
        if vote_count is None:
            raise QuoteNotFoundError(quote_id)

        existing = await tx.votes.find_by_user_and_quote(user_id, quote_id)
        return VoteEligibility(
            quote_id=quote_id,
            quote_has_zero_votes=vote_count == 0,
            user_has_not_voted=existing is None,
            existing_vote_value=existing.vote_value if existing else None,
        )

    async def _current_vote(
        self, user_id: UserId, tx: LedgerTransaction
    ) -> Optional[CurrentVote]:
        vote = await tx.votes.find_by_user(user_id)
        if vote is None:
            return None

        quote = await tx.quotes.find_by_id(vote.quote_id)
        if quote is None:
            # Votes cascade with their quote, so this only happens if the
            # row vanished between the two reads.
            logfire.warn(
                "Current vote references missing quote", quote_id=vote.quote_id
            )
            return None

        return CurrentVote(
            id=vote.id,
            quote_id=vote.quote_id,
            vote_value=vote.vote_value,
            created_at=vote.created_at,
            content=quote.content,
            author=quote.author,
            vote_count=quote.vote_count,
        )

    async def _find_vote(
        self, user_id: UserId, tx: LedgerTransaction
    ) -> Optional[Vote]:
        return await tx.votes.find_by_user(user_id)

    @staticmethod
    def _reject_existing_vote(existing: Vote, quote_id: QuoteId) -> None:
        """Raise the conflict matching the user's existing vote."""
        if existing.quote_id == quote_id:
            logfire.warn(
                "Duplicate vote attempt", user_id=existing.user_id, quote_id=quote_id
            )
            raise AlreadyVotedError(quote_id)

        logfire.warn(
            "Vote blocked by active vote on another quote",
            user_id=existing.user_id,
            quote_id=quote_id,
            current_voted_quote_id=existing.quote_id,
        )
        raise ConflictingActiveVoteError(quote_id, existing.quote_id)

    async def _run_in_transaction(
        self, operation: str, work: Callable[[LedgerTransaction], Awaitable[T]]
    ) -> T:
        """Run ``work`` in one ledger transaction.

        Transient serialization failures re-run the whole transaction up to
        ``max_transaction_retries`` times. Everything else propagates after
        the unit of work has rolled back.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                async with self.unit_of_work.transaction() as tx:
                    return await work(tx)
            except TransientTransactionError as e:
                if attempt > self.max_transaction_retries:
                    logfire.error(
                        "Ledger transaction failed after retries",
                        operation=operation,
                        attempts=attempt,
                        error=str(e),
                    )
                    raise
                logfire.warn(
                    "Retrying ledger transaction",
                    operation=operation,
                    attempt=attempt,
                    error=str(e),
                )
