"""Quote domain service."""

import logfire

from quotevote.domain.error import (
    DuplicateQuoteError,
    NotAuthorizedError,
    QuoteLockedError,
    QuoteNotFoundError,
)
from quotevote.domain.model.quote import Quote, QuoteChanges, QuoteDraft
from quotevote.domain.repository import QuoteQuery, QuoteRepository
from quotevote.domain.value import QuoteId, UserId

from .base import Service


class QuoteService(Service):
    """Domain service for quote operations.

    Quotes are frozen once voted on. The vote counter is read here but only
    the vote ledger writes it.
    """

    def __init__(self, quote_repository: QuoteRepository) -> None:
        """Initialize quote service.

        Args:
            quote_repository: Quote repository
        """
        self.quote_repository = quote_repository

    async def create_quote(self, draft: QuoteDraft) -> Quote:
        """Create a quote.

        Args:
            draft: Validated quote fields

        Returns:
            Created quote

        Raises:
            DuplicateQuoteError: If the user already created this text
        """
        with logfire.span("quote_service.create_quote", user_id=draft.user_id):
            existing = await self.quote_repository.find_by_user_and_content(
                draft.user_id, draft.content
            )
            if existing:
                logfire.warn(
                    "Duplicate quote attempt",
                    user_id=draft.user_id,
                    existing_quote_id=existing.id,
                )
                raise DuplicateQuoteError()

            quote = await self.quote_repository.create(draft)
            logfire.info("Quote created", quote_id=quote.id, user_id=quote.user_id)
            return quote

    async def get_quote(self, quote_id: QuoteId) -> Quote:
        """Get a quote by ID.

        Raises:
            QuoteNotFoundError: If the quote does not exist
        """
        with logfire.span("quote_service.get_quote", quote_id=quote_id):
            quote = await self.quote_repository.find_by_id(quote_id)
            if quote is None:
                logfire.warn("Quote not found", quote_id=quote_id)
                raise QuoteNotFoundError(quote_id)
            return quote

    async def update_quote(
        self, quote_id: QuoteId, user_id: UserId, changes: QuoteChanges
    ) -> Quote:
        """Update an unvoted quote owned by the user.

        Args:
            quote_id: Quote ID
            user_id: User requesting the change
            changes: Fields to change

        Returns:
            Updated quote

        Raises:
            QuoteNotFoundError: If the quote does not exist
            NotAuthorizedError: If the user doesn't own the quote
            QuoteLockedError: If the quote has votes
        """
        with logfire.span(
            "quote_service.update_quote", quote_id=quote_id, user_id=user_id
        ):
            quote = await self._get_mutable_quote(quote_id, user_id, action="edit")

            updated = await self.quote_repository.update_unvoted(quote_id, changes)
            if updated is None:
                # A vote landed after the ownership check
                logfire.warn("Quote locked by concurrent vote", quote_id=quote_id)
                raise QuoteLockedError(quote.id, action="edit")

            logfire.info("Quote updated", quote_id=quote_id)
            return updated

    async def delete_quote(self, quote_id: QuoteId, user_id: UserId) -> None:
        """Delete an unvoted quote owned by the user.

        Raises:
            QuoteNotFoundError: If the quote does not exist
            NotAuthorizedError: If the user doesn't own the quote
            QuoteLockedError: If the quote has votes
        """
        with logfire.span(
            "quote_service.delete_quote", quote_id=quote_id, user_id=user_id
        ):
            await self._get_mutable_quote(quote_id, user_id, action="delete")

            if not await self.quote_repository.delete_unvoted(quote_id):
                logfire.warn("Quote locked by concurrent vote", quote_id=quote_id)
                raise QuoteLockedError(quote_id, action="delete")

            logfire.info("Quote deleted", quote_id=quote_id)

    async def list_quotes(
        self, query: QuoteQuery, limit: int, offset: int
    ) -> tuple[list[Quote], int]:
        """List quotes matching a query.

        Returns:
            The requested page of quotes and the total match count
        """
        with logfire.span(
            "quote_service.list_quotes",
            sort_by=query.sort_by.value,
            sort_order=query.sort_order.value,
            limit=limit,
            offset=offset,
        ):
            quotes = await self.quote_repository.find_all(
                query, limit=limit, offset=offset
            )
            total = await self.quote_repository.count(query)
            logfire.info("Found quotes", count=len(quotes), total=total)
            return quotes, total

    async def _get_mutable_quote(
        self, quote_id: QuoteId, user_id: UserId, action: str
    ) -> Quote:
        quote = await self.get_quote(quote_id)

        if not quote.is_owned_by(user_id):
            logfire.warn(
                f"Unauthorized quote {action}", quote_id=quote_id, user_id=user_id
            )
            raise NotAuthorizedError("quote", str(quote_id), user_id)

        if quote.is_locked:
            logfire.warn(
                f"Quote {action} blocked by votes",
                quote_id=quote_id,
                vote_count=quote.vote_count,
            )
            raise QuoteLockedError(quote_id, action=action)

        return quote
