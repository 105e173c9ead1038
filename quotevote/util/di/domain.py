"""Domain layer DI providers."""

from dishka import Scope, provide

from quotevote.config import AuthSettings, VotingSettings
from quotevote.domain.repository import QuoteRepository, SummaryRepository, UnitOfWork
from quotevote.domain.service import (
    JWTService,
    QuoteService,
    SummaryService,
    VoteService,
)
from quotevote.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    The vote service opens its own transactions through the unit of work.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_vote_service(
        self, unit_of_work: UnitOfWork, voting_settings: VotingSettings
    ) -> VoteService:
        """Provide vote ledger domain service."""
        return VoteService(
            unit_of_work=unit_of_work,
            max_transaction_retries=voting_settings.max_transaction_retries,
        )

    @provide
    def get_quote_service(self, quote_repository: QuoteRepository) -> QuoteService:
        """Provide quote domain service."""
        return QuoteService(quote_repository=quote_repository)

    @provide
    def get_summary_service(
        self, summary_repository: SummaryRepository, voting_settings: VotingSettings
    ) -> SummaryService:
        """Provide aggregation domain service."""
        return SummaryService(
            summary_repository=summary_repository,
            top_voted_limit=voting_settings.top_voted_limit,
        )
