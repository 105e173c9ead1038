"""Application layer DI providers."""

from dishka import Scope, provide

from quotevote.application.usecase.quote import (
    CreateQuoteUseCase,
    DeleteQuoteUseCase,
    GetQuoteUseCase,
    ListQuotesUseCase,
    UpdateQuoteUseCase,
)
from quotevote.application.usecase.summary import (
    GetPersonalSummaryUseCase,
    GetTopVotedUseCase,
)
from quotevote.application.usecase.vote import (
    CastVoteUseCase,
    CheckEligibilityUseCase,
    GetCurrentVoteUseCase,
    RetractVoteUseCase,
)
from quotevote.domain.service import QuoteService, SummaryService, VoteService
from quotevote.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_retract_vote_use_case(
        self, vote_service: VoteService
    ) -> RetractVoteUseCase:
        """Provide retract vote use case."""
        return RetractVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_check_eligibility_use_case(
        self, vote_service: VoteService
    ) -> CheckEligibilityUseCase:
        """Provide eligibility check use case."""
        return CheckEligibilityUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_current_vote_use_case(
        self, vote_service: VoteService
    ) -> GetCurrentVoteUseCase:
        """Provide current vote use case."""
        return GetCurrentVoteUseCase(vote_service=vote_service)

    # Quote use cases
    @provide(scope=Scope.REQUEST)
    def get_create_quote_use_case(
        self, quote_service: QuoteService
    ) -> CreateQuoteUseCase:
        """Provide create quote use case."""
        return CreateQuoteUseCase(quote_service=quote_service)

    @provide(scope=Scope.REQUEST)
    def get_get_quote_use_case(self, quote_service: QuoteService) -> GetQuoteUseCase:
        """Provide get quote use case."""
        return GetQuoteUseCase(quote_service=quote_service)

    @provide(scope=Scope.REQUEST)
    def get_update_quote_use_case(
        self, quote_service: QuoteService
    ) -> UpdateQuoteUseCase:
        """Provide update quote use case."""
        return UpdateQuoteUseCase(quote_service=quote_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_quote_use_case(
        self, quote_service: QuoteService
    ) -> DeleteQuoteUseCase:
        """Provide delete quote use case."""
        return DeleteQuoteUseCase(quote_service=quote_service)

    @provide(scope=Scope.REQUEST)
    def get_list_quotes_use_case(
        self, quote_service: QuoteService
    ) -> ListQuotesUseCase:
        """Provide list quotes use case."""
        return ListQuotesUseCase(quote_service=quote_service)

    # Summary use cases
    @provide(scope=Scope.REQUEST)
    def get_top_voted_use_case(
        self, summary_service: SummaryService
    ) -> GetTopVotedUseCase:
        """Provide top voted use case."""
        return GetTopVotedUseCase(summary_service=summary_service)

    @provide(scope=Scope.REQUEST)
    def get_personal_summary_use_case(
        self, summary_service: SummaryService
    ) -> GetPersonalSummaryUseCase:
        """Provide personal summary use case."""
        return GetPersonalSummaryUseCase(summary_service=summary_service)
