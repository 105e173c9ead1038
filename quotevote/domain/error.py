"""Domain layer errors."""

from quotevote.domain.value import ConflictReason


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class QuoteNotFoundError(NotFoundError):
    """Raised when a quote does not exist."""

    def __init__(self, quote_id: int):
        self.quote_id = quote_id
        super().__init__("Quote", str(quote_id))


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to change a quote they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class QuoteLockedError(DomainError):
    """Raised when editing or deleting a quote that has received votes."""

    def __init__(self, quote_id: int, action: str = "edit"):
        self.quote_id = quote_id
        super().__init__(f"Cannot {action} quote {quote_id} that has been voted on")


class DuplicateQuoteError(DomainError):
    """Raised when a user submits the same quote text twice."""

    def __init__(self) -> None:
        super().__init__("You have already created this quote")


class VoteStateConflictError(DomainError):
    """Base for user-correctable vote ledger conflicts.

    Carries a machine-readable ``reason``. These are never retried.
    """

    reason: ConflictReason

    def __init__(self, message: str, quote_id: int):
        self.quote_id = quote_id
        super().__init__(message)


class AlreadyVotedError(VoteStateConflictError):
    """The user's active vote is already on this quote."""

    reason = ConflictReason.ALREADY_VOTED

    def __init__(self, quote_id: int):
        super().__init__("You have already voted for this quote", quote_id)


class ConflictingActiveVoteError(VoteStateConflictError):
    """The user's active vote is on a different quote."""

    reason = ConflictReason.CONFLICTING_ACTIVE_VOTE

    def __init__(self, quote_id: int, current_voted_quote_id: int):
        self.current_voted_quote_id = current_voted_quote_id
        super().__init__(
            "You have already voted for another quote. Please remove your "
            "current vote first before voting for a new quote.",
            quote_id,
        )


class NoActiveVoteError(VoteStateConflictError):
    """The user has no vote on this quote to remove."""

    reason = ConflictReason.NO_ACTIVE_VOTE

    def __init__(self, quote_id: int):
        super().__init__("You have not voted for this quote", quote_id)


class TransientTransactionError(DomainError):
    """A transaction lost a race (serialization failure or deadlock).

    The whole transaction was rolled back and may be re-run.
    """

    pass


class StoreUnavailableError(DomainError):
    """The data store could not complete a transaction.

    The transaction was rolled back; no partial state is visible.
    """

    pass
