"""Quote use cases."""

from .common import QuoteItem
from .create_quote import CreateQuoteRequest, CreateQuoteUseCase
from .delete_quote import DeleteQuoteRequest, DeleteQuoteResponse, DeleteQuoteUseCase
from .get_quote import GetQuoteRequest, GetQuoteUseCase
from .list_quotes import ListQuotesRequest, ListQuotesResponse, ListQuotesUseCase
from .update_quote import UpdateQuoteRequest, UpdateQuoteUseCase

__all__ = [
    "CreateQuoteRequest",
    "CreateQuoteUseCase",
    "DeleteQuoteRequest",
    "DeleteQuoteResponse",
    "DeleteQuoteUseCase",
    "GetQuoteRequest",
    "GetQuoteUseCase",
    "ListQuotesRequest",
    "ListQuotesResponse",
    "ListQuotesUseCase",
    "QuoteItem",
    "UpdateQuoteRequest",
    "UpdateQuoteUseCase",
]
