"""Aggregation read repository interface."""

from abc import ABC, abstractmethod
from typing import List

from quotevote.domain.model.quote import Quote
from quotevote.domain.model.summary import UserStats
from quotevote.domain.value import UserId


class SummaryRepository(ABC):
    """Read-only aggregate queries over quotes and their counters.

    Nothing here writes. Reads only see committed ledger state.
    """

    @abstractmethod
    async def find_top_voted(self, limit: int) -> List[Quote]:
        """Quotes ordered by vote count, then newest first."""
        pass

    @abstractmethod
    async def find_user_stats(self, user_id: UserId) -> UserStats:
        """Read every per-user aggregate from one committed snapshot.

        Covers quotes created, votes received, the user's dense rank among
        users with at least one vote (None for zero votes) and the user's
        quote count per lower-cased category, largest count first.
        Uncategorized quotes are left out of the categories.
        """
        pass
