from typing import Protocol

from domain.models.currency import CurrencyCode
from domain.models.rates import RateSnapshot


class RateFetcher(Protocol):
    """Anything that can turn a base currency into a fresh RateSnapshot.

    Implementations raise a ``FetchError`` subclass on failure and never
    cache: every call is a live request.
    """

    @property
    def name(self) -> str: ...

    async def fetch(self, base_currency: CurrencyCode) -> RateSnapshot: ...

    async def close(self) -> None: ...
