from .base import RateFetcher
from .exchangerate_api import ExchangeRateAPIProvider, LatestRatesPayload

__all__ = ['RateFetcher', 'ExchangeRateAPIProvider', 'LatestRatesPayload']
