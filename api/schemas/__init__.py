from .requests import BaseCurrencyUpdate, CurrencyToggle, DisplayedCurrenciesUpdate
from .responses import (
	ConversionResponse,
	ConversionRowResponse,
	CurrenciesResponse,
	PreferencesResponse,
	RateRowResponse,
	RatesResponse,
)

__all__ = [
	'BaseCurrencyUpdate',
	'CurrencyToggle',
	'DisplayedCurrenciesUpdate',
	'ConversionResponse',
	'ConversionRowResponse',
	'CurrenciesResponse',
	'PreferencesResponse',
	'RateRowResponse',
	'RatesResponse',
]
