from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CurrenciesResponse(BaseModel):
	model_config = ConfigDict(
		json_schema_extra={'examples': [{'currencies': ['USD', 'EUR', 'GBP', 'JPY']}]}
	)

	currencies: list[str] = Field(description='Currencies that can be picked')


class PreferencesResponse(BaseModel):
	base_currency: str = Field(..., description='Currency the rates are relative to')
	displayed_currencies: list[str] = Field(..., description='Ordered currencies to display')


class RateRowResponse(BaseModel):
	code: str
	rate: float | None = Field(None, description='Rate relative to the base, absent when unknown')
	display: str = Field(..., description='Formatted rate or N/A')


class RatesResponse(BaseModel):
	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'status': 'loaded',
				'is_loading': False,
				'base_currency': 'USD',
				'last_updated': 'Jan 01, 2024 00:00 UTC',
				'error_message': None,
				'rows': [
					{'code': 'EUR', 'rate': 0.9, 'display': '0.9000'},
					{'code': 'GBP', 'rate': None, 'display': 'N/A'},
				],
			}
		}
	)

	status: str = Field(..., description='idle, loading, loaded or failed')
	is_loading: bool
	base_currency: str | None = None
	last_updated: str | None = None
	error_message: str | None = None
	rows: list[RateRowResponse] = Field(default_factory=list)


class ConversionRowResponse(BaseModel):
	code: str
	converted: Decimal | None = None
	display: str


class ConversionResponse(BaseModel):
	base_currency: str | None = None
	amount: Decimal
	message: str | None = None
	rows: list[ConversionRowResponse] = Field(default_factory=list)
