from pydantic import BaseModel, ConfigDict, Field, field_validator


class BaseCurrencyUpdate(BaseModel):
	model_config = ConfigDict(json_schema_extra={'example': {'currency': 'EUR'}})

	currency: str = Field(..., min_length=3, max_length=3)

	@field_validator('currency')
	@classmethod
	def uppercase_currency(cls, v: str):
		return v.upper()


class DisplayedCurrenciesUpdate(BaseModel):
	model_config = ConfigDict(json_schema_extra={'example': {'currencies': ['EUR', 'JPY', 'GBP']}})

	currencies: list[str] = Field(..., description='Ordered currency codes to display')

	@field_validator('currencies')
	@classmethod
	def uppercase_currencies(cls, v: list[str]):
		return [code.strip().upper() for code in v]


class CurrencyToggle(BaseModel):
	enabled: bool = Field(..., description='Whether the currency should be displayed')
