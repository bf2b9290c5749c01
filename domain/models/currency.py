import re
from dataclasses import dataclass, replace

CurrencyCode = str

AVAILABLE_CURRENCIES: tuple[CurrencyCode, ...] = (
	'USD',
	'EUR',
	'GBP',
	'JPY',
	'CAD',
	'AUD',
	'CHF',
	'CNY',
	'HKD',
	'INR',
	'PLN',
	'UAH',
)

DEFAULT_BASE_CURRENCY: CurrencyCode = 'USD'

# Used whenever the persisted selection is missing or unreadable.
DEFAULT_DISPLAYED_CURRENCIES: tuple[CurrencyCode, ...] = ('EUR', 'JPY', 'GBP', 'USD', 'PLN')

_CODE_PATTERN = re.compile(r'^[A-Z]{3}$')


def normalize_code(code: str) -> CurrencyCode:
	return code.strip().upper()


def is_currency_code(code: object) -> bool:
	return isinstance(code, str) and bool(_CODE_PATTERN.match(code))


@dataclass(frozen=True)
class DisplayPreferences:
	base_currency: CurrencyCode = DEFAULT_BASE_CURRENCY
	displayed_currencies: tuple[CurrencyCode, ...] = DEFAULT_DISPLAYED_CURRENCIES

	def with_base_currency(self, code: CurrencyCode) -> 'DisplayPreferences':
		return replace(self, base_currency=code)

	def with_displayed_currencies(self, codes: list[CurrencyCode] | tuple[CurrencyCode, ...]) -> 'DisplayPreferences':
		return replace(self, displayed_currencies=tuple(dict.fromkeys(codes)))

	def toggled(self, code: CurrencyCode, enabled: bool) -> 'DisplayPreferences':
		"""Switch a single currency on (appended at the end) or off."""
		if enabled:
			if code in self.displayed_currencies:
				return self
			return replace(self, displayed_currencies=(*self.displayed_currencies, code))
		return replace(
			self,
			displayed_currencies=tuple(c for c in self.displayed_currencies if c != code),
		)
