from dataclasses import dataclass, field
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext

from domain.models.currency import CurrencyCode
from domain.models.rates import FetchState, FetchStatus

RATE_NOT_AVAILABLE = 'Rate N/A'
ENTER_AMOUNT_MESSAGE = 'Please enter a valid amount to start converting.'
LOADING_MESSAGE = 'Loading rates...'
CENT = Decimal('0.01')


def sanitize_amount_input(text: str, decimal_separator: str = '.') -> str:
	"""Clean a typed amount: digits and one separator, at most two decimals."""
	filtered = ''.join(ch for ch in text if (ch.isdigit() and ch.isascii()) or ch == decimal_separator)

	parts = filtered.split(decimal_separator)
	if len(parts) > 2:
		filtered = decimal_separator.join(parts[:2])

	if decimal_separator in filtered:
		whole, fraction = filtered.split(decimal_separator, 1)
		if len(fraction) > 2:
			filtered = f'{whole}{decimal_separator}{fraction[:2]}'

	# "0123" -> "123", but "0" and "0." stay
	if len(filtered) > 1 and filtered.startswith('0') and not filtered.startswith('0' + decimal_separator):
		filtered = filtered[1:]

	return filtered


def parse_amount(text: str, decimal_separator: str = '.') -> Decimal:
	cleaned = sanitize_amount_input(text, decimal_separator).replace(decimal_separator, '.')
	if not cleaned:
		return Decimal('0')
	try:
		return Decimal(cleaned)
	except InvalidOperation:
		return Decimal('0')


@dataclass(frozen=True)
class ConversionRow:
	code: CurrencyCode
	converted: Decimal | None
	display: str


@dataclass(frozen=True)
class ConversionView:
	base_currency: CurrencyCode | None
	amount: Decimal
	rows: list[ConversionRow] = field(default_factory=list)
	message: str | None = None


def _convert(amount: Decimal, rate: float) -> Decimal:
	"""Exact ``amount * rate`` rounded to cents, whatever the size of the amount."""
	rate_value = Decimal(str(rate))
	with localcontext() as ctx:
		ctx.prec = max(ctx.prec, len(amount.as_tuple().digits) + len(rate_value.as_tuple().digits))
		product = amount * rate_value
		# quantize needs room for every integer digit plus the two decimals
		ctx.prec = max(ctx.prec, product.adjusted() + 3)
		return product.quantize(CENT, rounding=ROUND_HALF_EVEN)


class ConversionService:
	def convert(
		self,
		state: FetchState,
		displayed: tuple[CurrencyCode, ...] | list[CurrencyCode],
		amount: Decimal,
	) -> ConversionView:
		if state.is_loading:
			return ConversionView(base_currency=state.base_currency, amount=amount, message=LOADING_MESSAGE)
		if state.status is not FetchStatus.LOADED or state.snapshot is None or amount <= 0:
			return ConversionView(
				base_currency=state.base_currency,
				amount=amount,
				message=state.error_message or ENTER_AMOUNT_MESSAGE,
			)

		rows = []
		for code in displayed:
			rate = state.snapshot.rate_for(code)
			if rate is None:
				rows.append(ConversionRow(code=code, converted=None, display=RATE_NOT_AVAILABLE))
				continue
			converted = _convert(amount, rate)
			rows.append(ConversionRow(code=code, converted=converted, display=f'{converted:,.2f}'))

		return ConversionView(base_currency=state.snapshot.base_code, amount=amount, rows=rows)
