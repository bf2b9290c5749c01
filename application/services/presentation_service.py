import contextlib
from dataclasses import dataclass, field
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from domain.models.currency import CurrencyCode
from domain.models.rates import FetchState, FetchStatus

NOT_AVAILABLE = 'N/A'
UPDATE_TIME_FORMAT = '%b %d, %Y %H:%M UTC'


@dataclass(frozen=True)
class RateRow:
	code: CurrencyCode
	rate: float | None
	display: str


@dataclass(frozen=True)
class RatesView:
	status: FetchStatus
	base_currency: CurrencyCode | None
	last_updated: str | None = None
	error_message: str | None = None
	rows: list[RateRow] = field(default_factory=list)


def format_update_time(raw: str) -> str:
	"""Render the provider timestamp for humans, or return it untouched.

	The provider documents RFC 2822 timestamps but ISO-8601 strings also show
	up, so both are tried.
	"""
	parsed: datetime | None = None
	try:
		parsed = datetime.fromisoformat(raw)
	except ValueError:
		with contextlib.suppress(TypeError, ValueError, IndexError):
			parsed = parsedate_to_datetime(raw)

	if parsed is None:
		return raw
	if parsed.tzinfo is None:
		parsed = parsed.replace(tzinfo=UTC)
	return parsed.astimezone(UTC).strftime(UPDATE_TIME_FORMAT)


def render_rates(state: FetchState, displayed: tuple[CurrencyCode, ...] | list[CurrencyCode]) -> RatesView:
	if state.status is not FetchStatus.LOADED or state.snapshot is None:
		return RatesView(
			status=state.status,
			base_currency=state.base_currency,
			error_message=state.error_message,
		)

	snapshot = state.snapshot
	rows = []
	for code in displayed:
		rate = snapshot.rate_for(code)
		rows.append(RateRow(code=code, rate=rate, display=NOT_AVAILABLE if rate is None else f'{rate:.4f}'))

	return RatesView(
		status=state.status,
		base_currency=snapshot.base_code,
		last_updated=format_update_time(snapshot.last_updated_utc),
		rows=rows,
	)
