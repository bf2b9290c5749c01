from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from domain.models.currency import CurrencyCode

SUCCESS_RESULT = 'success'


class FetchStatus(Enum):
	IDLE = 'idle'
	LOADING = 'loading'
	LOADED = 'loaded'
	FAILED = 'failed'


class ErrorKind(Enum):
	INVALID_REQUEST = 'invalid_request'
	TRANSPORT = 'transport'
	DECODING = 'decoding'
	API_FAILURE = 'api_failure'
	UNEXPECTED = 'unexpected'


@dataclass(frozen=True)
class RateSnapshot:
	"""Latest rates for one base currency, exactly as the provider returned them."""

	result: str
	base_code: CurrencyCode
	last_updated_utc: str
	rates: Mapping[CurrencyCode, float] = field(default_factory=dict)

	def __post_init__(self):
		object.__setattr__(self, 'rates', MappingProxyType(dict(self.rates)))

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, RateSnapshot):
			return NotImplemented
		return (
			self.result == other.result
			and self.base_code == other.base_code
			and self.last_updated_utc == other.last_updated_utc
			and dict(self.rates) == dict(other.rates)
		)

	def __hash__(self) -> int:
		return hash((self.result, self.base_code, self.last_updated_utc, frozenset(self.rates.items())))

	def rate_for(self, code: CurrencyCode) -> float | None:
		return self.rates.get(code)


@dataclass(frozen=True)
class FetchState:
	status: FetchStatus
	base_currency: CurrencyCode | None = None
	snapshot: RateSnapshot | None = None
	error_kind: ErrorKind | None = None
	error_message: str | None = None

	@classmethod
	def idle(cls) -> 'FetchState':
		return cls(status=FetchStatus.IDLE)

	@classmethod
	def loading(cls, base_currency: CurrencyCode) -> 'FetchState':
		return cls(status=FetchStatus.LOADING, base_currency=base_currency)

	@classmethod
	def loaded(cls, base_currency: CurrencyCode, snapshot: RateSnapshot) -> 'FetchState':
		return cls(status=FetchStatus.LOADED, base_currency=base_currency, snapshot=snapshot)

	@classmethod
	def failed(cls, base_currency: CurrencyCode, kind: ErrorKind, message: str) -> 'FetchState':
		return cls(
			status=FetchStatus.FAILED,
			base_currency=base_currency,
			error_kind=kind,
			error_message=message,
		)

	@property
	def is_loading(self) -> bool:
		return self.status is FetchStatus.LOADING
