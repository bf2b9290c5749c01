import json
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from domain.exceptions.currency import PreferencesError
from domain.models.currency import (
	DEFAULT_BASE_CURRENCY,
	DEFAULT_DISPLAYED_CURRENCIES,
	CurrencyCode,
	DisplayPreferences,
	is_currency_code,
)
from infrastructure.persistence.models.preferences import PreferenceDB

logger = logging.getLogger(__name__)

BASE_CURRENCY_KEY = 'base_currency'
DISPLAYED_CURRENCIES_KEY = 'displayed_currencies'


def decode_base_currency(raw: str | None) -> CurrencyCode:
	if raw is not None and is_currency_code(raw):
		return raw
	if raw is not None:
		logger.warning(f'Ignoring stored base currency {raw!r}, using {DEFAULT_BASE_CURRENCY}')
	return DEFAULT_BASE_CURRENCY


def decode_displayed_currencies(raw: str | None) -> tuple[CurrencyCode, ...]:
	"""Decode the stored JSON list, falling back to the default selection.

	An empty list is a legitimate choice and is kept as is.
	"""
	if raw is None:
		return DEFAULT_DISPLAYED_CURRENCIES
	try:
		codes = json.loads(raw)
	except ValueError:
		logger.warning('Stored displayed currencies are not valid JSON, using defaults')
		return DEFAULT_DISPLAYED_CURRENCIES
	if not isinstance(codes, list) or not all(isinstance(c, str) for c in codes):
		logger.warning('Stored displayed currencies are not a list of codes, using defaults')
		return DEFAULT_DISPLAYED_CURRENCIES
	return tuple(codes)


class PreferencesRepository:
	def __init__(self, db_session: AsyncSession):
		self.db_session = db_session

	async def load(self) -> DisplayPreferences:
		result = await self.db_session.execute(
			select(PreferenceDB).filter(
				PreferenceDB.key.in_([BASE_CURRENCY_KEY, DISPLAYED_CURRENCIES_KEY])
			)
		)
		stored = {row.key: row.value for row in result.scalars().all()}

		return DisplayPreferences(
			base_currency=decode_base_currency(stored.get(BASE_CURRENCY_KEY)),
			displayed_currencies=decode_displayed_currencies(stored.get(DISPLAYED_CURRENCIES_KEY)),
		)

	async def save(self, preferences: DisplayPreferences) -> None:
		values = {
			BASE_CURRENCY_KEY: preferences.base_currency,
			DISPLAYED_CURRENCIES_KEY: json.dumps(list(preferences.displayed_currencies)),
		}
		try:
			for key, value in values.items():
				row = await self.db_session.get(PreferenceDB, key)
				if row is None:
					self.db_session.add(PreferenceDB(key=key, value=value))
				else:
					row.value = value
			await self.db_session.flush()
		except SQLAlchemyError as e:
			raise PreferencesError(f'Failed to save display preferences: {e}') from e
