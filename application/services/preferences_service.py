import logging

from domain.exceptions.currency import InvalidCurrencyError
from domain.models.currency import (
	AVAILABLE_CURRENCIES,
	CurrencyCode,
	DisplayPreferences,
	normalize_code,
)
from infrastructure.persistence.repositories.preferences import PreferencesRepository

logger = logging.getLogger(__name__)


def validate_currency(code: str) -> CurrencyCode:
	normalized = normalize_code(code)
	if normalized not in AVAILABLE_CURRENCIES:
		raise InvalidCurrencyError(f'Currency {code} is not supported')
	return normalized


class PreferencesService:
	"""Reads and writes the user's display preferences.

	Saving never triggers a rate refresh; callers decide that from the
	``changed`` flag returned by ``set_base_currency``.
	"""

	def __init__(self, repository: PreferencesRepository):
		self.repository = repository

	async def get(self) -> DisplayPreferences:
		return await self.repository.load()

	async def set_base_currency(self, code: str) -> tuple[DisplayPreferences, bool]:
		new_base = validate_currency(code)
		current = await self.repository.load()
		if current.base_currency == new_base:
			return current, False

		updated = current.with_base_currency(new_base)
		await self.repository.save(updated)
		logger.info(f'Base currency changed {current.base_currency} -> {new_base}')
		return updated, True

	async def set_displayed_currencies(self, codes: list[str]) -> DisplayPreferences:
		validated = [validate_currency(code) for code in codes]
		current = await self.repository.load()
		updated = current.with_displayed_currencies(validated)
		await self.repository.save(updated)
		logger.info(f'Displayed currencies set to {list(updated.displayed_currencies)}')
		return updated

	async def toggle_currency(self, code: str, enabled: bool) -> DisplayPreferences:
		validated = validate_currency(code)
		current = await self.repository.load()
		updated = current.toggled(validated, enabled)
		if updated != current:
			await self.repository.save(updated)
		return updated
