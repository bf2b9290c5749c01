import json

import pytest
import pytest_asyncio
from sqlalchemy.exc import SQLAlchemyError
from unittest.mock import AsyncMock

from domain.exceptions.currency import PreferencesError
from domain.models.currency import (
	DEFAULT_BASE_CURRENCY,
	DEFAULT_DISPLAYED_CURRENCIES,
	DisplayPreferences,
)
from infrastructure.persistence.database import Database
from infrastructure.persistence.models.preferences import PreferenceDB
from infrastructure.persistence.repositories.preferences import (
	BASE_CURRENCY_KEY,
	DISPLAYED_CURRENCIES_KEY,
	PreferencesRepository,
	decode_displayed_currencies,
)


@pytest_asyncio.fixture
async def database(tmp_path):
	db = Database(f'sqlite+aiosqlite:///{tmp_path / "prefs.db"}')
	await db.create_tables()
	yield db
	await db.close()


async def store_raw(database, key, value):
	async with database.session() as session:
		session.add(PreferenceDB(key=key, value=value))


@pytest.mark.asyncio
async def test_load_defaults_when_nothing_stored(database):
	async with database.session() as session:
		prefs = await PreferencesRepository(session).load()

	assert prefs.base_currency == DEFAULT_BASE_CURRENCY
	assert prefs.displayed_currencies == ('EUR', 'JPY', 'GBP', 'USD', 'PLN')


@pytest.mark.asyncio
async def test_save_then_load_in_new_session(database):
	saved = DisplayPreferences(base_currency='UAH', displayed_currencies=('PLN', 'EUR'))
	async with database.session() as session:
		await PreferencesRepository(session).save(saved)

	async with database.session() as session:
		loaded = await PreferencesRepository(session).load()

	assert loaded == saved


@pytest.mark.asyncio
async def test_save_overwrites_existing_values(database):
	async with database.session() as session:
		repo = PreferencesRepository(session)
		await repo.save(DisplayPreferences(base_currency='EUR'))
		await repo.save(DisplayPreferences(base_currency='GBP', displayed_currencies=('USD',)))

	async with database.session() as session:
		loaded = await PreferencesRepository(session).load()

	assert loaded.base_currency == 'GBP'
	assert loaded.displayed_currencies == ('USD',)


@pytest.mark.asyncio
async def test_corrupt_displayed_currencies_fall_back_to_defaults(database):
	await store_raw(database, DISPLAYED_CURRENCIES_KEY, '{not json')
	await store_raw(database, BASE_CURRENCY_KEY, 'usd-ish')

	async with database.session() as session:
		prefs = await PreferencesRepository(session).load()

	assert prefs.displayed_currencies == DEFAULT_DISPLAYED_CURRENCIES
	assert prefs.base_currency == DEFAULT_BASE_CURRENCY


@pytest.mark.asyncio
async def test_empty_selection_is_kept(database):
	await store_raw(database, DISPLAYED_CURRENCIES_KEY, '[]')

	async with database.session() as session:
		prefs = await PreferencesRepository(session).load()

	assert prefs.displayed_currencies == ()


@pytest.mark.parametrize('raw', [None, 'null', '"EUR"', '{"EUR": true}', '["EUR", 3]'])
def test_decode_displayed_currencies_fallbacks(raw):
	assert decode_displayed_currencies(raw) == DEFAULT_DISPLAYED_CURRENCIES


def test_decode_displayed_currencies_keeps_order():
	assert decode_displayed_currencies(json.dumps(['JPY', 'EUR'])) == ('JPY', 'EUR')


@pytest.mark.asyncio
async def test_save_failure_raises_preferences_error():
	session = AsyncMock()
	session.get.side_effect = SQLAlchemyError('disk I/O error')

	with pytest.raises(PreferencesError):
		await PreferencesRepository(session).save(DisplayPreferences())


@pytest.mark.asyncio
async def test_session_rolls_back_when_block_fails(database):
	with pytest.raises(RuntimeError):
		async with database.session() as session:
			await PreferencesRepository(session).save(DisplayPreferences(base_currency='JPY'))
			raise RuntimeError('request failed after saving')

	async with database.session() as session:
		prefs = await PreferencesRepository(session).load()

	assert prefs.base_currency == DEFAULT_BASE_CURRENCY
