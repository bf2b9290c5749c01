from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_preferences_service, get_rate_store
from api.main import app
from application.services import PreferencesService, RateStore
from domain.models.currency import DisplayPreferences
from domain.models.rates import RateSnapshot
from infrastructure.persistence.repositories.preferences import PreferencesRepository


@pytest.fixture
def usd_snapshot():
	return RateSnapshot(
		result='success',
		base_code='USD',
		last_updated_utc='2024-01-01T00:00:00Z',
		rates={'EUR': 0.9, 'JPY': 150.0},
	)


@pytest.fixture
def mock_fetcher(usd_snapshot):
	fetcher = AsyncMock()
	fetcher.fetch.return_value = usd_snapshot
	return fetcher


@pytest.fixture
def rate_store(mock_fetcher):
	return RateStore(mock_fetcher)


@pytest.fixture
def mock_repository():
	repo = AsyncMock(spec=PreferencesRepository)
	repo.load.return_value = DisplayPreferences(
		base_currency='USD', displayed_currencies=('EUR', 'GBP')
	)
	return repo


@pytest.fixture
def client(rate_store, mock_repository):
	app.dependency_overrides[get_rate_store] = lambda: rate_store
	app.dependency_overrides[get_preferences_service] = lambda: PreferencesService(mock_repository)
	client = TestClient(app)
	yield client
	app.dependency_overrides.clear()
