import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from application.services import ConversionService, PreferencesService, RateStore
from config.settings import get_settings
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.preferences import PreferencesRepository
from infrastructure.providers import ExchangeRateAPIProvider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	db: Database | None = None
	provider: ExchangeRateAPIProvider | None = None
	rate_store: RateStore | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	if not settings.EXCHANGERATE_API_KEY:
		logger.warning('EXCHANGERATE_API_KEY is not set; every refresh will fail with an invalid request')

	deps.db = Database(settings.DATABASE_URL, echo=settings.DEBUG)
	deps.provider = ExchangeRateAPIProvider(
		api_key=settings.EXCHANGERATE_API_KEY,
		base_url=settings.EXCHANGERATE_API_URL,
		timeout=settings.HTTP_TIMEOUT_SECONDS,
	)
	deps.rate_store = RateStore(deps.provider)
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.rate_store:
		await deps.rate_store.aclose()
	if deps.provider:
		await deps.provider.close()
	if deps.db:
		await deps.db.close()

	logger.info('Cleanup complete')


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
	if deps.db is None:
		raise RuntimeError('Database is not initialized')

	async with deps.db.session() as session:
		yield session


def get_rate_store() -> RateStore:
	if deps.rate_store is None:
		raise RuntimeError('Rate store not initialized')
	return deps.rate_store


async def get_preferences_repository(
	session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PreferencesRepository:
	return PreferencesRepository(db_session=session)


async def get_preferences_service(
	repository: Annotated[PreferencesRepository, Depends(get_preferences_repository)],
) -> PreferencesService:
	return PreferencesService(repository=repository)


def get_conversion_service() -> ConversionService:
	return ConversionService()
