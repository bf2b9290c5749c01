from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	DATABASE_URL: str = 'sqlite+aiosqlite:///./exchange_rates.db'

	EXCHANGERATE_API_KEY: str = ''
	EXCHANGERATE_API_URL: str = 'https://v6.exchangerate-api.com/v6'
	HTTP_TIMEOUT_SECONDS: float = 10.0

	# Application
	APP_NAME: str = 'Exchange Rates'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
