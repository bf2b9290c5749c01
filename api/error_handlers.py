import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import InvalidCurrencyError, PreferencesError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(InvalidCurrencyError)
	async def invalid_currency_handler(request: Request, exc: InvalidCurrencyError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(PreferencesError)
	async def preferences_error_handler(request: Request, exc: PreferencesError):
		logger.error(f'Preferences error: {exc}')
		return JSONResponse(
			status_code=500, content={'detail': 'Display preferences could not be saved'}
		)
