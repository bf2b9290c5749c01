import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import get_conversion_service, get_preferences_service, get_rate_store
from api.schemas import (
	ConversionResponse,
	ConversionRowResponse,
	CurrenciesResponse,
	RateRowResponse,
	RatesResponse,
)
from application.services import ConversionService, PreferencesService, RateStore
from application.services.conversion_service import parse_amount
from application.services.presentation_service import RatesView, render_rates
from domain.models.currency import AVAILABLE_CURRENCIES, CurrencyCode
from domain.models.rates import FetchStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/api', tags=['rates'])


def to_rates_response(view: RatesView) -> RatesResponse:
	return RatesResponse(
		status=view.status.value,
		is_loading=view.status is FetchStatus.LOADING,
		base_currency=view.base_currency,
		last_updated=view.last_updated,
		error_message=view.error_message,
		rows=[RateRowResponse(code=r.code, rate=r.rate, display=r.display) for r in view.rows],
	)


async def ensure_loaded(store: RateStore, base_currency: CurrencyCode) -> None:
	"""Fetch on first display; later fetches are explicit."""
	if store.state.status is FetchStatus.IDLE:
		logger.info(f'First display, fetching rates for {base_currency}')
		await store.refresh(base_currency)


@router.get(
	'/currencies',
	response_model=CurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List currencies that can be picked',
)
async def get_available_currencies() -> CurrenciesResponse:
	return CurrenciesResponse(currencies=list(AVAILABLE_CURRENCIES))


@router.get(
	'/rates',
	response_model=RatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Rates for the displayed currencies',
)
async def get_rates(
	store: Annotated[RateStore, Depends(get_rate_store)],
	preferences: Annotated[PreferencesService, Depends(get_preferences_service)],
) -> RatesResponse:
	prefs = await preferences.get()
	await ensure_loaded(store, prefs.base_currency)
	return to_rates_response(render_rates(store.state, prefs.displayed_currencies))


@router.post(
	'/rates/refresh',
	response_model=RatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Fetch the latest rates again',
)
async def refresh_rates(
	store: Annotated[RateStore, Depends(get_rate_store)],
	preferences: Annotated[PreferencesService, Depends(get_preferences_service)],
) -> RatesResponse:
	prefs = await preferences.get()
	state = await store.refresh(prefs.base_currency)
	return to_rates_response(render_rates(state, prefs.displayed_currencies))


@router.get(
	'/convert/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert an amount of the base currency',
)
async def convert_amount(
	amount: Annotated[str, Path(max_length=32)],
	store: Annotated[RateStore, Depends(get_rate_store)],
	preferences: Annotated[PreferencesService, Depends(get_preferences_service)],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionResponse:
	prefs = await preferences.get()
	await ensure_loaded(store, prefs.base_currency)

	view = service.convert(store.state, prefs.displayed_currencies, parse_amount(amount))
	return ConversionResponse(
		base_currency=view.base_currency,
		amount=view.amount,
		message=view.message,
		rows=[
			ConversionRowResponse(code=r.code, converted=r.converted, display=r.display)
			for r in view.rows
		],
	)
