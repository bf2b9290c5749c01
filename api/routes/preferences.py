from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import get_preferences_service, get_rate_store
from api.schemas import (
	BaseCurrencyUpdate,
	CurrencyToggle,
	DisplayedCurrenciesUpdate,
	PreferencesResponse,
)
from application.services import PreferencesService, RateStore
from domain.models.currency import DisplayPreferences

router = APIRouter(prefix='/api/preferences', tags=['preferences'])


def to_preferences_response(prefs: DisplayPreferences) -> PreferencesResponse:
	return PreferencesResponse(
		base_currency=prefs.base_currency,
		displayed_currencies=list(prefs.displayed_currencies),
	)


@router.get(
	'',
	response_model=PreferencesResponse,
	status_code=status.HTTP_200_OK,
	summary='Current display preferences',
)
async def get_preferences(
	service: Annotated[PreferencesService, Depends(get_preferences_service)],
) -> PreferencesResponse:
	return to_preferences_response(await service.get())


@router.put(
	'/base-currency',
	response_model=PreferencesResponse,
	status_code=status.HTTP_200_OK,
	summary='Change the base currency and refetch rates',
)
async def set_base_currency(
	payload: BaseCurrencyUpdate,
	service: Annotated[PreferencesService, Depends(get_preferences_service)],
	store: Annotated[RateStore, Depends(get_rate_store)],
) -> PreferencesResponse:
	prefs, changed = await service.set_base_currency(payload.currency)
	if changed:
		await store.refresh(prefs.base_currency)
	return to_preferences_response(prefs)


@router.put(
	'/displayed-currencies',
	response_model=PreferencesResponse,
	status_code=status.HTTP_200_OK,
	summary='Replace the ordered list of displayed currencies',
)
async def set_displayed_currencies(
	payload: DisplayedCurrenciesUpdate,
	service: Annotated[PreferencesService, Depends(get_preferences_service)],
) -> PreferencesResponse:
	return to_preferences_response(await service.set_displayed_currencies(payload.currencies))


@router.put(
	'/displayed-currencies/{code}',
	response_model=PreferencesResponse,
	status_code=status.HTTP_200_OK,
	summary='Show or hide a single currency',
)
async def toggle_displayed_currency(
	code: Annotated[str, Path(min_length=3, max_length=3)],
	payload: CurrencyToggle,
	service: Annotated[PreferencesService, Depends(get_preferences_service)],
) -> PreferencesResponse:
	return to_preferences_response(await service.toggle_currency(code, payload.enabled))
