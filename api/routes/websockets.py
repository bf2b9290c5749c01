import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from api.dependencies import get_preferences_service, get_rate_store
from api.routes.rates import to_rates_response
from application.services import PreferencesService, RateStore
from application.services.presentation_service import render_rates
from domain.models.currency import CurrencyCode
from domain.models.rates import FetchState

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/api', tags=['websockets'])


def _state_message(state: FetchState, displayed: tuple[CurrencyCode, ...]) -> dict:
	return {
		'type': 'rates_state',
		**to_rates_response(render_rates(state, displayed)).model_dump(mode='json'),
	}


@router.websocket('/ws/rates')
async def rates_updates(
	websocket: WebSocket,
	store: Annotated[RateStore, Depends(get_rate_store)],
	preferences: Annotated[PreferencesService, Depends(get_preferences_service)],
	codes: Annotated[str | None, Query(description="Comma-separated codes, e.g. 'EUR,JPY'")] = None,
):
	"""
	Push the rendered rates state every time the store changes.

	The current state is sent immediately after the connection is accepted.
	Without ``codes`` the persisted displayed currencies are used.
	"""
	if codes:
		displayed = tuple(code.strip().upper() for code in codes.split(',') if code.strip())
	else:
		displayed = (await preferences.get()).displayed_currencies

	await websocket.accept()
	logger.info(f'WebSocket connected for {list(displayed)}')

	loop = asyncio.get_running_loop()
	queue: asyncio.Queue[FetchState] = asyncio.Queue()
	# refreshes may run on another event loop thread than this connection
	unsubscribe = store.subscribe(lambda state: loop.call_soon_threadsafe(queue.put_nowait, state))

	async def forward() -> None:
		while True:
			state = await queue.get()
			await websocket.send_json(_state_message(state, displayed))

	await websocket.send_json(_state_message(store.state, displayed))
	forwarder = asyncio.create_task(forward())
	try:
		while True:
			# Client messages are ignored; receiving is how a disconnect is noticed.
			await websocket.receive_text()
	except WebSocketDisconnect:
		logger.info('WebSocket client disconnected')
	finally:
		unsubscribe()
		forwarder.cancel()
		try:
			await forwarder
		except asyncio.CancelledError:
			pass
		except Exception:
			logger.exception('Forwarding rates state to the WebSocket client failed')
