import asyncio
import contextlib
import logging
from collections.abc import Callable

from domain.exceptions.currency import FetchError
from domain.models.currency import CurrencyCode, normalize_code
from domain.models.rates import ErrorKind, FetchState, RateSnapshot
from infrastructure.providers.base import RateFetcher

logger = logging.getLogger(__name__)

Observer = Callable[[FetchState], None]

_MESSAGE_PREFIXES = {
    ErrorKind.TRANSPORT: "Network Error",
    ErrorKind.DECODING: "Decoding Error",
    ErrorKind.API_FAILURE: "API Failure",
}


def describe_error(error: BaseException) -> tuple[ErrorKind, str]:
    """Map any fetch failure to its kind and the message shown to the user."""
    if isinstance(error, FetchError):
        if error.kind is ErrorKind.INVALID_REQUEST:
            return error.kind, "Error: Invalid API URL."
        prefix = _MESSAGE_PREFIXES.get(error.kind)
        if prefix is not None:
            return error.kind, f"{prefix}: {error.description}"
    return ErrorKind.UNEXPECTED, f"An unexpected error occurred: {error}"


class RateStore:
    """Observable holder of the latest rates for the selected base currency.

    State only changes inside ``refresh``. Each call is tagged with a
    generation number; when a newer refresh starts, the older request is
    cancelled and whatever it returns afterwards is dropped, so a slow
    response for a previous base currency can never overwrite a newer one.
    """

    def __init__(self, fetcher: RateFetcher):
        self._fetcher = fetcher
        self._state = FetchState.idle()
        self._observers: list[Observer] = []
        self._generation = 0
        self._inflight: asyncio.Task[RateSnapshot] | None = None

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def snapshot(self) -> RateSnapshot | None:
        return self._state.snapshot

    @property
    def error_message(self) -> str | None:
        return self._state.error_message

    @property
    def base_currency(self) -> CurrencyCode | None:
        return self._state.base_currency

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _transition(self, new_state: FetchState) -> None:
        self._state = new_state
        for observer in list(self._observers):
            try:
                observer(new_state)
            except Exception:
                logger.exception(f"Rate store observer {observer!r} failed")

    async def refresh(self, base_currency: CurrencyCode) -> FetchState:
        if isinstance(base_currency, str):
            base_currency = normalize_code(base_currency)

        self._generation += 1
        generation = self._generation

        if self._inflight is not None and not self._inflight.done():
            logger.debug("Cancelling superseded rate request")
            self._inflight.cancel()

        self._transition(FetchState.loading(base_currency))

        task = asyncio.create_task(self._fetcher.fetch(base_currency))
        self._inflight = task
        try:
            snapshot = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                task.cancel()
                if generation == self._generation:
                    self._transition(FetchState.idle())
                raise
            if generation == self._generation:
                # request cancelled by aclose()
                self._transition(FetchState.idle())
            else:
                logger.debug(f"Discarded superseded refresh for {base_currency}")
            return self._state
        except Exception as e:
            if generation != self._generation:
                logger.debug(f"Discarded late failure for {base_currency}: {e}")
                return self._state
            kind, message = describe_error(e)
            if kind is ErrorKind.UNEXPECTED:
                logger.exception(f"Unexpected error while refreshing rates for {base_currency}")
            else:
                logger.error(f"Refreshing rates for {base_currency} failed: {message}")
            self._transition(FetchState.failed(base_currency, kind, message))
            return self._state
        finally:
            if self._inflight is task:
                self._inflight = None

        if generation != self._generation:
            logger.debug(f"Discarded late response for {base_currency}")
            return self._state

        self._transition(FetchState.loaded(base_currency, snapshot))
        return self._state

    async def aclose(self) -> None:
        task, self._inflight = self._inflight, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
