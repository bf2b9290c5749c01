import logging
import time
from typing import Annotated
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field, StrictFloat, StrictInt, StringConstraints, ValidationError

from domain.exceptions.currency import (
    ApiFailureError,
    DecodingError,
    InvalidRequestError,
    TransportError,
)
from domain.models.currency import CurrencyCode, is_currency_code, normalize_code
from domain.models.rates import SUCCESS_RESULT, RateSnapshot

logger = logging.getLogger(__name__)

# JSON numbers only: booleans and numeric strings are schema drift
PositiveRate = Annotated[StrictInt, Field(gt=0)] | Annotated[StrictFloat, Field(gt=0, allow_inf_nan=False)]
RateCode = Annotated[str, StringConstraints(pattern=r"^[A-Z]{3}$")]


class LatestRatesPayload(BaseModel):
    """Body of ``GET /v6/{key}/latest/{base}`` when ``result`` is ``success``."""

    result: str
    base_code: str
    time_last_update_utc: str
    conversion_rates: dict[RateCode, PositiveRate]


class ExchangeRateAPIProvider:
    BASE_URL = "https://v6.exchangerate-api.com/v6"

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10,
    ):
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"accept": "application/json"},
        )

    @property
    def name(self) -> str:
        return "exchangerate-api"

    def build_url(self, base_currency: CurrencyCode) -> str:
        code = normalize_code(base_currency) if isinstance(base_currency, str) else base_currency
        if not is_currency_code(code):
            raise InvalidRequestError(f"Invalid base currency code: {base_currency!r}")
        if not self.api_key or quote(self.api_key, safe="") != self.api_key:
            raise InvalidRequestError("API key is missing or contains characters not allowed in a URL")

        url = f"{self.base_url}/{self.api_key}/latest/{code}"
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise InvalidRequestError(f"Could not build request URL: {e}", e) from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise InvalidRequestError(f"Could not build request URL for base {code}")
        return url

    def _masked(self, url: str) -> str:
        return url.replace(f"/{self.api_key}/", "/***/") if self.api_key else url

    async def fetch(self, base_currency: CurrencyCode) -> RateSnapshot:
        url = self.build_url(base_currency)
        start = time.perf_counter()

        try:
            response = await self._client.get(url)
        except httpx.RequestError as e:
            logger.warning(f"{self.name} request to {self._masked(url)} failed: {e.__class__.__name__}")
            raise TransportError(
                f"{self.name} request failed: {e.__class__.__name__}: {e}", e
            ) from e

        if not 200 <= response.status_code < 300:
            logger.warning(f"{self.name} returned HTTP {response.status_code} for {self._masked(url)}")
            raise TransportError(
                f"HTTP {response.status_code}: invalid HTTP response status code",
                status_code=response.status_code,
            )

        snapshot = self._decode(response)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            f"Fetched {len(snapshot.rates)} rates for {snapshot.base_code} "
            f"from {self.name} in {elapsed_ms}ms"
        )
        return snapshot

    def _decode(self, response: httpx.Response) -> RateSnapshot:
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"{self.name} returned a body that is not JSON: {e}")
            raise DecodingError(f"Response is not valid JSON: {e}", e) from e

        if not isinstance(data, dict):
            raise DecodingError(f"Expected a JSON object, got {type(data).__name__}")

        result = data.get("result")
        if not isinstance(result, str):
            raise DecodingError("Response is missing the 'result' field")

        if result != SUCCESS_RESULT:
            error_type = data.get("error-type")
            logger.error(f"{self.name} reported failure: result={result} error-type={error_type}")
            raise ApiFailureError(
                f"API request failed with status: {result}",
                error_type=error_type if isinstance(error_type, str) else None,
            )

        try:
            payload = LatestRatesPayload.model_validate(data)
        except ValidationError as e:
            logger.error(f"{self.name} response does not match the expected schema: {e.error_count()} errors")
            raise DecodingError(f"Response does not match the expected schema: {e}", e) from e

        return RateSnapshot(
            result=payload.result,
            base_code=payload.base_code,
            last_updated_utc=payload.time_last_update_utc,
            rates={code: float(rate) for code, rate in payload.conversion_rates.items()},
        )

    async def close(self) -> None:
        await self._client.aclose()
