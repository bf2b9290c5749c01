from domain.models.rates import ErrorKind


class CurrencyException(Exception):
    pass


class InvalidCurrencyError(CurrencyException):
    pass


class PreferencesError(CurrencyException):
    pass


class FetchError(CurrencyException):
    """Base class for everything that can go wrong while fetching rates."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, underlying: BaseException | None = None):
        super().__init__(message)
        self.underlying = underlying

    @property
    def description(self) -> str:
        return str(self)


class InvalidRequestError(FetchError):
    kind = ErrorKind.INVALID_REQUEST


class TransportError(FetchError):
    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        underlying: BaseException | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, underlying)
        self.status_code = status_code


class DecodingError(FetchError):
    kind = ErrorKind.DECODING


class ApiFailureError(FetchError):
    kind = ErrorKind.API_FAILURE

    def __init__(self, message: str, error_type: str | None = None):
        super().__init__(message)
        self.error_type = error_type
