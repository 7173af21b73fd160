"""EspoCRM client exceptions."""


class EspoCRMError(Exception):
    """Base exception for EspoCRM client errors."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ConnectionError(EspoCRMError):
    """Failed to reach the EspoCRM server (DNS, TCP, TLS, timeout)."""

    pass


class HttpError(EspoCRMError):
    """Server answered with a status other than 200 OK."""

    def __init__(self, status_code: int, reason: str = ""):
        super().__init__(
            f"Unexpected response status: {status_code} {reason}".rstrip(),
            "unexpected_status",
        )
        self.status_code = status_code
        self.reason = reason


class ResponseTooLargeError(EspoCRMError):
    """Response body exceeded the configured size limit."""

    def __init__(self, limit: int):
        super().__init__(
            f"Response body exceeds {limit} bytes", "response_too_large"
        )
        self.limit = limit


class PayloadRequiredError(EspoCRMError, ValueError):
    """A POST or PUT request was issued without a body."""

    def __init__(self, method: str):
        super().__init__(f"{method} requests require a payload", "payload_required")
        self.method = method


class DecodeError(EspoCRMError):
    """JSON could not be parsed or does not fit the target shape."""

    pass
