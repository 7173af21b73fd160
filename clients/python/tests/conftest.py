import httpx
import pytest

from espocrm import EspoCRMClient

BASE_URL = "https://crm.example.com"
API_KEY = "test-api-key"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request it handled."""

    def __init__(self, status_code: int = 200, content: bytes = b"{}"):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.content = content
        self.closed = False
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        if self.closed:
            raise httpx.ConnectError("transport closed", request=request)
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.content)

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(transport: RecordingTransport) -> EspoCRMClient:
    return EspoCRMClient(BASE_URL, API_KEY, transport=transport)
