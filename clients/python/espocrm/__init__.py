"""EspoCRM Python Client.

A Python client for the EspoCRM REST API.

Usage:
    from espocrm import EspoCRMClient, FilterOption, Parameters, Where

    client = EspoCRMClient("https://crm.example.com", api_key="...")

    # Read a record
    body = client.read_entity("Contact", "78abc123def456")

    # List records
    body = client.list_entities(
        "Contact",
        Parameters().set_max_size(10),
        [Where(FilterOption.EQUALS, "name", "Alice")],
    )

    # Create, update and delete
    client.create_entity("Contact", serialize({"name": "Alice"}))
    client.update_entity("Contact", "78abc123def456", b'{"name": "Bob"}')
    client.delete_entity("Contact", "78abc123def456")

    # Link records
    client.link_entity("Account", account_id, "contacts", b'{"id": "6a183bcf77198a"}')
"""

from .client import (
    API_PATH,
    DEFAULT_MAX_RESPONSE_SIZE,
    ClientConfig,
    EspoCRMClient,
)
from .codec import deserialize, serialize
from .exceptions import (
    ConnectionError,
    DecodeError,
    EspoCRMError,
    HttpError,
    PayloadRequiredError,
    ResponseTooLargeError,
)
from .query import FilterOption, Order, Parameters, Where, encode_filters, quote_value
from .types import ListResult

__version__ = "0.1.0"
__all__ = [
    "API_PATH",
    "DEFAULT_MAX_RESPONSE_SIZE",
    "ClientConfig",
    "EspoCRMClient",
    "EspoCRMError",
    "ConnectionError",
    "HttpError",
    "ResponseTooLargeError",
    "PayloadRequiredError",
    "DecodeError",
    "FilterOption",
    "Where",
    "encode_filters",
    "quote_value",
    "Order",
    "Parameters",
    "ListResult",
    "serialize",
    "deserialize",
]
