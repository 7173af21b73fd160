"""JSON helpers for request payloads and response bodies.

The client itself only deals in bytes. These helpers convert between those
bytes and plain Python values or dataclasses:

    >>> @dataclass
    ... class Account:
    ...     name: str
    ...     accountNumber: str
    >>> deserialize(client.read_entity("Account", account_id), Account)
    Account(name='Alice', accountNumber='12345')
"""

from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .exceptions import DecodeError

T = TypeVar("T")


def serialize(value: Any) -> bytes:
    """Encode ``value`` as compact JSON.

    Dataclass fields are written in declaration order.
    """
    return TypeAdapter(type(value)).dump_json(value)


def deserialize(data: bytes | str, target: type[T]) -> T:
    """Parse JSON ``data`` into an instance of ``target``.

    Keys without a matching dataclass field are ignored.

    Raises:
        DecodeError: Malformed JSON, or JSON that does not fit ``target``.
    """
    try:
        return TypeAdapter(target).validate_json(data)
    except ValidationError as e:
        code = "invalid_json" if e.errors()[0]["type"] == "json_invalid" else "shape"
        raise DecodeError(str(e), code) from e
