"""Type definitions for EspoCRM responses."""

from dataclasses import dataclass, field
from typing import Any

Records = list[dict[str, Any]]


@dataclass
class ListResult:
    """Envelope returned by list endpoints."""

    total: int
    list: Records = field(default_factory=list)

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "ListResult":
        """Create ListResult from a decoded list response.

        EspoCRM reports a negative total when the count was not requested
        (``total=false``); the number of returned records is used then.
        """
        records = response.get("list", [])
        total = response.get("total", len(records))
        if total is None or total < 0:
            total = len(records)
        return cls(total=total, list=records)
