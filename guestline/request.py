"""
Operation descriptor handed to the wire envelope builder
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class GuestLineService(str, Enum):
    """GuestLine endpoint a request is routed to"""

    BOOK = "book"  # booking endpoint (reservations)
    ARI = "ari"  # services endpoint (ARI, property info)


@dataclass(frozen=True)
class GuestLineRequest:
    service: GuestLineService
    method: str = "POST"
    path: str = ""
    query: Optional[Mapping[str, str]] = None
    data: Optional[Any] = None
