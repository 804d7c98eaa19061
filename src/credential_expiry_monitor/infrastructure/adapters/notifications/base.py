"""Base email transport with common functionality."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ....application.ports import EmailMessage


class BaseEmailTransport(ABC):
    """Abstract base class for email transports."""

    def __init__(self) -> None:
        """Initialize the transport."""
        self._logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def send(self, message: EmailMessage) -> bool:
        """Submit the message."""
        ...

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if the transport is properly configured."""
        ...

    @staticmethod
    def clean_recipients(message: EmailMessage) -> list[str]:
        """Recipients trimmed, empties dropped, order kept, duplicates removed."""
        seen: dict[str, None] = {}
        for address in message.to_addresses:
            address = address.strip()
            if address:
                seen.setdefault(address, None)
        return list(seen)
