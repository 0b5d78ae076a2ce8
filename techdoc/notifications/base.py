from abc import ABC, abstractmethod
from typing import Any


class BaseChannel(ABC):
    """A single live client connection that can receive named events."""

    @property
    @abstractmethod
    def channel_id(self) -> str:
        """Stable identifier of the connection, used for logging."""

    @abstractmethod
    def send(self, event_name: str, payload: dict[str, Any]) -> None:
        """Deliver one event.

        Raises:
            NotificationError: if the transport fails.
        """
