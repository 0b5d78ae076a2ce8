"""Per-user notification groups.

Connections register under a user id when they connect and unregister when they
disconnect. Membership lives only as long as the process. Delivery is
best-effort: events for users with no live connection are dropped, and a failing
channel never affects the publisher or the other channels.
"""

import threading

from techdoc.logging.logger import Log
from techdoc.notifications.base import BaseChannel
from techdoc.notifications.events import ProcessingOutcome


class NotificationBroker:
    """Registry of live channels keyed by user id, plus publish-to-user."""

    def __init__(self) -> None:
        self._channels: dict[str, set[BaseChannel]] = {}
        self._lock = threading.Lock()

    def register(self, user_id: str, channel: BaseChannel) -> None:
        with self._lock:
            self._channels.setdefault(user_id, set()).add(channel)
        Log.info(f"Channel {channel.channel_id} joined group for user {user_id}")

    def unregister(self, user_id: str, channel: BaseChannel) -> None:
        with self._lock:
            members = self._channels.get(user_id)
            if members is None:
                return
            members.discard(channel)
            if not members:
                del self._channels[user_id]
        Log.info(f"Channel {channel.channel_id} left group for user {user_id}")

    def subscriber_count(self, user_id: str) -> int:
        with self._lock:
            return len(self._channels.get(user_id, ()))

    def publish(self, user_id: str, outcome: ProcessingOutcome) -> int:
        """Send outcome to every channel of user_id. Returns the number delivered."""
        with self._lock:
            members = list(self._channels.get(user_id, ()))

        if not members:
            Log.debug(
                f"No live channels for user {user_id}, dropping {outcome.event_name} "
                f"for document {outcome.document_id}"
            )
            return 0

        payload = outcome.to_payload()
        delivered = 0
        for channel in members:
            try:
                channel.send(outcome.event_name, payload)
                delivered += 1
            except Exception as exc:
                Log.error(
                    f"Failed to send {outcome.event_name} for document {outcome.document_id} "
                    f"to channel {channel.channel_id}: {exc}"
                )
        Log.info(
            f"Sent {outcome.event_name} for document {outcome.document_id} "
            f"to {delivered}/{len(members)} channel(s) of user {user_id}"
        )
        return delivered
