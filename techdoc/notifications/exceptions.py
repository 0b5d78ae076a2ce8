class NotificationError(Exception):
    """Raised when an event cannot be delivered over a channel."""
