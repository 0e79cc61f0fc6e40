"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class NotificationError(AdapterError):
    """Outbound notification could not be delivered."""

    pass
