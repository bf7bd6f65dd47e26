"""Exceptions raised by the announcement workflow.

Every error propagates to the caller unchanged; nothing in the service
retries automatically.
"""


class AnnouncementError(Exception):
    """Base class for announcement related failures."""


class StoreError(AnnouncementError):
    """Raised when the notification store rejects an operation."""


class NoRecipientsError(AnnouncementError):
    """Raised when a broadcast resolves to zero eligible recipients."""

    def __init__(self, message: str = "No approved recipients selected") -> None:
        super().__init__(message)


class WriteFailedError(AnnouncementError):
    """Raised when the fan-out batch could not be persisted.

    The batch is written in a single transaction, so a failure means no copy
    was stored. Re-sending the same content is safe but will merge into the
    same logical announcement.
    """


class AggregationFailedError(AnnouncementError):
    """Raised when a scan fails while building the announcement list."""


class AnnouncementNotFoundError(AnnouncementError, ValueError):
    """Raised when the representative notification of an announcement is missing."""

    def __init__(self, notification_id: int) -> None:
        self.notification_id = notification_id
        super().__init__(f"Announcement with notification id {notification_id} not found")


__all__ = [
    "AggregationFailedError",
    "AnnouncementError",
    "AnnouncementNotFoundError",
    "NoRecipientsError",
    "StoreError",
    "WriteFailedError",
]
