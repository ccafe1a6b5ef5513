"""
Logging Event Handler

Infrastructure event handler for logging file lifecycle events.
Domain layer remains unaware of logging infrastructure.
"""

import logging

from file_hosting.domain.events import (
    DomainEvent,
    FileDeletedEvent,
    FilePurgedEvent,
    FileRegisteredEvent,
    FileUploadedEvent,
)


class LoggingEventHandler:
    """Logs domain events at a level matching their importance."""

    def __init__(self, logger: logging.Logger):
        """
        Initialize with logger instance.

        Args:
            logger: Python logging.Logger instance
        """
        self.logger = logger

    def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event by logging it.

        Args:
            event: Domain event to log
        """
        if isinstance(event, FileRegisteredEvent):
            self.logger.info(
                f"File {event.aggregate_id} registered by {event.owner_id} "
                f"at {event.full_path}"
            )
        elif isinstance(event, FileUploadedEvent):
            self.logger.info(
                f"File {event.aggregate_id} uploaded ({event.file_size} bytes)"
            )
        elif isinstance(event, FileDeletedEvent):
            self.logger.info(
                f"File {event.aggregate_id} deleted (was {event.previous_status})"
            )
        elif isinstance(event, FilePurgedEvent):
            self.logger.warning(f"File {event.aggregate_id} purged from storage")
        else:
            self.logger.debug(f"Unhandled event type: {type(event).__name__}")
