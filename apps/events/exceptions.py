"""Domain exceptions for events app."""


class EventServiceError(Exception):
    """Base exception for event service errors."""
    pass


class TicketNotFoundError(EventServiceError):
    pass


class TicketAlreadyUsedError(EventServiceError):
    """Raised when a used ticket is scanned again."""
    pass


class InvalidTicketStatusError(EventServiceError):
    """Raised when a ticket cannot move to the requested status."""
    pass
