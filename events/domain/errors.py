"""Domain error codes for the events module."""

from dataclasses import dataclass, field
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    UNKNOWN_TICKET_TYPE = "UNKNOWN_TICKET_TYPE"
    EXCEEDS_AVAILABILITY = "EXCEEDS_AVAILABILITY"
    NEGATIVE_QUANTITY = "NEGATIVE_QUANTITY"
    INVALID_EVENT_DATA = "INVALID_EVENT_DATA"
    EVENT_NOT_ON_SALE = "EVENT_NOT_ON_SALE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        object.__setattr__(self, "event_id", event_id)


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class EventNotOnSaleError(DomainError):
    """Tickets were requested for a draft or cancelled event."""

    def __init__(self, event_id: str, status: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_ON_SALE,
            message="Tickets for this event are not on sale",
        )
        object.__setattr__(self, "event_id", event_id)
        object.__setattr__(self, "status", status)


class UnknownTicketTypeError(DomainError):
    """Selection references a ticket type the event does not have."""

    def __init__(self, ticket_type_id: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_TICKET_TYPE,
            message="Ticket type does not belong to this event",
        )
        object.__setattr__(self, "ticket_type_id", ticket_type_id)


class ExceedsAvailabilityError(DomainError):
    """Requested quantity is larger than the remaining capacity."""

    def __init__(self, ticket_type_id: str, requested: int, remaining: int) -> None:
        super().__init__(
            code=ErrorCode.EXCEEDS_AVAILABILITY,
            message=f"Only {remaining} tickets remaining",
        )
        object.__setattr__(self, "ticket_type_id", ticket_type_id)
        object.__setattr__(self, "requested", requested)
        object.__setattr__(self, "remaining", remaining)


class NegativeQuantityError(DomainError):
    """Requested quantity is below zero."""

    def __init__(self, ticket_type_id: str, requested: int) -> None:
        super().__init__(
            code=ErrorCode.NEGATIVE_QUANTITY,
            message="Quantity cannot be negative",
        )
        object.__setattr__(self, "ticket_type_id", ticket_type_id)
        object.__setattr__(self, "requested", requested)


@dataclass(frozen=True, init=False)
class WizardValidationError(DomainError):
    """Event draft failed one or more field rules."""

    errors: dict[str, str] = field(default_factory=dict, hash=False)

    def __init__(self, errors: dict[str, str]) -> None:
        object.__setattr__(self, "code", ErrorCode.INVALID_EVENT_DATA)
        object.__setattr__(self, "message", "Event data is invalid")
        object.__setattr__(self, "errors", dict(errors))
