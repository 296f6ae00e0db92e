"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from events.domain import Event, EventId, TicketType, TicketTypeId
from events.domain.wizard import EventDraft


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self, category: str | None = None) -> list[Event]:
        """Return published events ordered by created_at descending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event with its ticket types, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def get_ticket_types(self, event_id: EventId) -> list[TicketType]:
        """Return a fresh snapshot of an event's ticket types in display order."""
        ...

    @abstractmethod
    def create_event(self, draft: EventDraft, organizer_id: str) -> Event:
        """Persist a validated draft and its ticket types atomically."""
        ...

    @abstractmethod
    def record_sale(self, ticket_type_id: TicketTypeId, quantity: int) -> bool:
        """Add to quantity_sold only if capacity still allows it.

        Returns False when the conditional update matched no row.
        """
        ...

    @abstractmethod
    def record_sales(
        self, sales: list[tuple[TicketTypeId, int]]
    ) -> TicketTypeId | None:
        """Apply several record_sale calls all-or-nothing.

        Returns the first ticket type whose update was rejected, or None.
        """
        ...
