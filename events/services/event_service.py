"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models, domain errors, or Result values

Inventory is read fresh from the store on every quote and purchase.
"""

import logging

from events.domain import Availability, Err, Event, EventId, Ok, OrderSummary, Result, TicketType
from events.domain.errors import (
    EventNotFoundError,
    EventNotOnSaleError,
    ExceedsAvailabilityError,
    InvalidEventIdError,
)
from events.domain.pricing import SelectionRequest, price_selection, resolve_availability
from events.domain.value_objects import EventStatus
from events.domain.wizard import EventDraft, EventWizard
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class EventService:
    """Service for event catalog, inventory and ordering operations."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def parse_event_id(self, event_id: str) -> EventId:
        try:
            return EventId.from_string(event_id)
        except (ValueError, TypeError, AttributeError) as exc:
            raise InvalidEventIdError() from exc

    def list_events(self, category: str | None = None) -> list[Event]:
        """Return published events, optionally filtered by category."""
        return self._store.list_events(category=category)

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = self.parse_event_id(event_id)
        event = self._store.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def get_ticket_inventory(self, event_id: str) -> list[tuple[TicketType, Availability]]:
        """Return each ticket type with its resolved availability.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = self.parse_event_id(event_id)
        if not self._store.event_exists(parsed):
            raise EventNotFoundError(event_id)
        return [(t, resolve_availability(t)) for t in self._store.get_ticket_types(parsed)]

    def quote(self, event_id: str, request: SelectionRequest) -> Result[OrderSummary]:
        """Price a selection against the current inventory.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self.get_event(event_id)
        if event.status is not EventStatus.PUBLISHED:
            logger.info("Selection rejected for %s event %s", event.status.value, event.id)
            return Err(EventNotOnSaleError(str(event.id), event.status.value))
        ticket_types = self._store.get_ticket_types(event.id)
        outcome = price_selection(request, ticket_types, event.pricing_plan)
        if isinstance(outcome, Err):
            logger.info("Selection rejected for event %s: %s", event.id, outcome.error)
        return outcome

    def commit_purchase(self, event_id: str, request: SelectionRequest) -> Result[OrderSummary]:
        """Re-validate a selection and record the sale.

        Capacity is checked again by the store's conditional update, so a
        concurrent purchase that wins the race turns this one into
        ExceedsAvailability instead of an oversell.
        """
        outcome = self.quote(event_id, request)
        if isinstance(outcome, Err):
            return outcome

        summary = outcome.value
        if summary.total_tickets == 0:
            return Ok(summary)

        rejected = self._store.record_sales(
            [(line.ticket_type_id, line.quantity) for line in summary.lines]
        )
        if rejected is None:
            logger.info(
                "Recorded %d tickets for event %s", summary.total_tickets, event_id
            )
            return Ok(summary)

        logger.warning("Purchase lost capacity race on ticket type %s", rejected)
        requested = next(line.quantity for line in summary.lines if line.ticket_type_id == rejected)
        remaining = 0
        for ticket_type in self._store.get_ticket_types(EventId.from_string(event_id)):
            if ticket_type.id == rejected:
                remaining = resolve_availability(ticket_type).remaining or 0
        return Err(ExceedsAvailabilityError(str(rejected), requested, remaining))

    def create_event(self, wizard: EventWizard, organizer_id: str) -> Result[Event]:
        """Submit a wizard and persist the resulting draft."""
        outcome = wizard.submit()
        if isinstance(outcome, Err):
            logger.info("Event draft rejected: %s", sorted(outcome.error.errors))
            return outcome
        draft: EventDraft = outcome.value
        event = self._store.create_event(draft, organizer_id)
        logger.info("Created event %s for organizer %s", event.id, organizer_id)
        return Ok(event)
