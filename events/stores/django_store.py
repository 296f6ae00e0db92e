"""Django ORM implementation of the EventStore."""

import logging

from django.db import transaction
from django.db.models import F, Q

from events import models as orm
from events.domain import (
    Capacity,
    Event,
    EventId,
    EventStatus,
    Money,
    PricingPlan,
    TicketType,
    TicketTypeId,
)
from events.domain.schedule import parse_timestamp
from events.domain.wizard import EventDraft
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


def _to_ticket_type(row: orm.TicketType) -> TicketType:
    return TicketType(
        id=TicketTypeId(row.id),
        event_id=EventId(row.event_id),
        name=row.name,
        description=row.description,
        price=Money(row.price),
        quantity_available=(
            Capacity(row.quantity_available) if row.quantity_available is not None else None
        ),
        quantity_sold=row.quantity_sold,
        sales_start_date=row.sales_start_date,
        sales_end_date=row.sales_end_date,
        created_at=row.created_at,
    )


def _to_event(row: orm.Event, ticket_types: list[orm.TicketType] | None = None) -> Event:
    return Event(
        id=EventId(row.id),
        organizer_id=row.organizer_id,
        name=row.name,
        description=row.description,
        start_date=row.start_date,
        end_date=row.end_date,
        location=row.location,
        is_online=row.is_online,
        image_url=row.image_url,
        category=row.category,
        status=EventStatus(row.status),
        pricing_plan=PricingPlan(row.pricing_plan),
        created_at=row.created_at,
        updated_at=row.updated_at,
        ticket_types=tuple(_to_ticket_type(t) for t in ticket_types or ()),
    )


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def list_events(self, category: str | None = None) -> list[Event]:
        rows = orm.Event.objects.filter(status=orm.Event.Status.PUBLISHED)
        if category:
            rows = rows.filter(category=category)
        return [_to_event(row) for row in rows.order_by("-created_at")]

    def get_event(self, event_id: EventId) -> Event | None:
        row = orm.Event.objects.filter(pk=event_id.value).first()
        if row is None:
            return None
        return _to_event(row, list(row.ticket_types.all()))

    def event_exists(self, event_id: EventId) -> bool:
        return orm.Event.objects.filter(pk=event_id.value).exists()

    def get_ticket_types(self, event_id: EventId) -> list[TicketType]:
        rows = orm.TicketType.objects.filter(event_id=event_id.value)
        return [_to_ticket_type(row) for row in rows]

    @transaction.atomic
    def create_event(self, draft: EventDraft, organizer_id: str) -> Event:
        row = orm.Event.objects.create(
            organizer_id=organizer_id,
            name=draft.name.strip(),
            description=draft.description or None,
            start_date=parse_timestamp(draft.start_date),
            end_date=parse_timestamp(draft.end_date),
            location=draft.location.strip() or None,
            is_online=draft.is_online,
            image_url=draft.image_url or None,
            category=draft.category,
            status=orm.Event.Status.PUBLISHED,
            pricing_plan=draft.pricing_plan,
        )
        ticket_rows = [
            orm.TicketType.objects.create(
                event=row,
                name=ticket.name.strip(),
                description=ticket.description or None,
                price=ticket.price,
                quantity_available=ticket.quantity_available,
                sales_start_date=ticket.sales_start_date,
                sales_end_date=ticket.sales_end_date,
                position=position,
            )
            for position, ticket in enumerate(draft.ticket_types)
        ]
        return _to_event(row, ticket_rows)

    def record_sale(self, ticket_type_id: TicketTypeId, quantity: int) -> bool:
        updated = (
            orm.TicketType.objects.filter(pk=ticket_type_id.value)
            .filter(
                Q(quantity_available__isnull=True)
                | Q(quantity_available__gte=F("quantity_sold") + quantity)
            )
            .update(quantity_sold=F("quantity_sold") + quantity)
        )
        if not updated:
            logger.debug("Conditional sale update missed for ticket type %s", ticket_type_id)
        return bool(updated)

    def record_sales(
        self, sales: list[tuple[TicketTypeId, int]]
    ) -> TicketTypeId | None:
        try:
            with transaction.atomic():
                for ticket_type_id, quantity in sales:
                    if not self.record_sale(ticket_type_id, quantity):
                        raise _SaleRejected(ticket_type_id)
        except _SaleRejected as rejected:
            return rejected.ticket_type_id
        return None


class _SaleRejected(Exception):
    """Rolls back a batch of sales when one conditional update misses."""

    def __init__(self, ticket_type_id: TicketTypeId) -> None:
        super().__init__(str(ticket_type_id))
        self.ticket_type_id = ticket_type_id
