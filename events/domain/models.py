"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from events.domain.value_objects import (
    Capacity,
    EventId,
    EventStatus,
    Money,
    PricingPlan,
    TicketTypeId,
)


@dataclass(frozen=True)
class TicketType:
    """Domain representation of a TicketType."""

    id: TicketTypeId
    event_id: EventId
    name: str
    price: Money
    quantity_available: Capacity | None
    quantity_sold: int
    created_at: datetime
    description: str | None = None
    sales_start_date: datetime | None = None
    sales_end_date: datetime | None = None

    def __post_init__(self) -> None:
        if self.quantity_sold < 0:
            raise ValueError("Quantity sold cannot be negative")


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    organizer_id: str
    name: str
    description: str | None
    start_date: datetime
    end_date: datetime
    location: str | None
    is_online: bool
    image_url: str | None
    category: str | None
    status: EventStatus
    pricing_plan: PricingPlan
    created_at: datetime
    updated_at: datetime
    ticket_types: tuple[TicketType, ...] = ()


@dataclass(frozen=True)
class Availability:
    """Resolved capacity of a ticket type; remaining=None means unbounded."""

    remaining: int | None
    is_available: bool


@dataclass(frozen=True)
class Selection:
    """A validated, strictly-positive request for one ticket type."""

    ticket_type: TicketType
    quantity: int


@dataclass(frozen=True)
class OrderLine:
    ticket_type_id: TicketTypeId
    quantity: int
    unit_price: Decimal
    unit_fee: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class OrderSummary:
    """Itemized result of pricing a validated selection."""

    lines: tuple[OrderLine, ...]
    total_tickets: int
    total_base_price: Decimal
    total_fees: Decimal
    grand_total: Decimal


@dataclass(frozen=True)
class FeeBreakdown:
    base_price: Decimal
    fees: Decimal
    total: Decimal
