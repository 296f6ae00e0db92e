from events.domain.models import (
    Availability,
    Event,
    OrderLine,
    OrderSummary,
    Selection,
    TicketType,
)
from events.domain.result import Err, Ok, Result
from events.domain.value_objects import (
    Capacity,
    EventId,
    EventStatus,
    Money,
    PricingPlan,
    ScheduleStatus,
    TicketTypeId,
)

__all__ = [
    "Availability",
    "Event",
    "OrderLine",
    "OrderSummary",
    "Selection",
    "TicketType",
    "Err",
    "Ok",
    "Result",
    "Capacity",
    "EventId",
    "EventStatus",
    "Money",
    "PricingPlan",
    "ScheduleStatus",
    "TicketTypeId",
]
