"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self
from uuid import UUID

CENT = Decimal("0.01")


def round2(amount: Decimal) -> Decimal:
    """Round to two decimal places, half away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TicketTypeId:
    """Unique identifier for a TicketType."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __add__(self, other: "Money") -> "Money":
        return Money(amount=self.amount + other.amount)

    def __mul__(self, quantity: int) -> "Money":
        return Money(amount=self.amount * quantity)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


class PricingPlan(Enum):
    """Organizer fee model.

    FLAT_FEE organizers pay a monthly subscription and buyers see no surcharge;
    PER_TICKET adds a percentage plus a fixed amount to every ticket sold.
    """

    FLAT_FEE = "flat_fee"
    PER_TICKET = "per_ticket"


PER_TICKET_FEE_RATE = Decimal("0.025")
PER_TICKET_FIXED_FEE = Decimal("50")


class EventStatus(Enum):
    """Publication state of an event."""

    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"


class ScheduleStatus(Enum):
    """Where an event sits relative to the current instant."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    ENDED = "ended"


EVENT_CATEGORIES: tuple[str, ...] = (
    "Music",
    "Conference",
    "Workshop",
    "Seminar",
    "Networking",
    "Sports",
    "Arts & Culture",
    "Food & Drink",
    "Technology",
    "Business",
    "Education",
    "Health & Wellness",
    "Entertainment",
    "Other",
)
