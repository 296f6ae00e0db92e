"""Three-step event creation wizard.

Step 1 collects event details, step 2 the ticket types, step 3 the pricing
plan. The wizard holds draft state only; persisting a submitted draft is the
service's job.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from decimal import Decimal

from events.domain.errors import WizardValidationError
from events.domain.result import Err, Ok, Result
from events.domain.schedule import parse_timestamp
from events.domain.value_objects import EVENT_CATEGORIES, PricingPlan

FIRST_STEP = 1
LAST_STEP = 3
DEFAULT_TICKET_NAME = "General Admission"


@dataclass
class TicketTypeDraft:
    name: str = ""
    description: str | None = None
    price: Decimal = Decimal("0")
    quantity_available: int | None = None
    sales_start_date: datetime | None = None
    sales_end_date: datetime | None = None


@dataclass
class EventDraft:
    name: str = ""
    description: str | None = None
    start_date: datetime | str | None = None
    end_date: datetime | str | None = None
    location: str = ""
    is_online: bool = False
    category: str = ""
    image_url: str | None = None
    pricing_plan: str = PricingPlan.PER_TICKET.value
    ticket_types: list[TicketTypeDraft] = field(
        default_factory=lambda: [TicketTypeDraft(name=DEFAULT_TICKET_NAME)]
    )

    @property
    def plan(self) -> PricingPlan:
        return PricingPlan(self.pricing_plan)


def _validate_details(draft: EventDraft) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not draft.name.strip():
        errors["name"] = "Event name is required"
    if not draft.start_date:
        errors["start_date"] = "Start date is required"
    if not draft.end_date:
        errors["end_date"] = "End date is required"
    if not draft.location.strip() and not draft.is_online:
        errors["location"] = "Location is required for physical events"
    if not draft.category:
        errors["category"] = "Category is required"
    elif draft.category not in EVENT_CATEGORIES:
        errors["category"] = "Unknown category"

    if draft.start_date and draft.end_date:
        starts_at = parse_timestamp(draft.start_date)
        ends_at = parse_timestamp(draft.end_date)
        if starts_at is None:
            errors["start_date"] = "Start date is invalid"
        if ends_at is None:
            errors["end_date"] = "End date is invalid"
        elif starts_at is not None and starts_at >= ends_at:
            errors["end_date"] = "End date must be after start date"
    return errors


def _validate_ticket_types(draft: EventDraft) -> dict[str, str]:
    errors: dict[str, str] = {}
    for index, ticket in enumerate(draft.ticket_types):
        if not ticket.name.strip():
            errors[f"ticket_{index}_name"] = "Ticket name is required"
        if ticket.price < 0:
            errors[f"ticket_{index}_price"] = "Price cannot be negative"
        if ticket.quantity_available is not None and ticket.quantity_available < 0:
            errors[f"ticket_{index}_quantity"] = "Quantity cannot be negative"
    return errors


def _validate_pricing(draft: EventDraft) -> dict[str, str]:
    known = {plan.value for plan in PricingPlan}
    if draft.pricing_plan not in known:
        return {"pricing_plan": "Unknown pricing plan"}
    return {}


_STEP_VALIDATORS = {
    1: _validate_details,
    2: _validate_ticket_types,
    3: _validate_pricing,
}


class EventWizard:
    """Linear step state for building an EventDraft."""

    def __init__(self, draft: EventDraft | None = None) -> None:
        self.draft = draft if draft is not None else EventDraft()
        self.current_step = FIRST_STEP
        self.errors: dict[str, str] = {}

    def update(self, **changes) -> None:
        allowed = {f.name for f in fields(EventDraft)} - {"ticket_types"}
        unknown = set(changes) - allowed
        if unknown:
            raise TypeError(f"Unknown draft fields: {sorted(unknown)}")
        self.draft = replace(self.draft, **changes)

    def add_ticket_type(self) -> None:
        self.draft.ticket_types.append(TicketTypeDraft())

    def update_ticket_type(self, index: int, **changes) -> None:
        self.draft.ticket_types[index] = replace(self.draft.ticket_types[index], **changes)

    def remove_ticket_type(self, index: int) -> None:
        """Drop a ticket type; an event always keeps at least one."""
        if len(self.draft.ticket_types) > 1:
            del self.draft.ticket_types[index]

    def validate_step(self, step: int) -> dict[str, str]:
        validator = _STEP_VALIDATORS.get(step)
        if validator is None:
            raise ValueError(f"No such wizard step: {step}")
        self.errors = validator(self.draft)
        return self.errors

    def next_step(self) -> bool:
        """Advance if the current step is valid. Returns whether it moved."""
        if self.validate_step(self.current_step):
            return False
        if self.current_step < LAST_STEP:
            self.current_step += 1
            return True
        return False

    def prev_step(self) -> None:
        self.current_step = max(self.current_step - 1, FIRST_STEP)

    def submit(self) -> Result[EventDraft]:
        errors: dict[str, str] = {}
        for step in range(FIRST_STEP, LAST_STEP + 1):
            errors.update(_STEP_VALIDATORS[step](self.draft))
        self.errors = errors
        if errors:
            return Err(WizardValidationError(errors))
        return Ok(self.draft)
