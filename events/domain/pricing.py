"""Ticket inventory and pricing.

Everything here is a pure function of its inputs. Summaries must be
recomputed against a fresh inventory snapshot each time; nothing is cached.
"""

from collections.abc import Mapping, Sequence
from decimal import Decimal

from events.domain.errors import (
    ExceedsAvailabilityError,
    NegativeQuantityError,
    UnknownTicketTypeError,
)
from events.domain.models import (
    Availability,
    FeeBreakdown,
    OrderLine,
    OrderSummary,
    Selection,
    TicketType,
)
from events.domain.result import Err, Ok, Result
from events.domain.value_objects import (
    PER_TICKET_FEE_RATE,
    PER_TICKET_FIXED_FEE,
    PricingPlan,
    TicketTypeId,
    round2,
)

SelectionRequest = Mapping[str, int]

ZERO = Decimal("0.00")


def canonical_key(key: object) -> str:
    """Lower-case UUID form of a ticket type id; other keys pass through."""
    try:
        return str(TicketTypeId.from_string(str(key)))
    except ValueError:
        return str(key)


def resolve_availability(ticket_type: TicketType) -> Availability:
    """Return how many more tickets of this type may be requested.

    Sold counts above capacity clamp to zero remaining.
    """
    if ticket_type.quantity_available is None:
        return Availability(remaining=None, is_available=True)
    remaining = max(0, ticket_type.quantity_available.value - ticket_type.quantity_sold)
    return Availability(remaining=remaining, is_available=remaining > 0)


def validate_selection(
    request: SelectionRequest, ticket_types: Sequence[TicketType]
) -> Result[tuple[Selection, ...]]:
    """Check a selection against the event's ticket types.

    Returns the strictly-positive selections in the event's ticket type order,
    or the first error found. Unknown ids are reported before quantity errors.
    """
    known = {str(t.id) for t in ticket_types}
    for raw_key in request:
        if canonical_key(raw_key) not in known:
            return Err(UnknownTicketTypeError(str(raw_key)))

    # Spellings of the same id are combined; any negative entry wins.
    quantities: dict[str, int] = {}
    negatives: dict[str, int] = {}
    for raw_key, quantity in request.items():
        key = canonical_key(raw_key)
        if quantity < 0:
            negatives.setdefault(key, quantity)
        else:
            quantities[key] = quantities.get(key, 0) + quantity

    selections: list[Selection] = []
    for ticket_type in ticket_types:
        key = str(ticket_type.id)
        if key in negatives:
            return Err(NegativeQuantityError(key, negatives[key]))
        quantity = quantities.get(key, 0)
        if quantity == 0:
            continue
        availability = resolve_availability(ticket_type)
        if availability.remaining is not None and quantity > availability.remaining:
            return Err(ExceedsAvailabilityError(key, quantity, availability.remaining))
        selections.append(Selection(ticket_type=ticket_type, quantity=quantity))

    return Ok(tuple(selections))


def unit_fee(price: Decimal, plan: PricingPlan) -> Decimal:
    if plan is PricingPlan.FLAT_FEE:
        return ZERO
    return round2(price * PER_TICKET_FEE_RATE + PER_TICKET_FIXED_FEE)


def calculate_ticket_fees(price: Decimal, plan: PricingPlan) -> FeeBreakdown:
    """Fee breakdown for a single ticket at the given price."""
    base_price = round2(price)
    fees = unit_fee(price, plan)
    return FeeBreakdown(base_price=base_price, fees=fees, total=base_price + fees)


def calculate_order_summary(
    selections: Sequence[Selection], plan: PricingPlan
) -> OrderSummary:
    """Price validated selections. An empty selection yields a zeroed summary."""
    lines: list[OrderLine] = []
    for selection in selections:
        unit_price = round2(selection.ticket_type.price.amount)
        fee = unit_fee(unit_price, plan)
        lines.append(
            OrderLine(
                ticket_type_id=selection.ticket_type.id,
                quantity=selection.quantity,
                unit_price=unit_price,
                unit_fee=fee,
                line_total=selection.quantity * (unit_price + fee),
            )
        )

    total_base_price = sum((line.quantity * line.unit_price for line in lines), ZERO)
    total_fees = sum((line.quantity * line.unit_fee for line in lines), ZERO)
    return OrderSummary(
        lines=tuple(lines),
        total_tickets=sum(line.quantity for line in lines),
        total_base_price=total_base_price,
        total_fees=total_fees,
        grand_total=sum((line.line_total for line in lines), ZERO),
    )


def price_selection(
    request: SelectionRequest,
    ticket_types: Sequence[TicketType],
    plan: PricingPlan,
) -> Result[OrderSummary]:
    """Validate a selection and price it in one step."""
    outcome = validate_selection(request, ticket_types)
    if isinstance(outcome, Err):
        return outcome
    return Ok(calculate_order_summary(outcome.value, plan))
