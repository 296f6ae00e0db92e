"""Serializers for transforming domain models to API responses and parsing input."""

from django.utils import timezone
from rest_framework import serializers

from events.domain.schedule import classify_event_status, describe_duration

# Largest quantity of one ticket type a single request may ask for.
MAX_TICKETS_PER_TYPE = 10_000
# Upper bound of the quantity_available column.
MAX_TICKET_CAPACITY = 2_147_483_647


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    organizer_id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    location = serializers.CharField(allow_null=True)
    is_online = serializers.BooleanField()
    image_url = serializers.CharField(allow_null=True)
    category = serializers.CharField(allow_null=True)
    status = serializers.CharField(source="status.value")
    pricing_plan = serializers.CharField(source="pricing_plan.value")
    schedule_status = serializers.SerializerMethodField()
    duration = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField()

    def get_schedule_status(self, event) -> str:
        return classify_event_status(timezone.now(), event.start_date, event.end_date).value

    def get_duration(self, event) -> str:
        return describe_duration(event.start_date, event.end_date)


class TicketInventorySerializer(serializers.Serializer):
    """Serializer for a (TicketType, Availability) pair."""

    id = serializers.CharField(source="ticket_type.id")
    name = serializers.CharField(source="ticket_type.name")
    description = serializers.CharField(source="ticket_type.description", allow_null=True)
    price = serializers.DecimalField(
        source="ticket_type.price.amount", max_digits=None, decimal_places=2
    )
    quantity_available = serializers.SerializerMethodField()
    quantity_sold = serializers.IntegerField(source="ticket_type.quantity_sold")
    remaining = serializers.IntegerField(source="availability.remaining", allow_null=True)
    is_available = serializers.BooleanField(source="availability.is_available")
    sales_start_date = serializers.DateTimeField(
        source="ticket_type.sales_start_date", allow_null=True
    )
    sales_end_date = serializers.DateTimeField(source="ticket_type.sales_end_date", allow_null=True)

    def get_quantity_available(self, item) -> int | None:
        capacity = item["ticket_type"].quantity_available
        return capacity.value if capacity is not None else None


class OrderLineSerializer(serializers.Serializer):
    ticket_type_id = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=None, decimal_places=2)
    unit_fee = serializers.DecimalField(max_digits=None, decimal_places=2)
    line_total = serializers.DecimalField(max_digits=None, decimal_places=2)


class OrderSummarySerializer(serializers.Serializer):
    """Serializer for OrderSummary; amounts render as two-decimal strings."""

    lines = OrderLineSerializer(many=True)
    total_tickets = serializers.IntegerField()
    total_base_price = serializers.DecimalField(max_digits=None, decimal_places=2)
    total_fees = serializers.DecimalField(max_digits=None, decimal_places=2)
    grand_total = serializers.DecimalField(max_digits=None, decimal_places=2)


class SelectionRequestSerializer(serializers.Serializer):
    """Parses {"tickets": {ticket_type_id: quantity}}.

    Sign and availability checks belong to the domain validator.
    """

    tickets = serializers.DictField(
        child=serializers.IntegerField(max_value=MAX_TICKETS_PER_TYPE), allow_empty=True
    )


class TicketTypeDraftSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, default="")
    description = serializers.CharField(allow_blank=True, allow_null=True, default=None)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, default=0)
    quantity_available = serializers.IntegerField(
        allow_null=True, default=None, max_value=MAX_TICKET_CAPACITY
    )
    sales_start_date = serializers.DateTimeField(allow_null=True, default=None)
    sales_end_date = serializers.DateTimeField(allow_null=True, default=None)


class EventDraftSerializer(serializers.Serializer):
    """Input format for event creation. Business rules run in the wizard."""

    name = serializers.CharField(allow_blank=True, default="")
    description = serializers.CharField(allow_blank=True, allow_null=True, default=None)
    start_date = serializers.DateTimeField(allow_null=True, default=None)
    end_date = serializers.DateTimeField(allow_null=True, default=None)
    location = serializers.CharField(allow_blank=True, default="")
    is_online = serializers.BooleanField(default=False)
    category = serializers.CharField(allow_blank=True, default="")
    image_url = serializers.URLField(allow_blank=True, allow_null=True, default=None)
    pricing_plan = serializers.CharField(default="per_ticket")
    ticket_types = TicketTypeDraftSerializer(many=True, allow_empty=False)
