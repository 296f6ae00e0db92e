"""Integration tests for the event catalog, inventory and ordering API.

Run with: pytest tests/test_event_catalog.py -v
"""

from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from events import models as orm
from events.handlers.serializers import MAX_TICKETS_PER_TYPE


@pytest.mark.django_db
class TestEventList:
    """Tests for GET /api/events"""

    def test_list_events_returns_published(self, api_client: APIClient, make_event_row):
        """Given published and draft events, returns only published ones."""
        make_event_row(name="Published")
        make_event_row(name="Hidden", status="draft")

        response = api_client.get("/api/events")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        event = body["results"][0]
        assert event["name"] == "Published"
        assert event["schedule_status"] == "upcoming"
        assert event["duration"] == "8 hours"
        assert event["pricing_plan"] == "per_ticket"

    def test_list_events_empty_catalog(self, api_client: APIClient):
        """Given no events, returns empty list."""
        response = api_client.get("/api/events")
        assert response.status_code == 200
        assert response.json() == {"results": [], "count": 0}

    def test_list_events_filters_by_category(self, api_client: APIClient, make_event_row):
        """Given a category filter, returns only events in that category."""
        make_event_row(name="Summit", category="Technology")
        make_event_row(name="Concert", category="Music")

        response = api_client.get("/api/events", {"category": "Music"})

        assert [e["name"] for e in response.json()["results"]] == ["Concert"]


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/{id}"""

    def test_get_event_returns_details_with_inventory(self, api_client: APIClient, make_event_row):
        """Given event exists, returns event details and ticket availability."""
        event = make_event_row(
            ticket_types=[
                {"name": "Regular", "price": "15000", "quantity_available": 100, "quantity_sold": 45},
                {"name": "Sold Out", "price": "20000", "quantity_available": 10, "quantity_sold": 10},
                {"name": "Open", "price": "0", "quantity_available": None, "quantity_sold": 3},
            ]
        )

        response = api_client.get(f"/api/events/{event.id}")

        assert response.status_code == 200
        tickets = response.json()["ticket_types"]
        assert [t["name"] for t in tickets] == ["Regular", "Sold Out", "Open"]
        assert tickets[0]["price"] == "15000.00"
        assert tickets[0]["remaining"] == 55
        assert tickets[0]["is_available"] is True
        assert tickets[1]["remaining"] == 0
        assert tickets[1]["is_available"] is False
        assert tickets[2]["remaining"] is None
        assert tickets[2]["quantity_available"] is None
        assert tickets[2]["is_available"] is True

    def test_get_event_not_found(self, api_client: APIClient):
        """Given event does not exist, returns 404."""
        response = api_client.get(f"/api/events/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["code"] == "EVENT_NOT_FOUND"

    def test_get_event_invalid_id_format(self, api_client: APIClient):
        """Given invalid UUID, returns 400."""
        response = api_client.get("/api/events/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_EVENT_ID"

    def test_inventory_is_never_served_from_cache(self, api_client: APIClient, make_event_row):
        """Ticket availability reflects sales made after the first request."""
        event = make_event_row()
        api_client.get(f"/api/events/{event.id}")

        orm.TicketType.objects.filter(event=event, name="Regular").update(quantity_sold=100)

        tickets = api_client.get(f"/api/events/{event.id}").json()["ticket_types"]
        assert tickets[0]["remaining"] == 0


@pytest.mark.django_db
class TestQuote:
    """Tests for POST /api/events/{id}/quote"""

    def test_quote_returns_summary(self, api_client: APIClient, make_event_row):
        """Given a valid selection, returns lines in event order and totals."""
        event = make_event_row()
        regular, vip = event.ticket_types.all()

        response = api_client.post(
            f"/api/events/{event.id}/quote",
            {"tickets": {str(vip.id): 1, str(regular.id): 2}},
            format="json",
        )

        assert response.status_code == 200
        body = response.json()
        assert [line["ticket_type_id"] for line in body["lines"]] == [str(regular.id), str(vip.id)]
        assert body["lines"][0]["unit_fee"] == "425.00"
        assert body["total_tickets"] == 3
        assert body["total_base_price"] == "65000.00"
        assert body["total_fees"] == "1775.00"
        assert body["grand_total"] == "66775.00"

    def test_quote_flat_fee_event(self, api_client: APIClient, make_event_row):
        """Given a flat-fee event, the quote carries no fees."""
        event = make_event_row(pricing_plan="flat_fee")
        regular = event.ticket_types.first()

        body = api_client.post(
            f"/api/events/{event.id}/quote", {"tickets": {str(regular.id): 2}}, format="json"
        ).json()

        assert body["total_fees"] == "0.00"
        assert body["grand_total"] == "30000.00"

    def test_quote_empty_selection(self, api_client: APIClient, make_event_row):
        """Given an empty selection, returns a zeroed summary."""
        event = make_event_row()
        response = api_client.post(f"/api/events/{event.id}/quote", {"tickets": {}}, format="json")
        assert response.status_code == 200
        assert response.json()["grand_total"] == "0.00"

    def test_quote_exceeding_availability_conflicts(self, api_client: APIClient, make_event_row):
        """Given more than remaining, returns 409."""
        event = make_event_row()
        vip = event.ticket_types.get(name="VIP")

        response = api_client.post(
            f"/api/events/{event.id}/quote", {"tickets": {str(vip.id): 39}}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["code"] == "EXCEEDS_AVAILABILITY"

    def test_quote_unknown_ticket_type(self, api_client: APIClient, make_event_row):
        """Given a foreign ticket type id, returns 400."""
        event = make_event_row()
        response = api_client.post(
            f"/api/events/{event.id}/quote", {"tickets": {str(uuid4()): 1}}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["code"] == "UNKNOWN_TICKET_TYPE"

    def test_quote_negative_quantity(self, api_client: APIClient, make_event_row):
        """Given a negative quantity, returns 400."""
        event = make_event_row()
        regular = event.ticket_types.first()
        response = api_client.post(
            f"/api/events/{event.id}/quote", {"tickets": {str(regular.id): -1}}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["code"] == "NEGATIVE_QUANTITY"

    def test_quote_malformed_body(self, api_client: APIClient, make_event_row):
        """Given a non-integer quantity, returns 400 INVALID_REQUEST."""
        event = make_event_row()
        response = api_client.post(
            f"/api/events/{event.id}/quote", {"tickets": {"x": "many"}}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"

    @pytest.mark.parametrize("quantity", [MAX_TICKETS_PER_TYPE + 1, 100_000_000, 10**19])
    def test_quote_quantity_above_limit_is_invalid(
        self, api_client: APIClient, make_event_row, quantity
    ):
        """Given a quantity above the per-type limit, returns 400 INVALID_REQUEST."""
        event = make_event_row(
            ticket_types=[{"name": "Open", "price": "15000", "quantity_available": None}]
        )
        open_entry = event.ticket_types.get()

        response = api_client.post(
            f"/api/events/{event.id}/quote", {"tickets": {str(open_entry.id): quantity}}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"

    def test_quote_at_quantity_limit(self, api_client: APIClient, make_event_row):
        """Given the largest allowed quantity, totals render in full."""
        event = make_event_row(
            ticket_types=[{"name": "Open", "price": "15000", "quantity_available": None}]
        )
        open_entry = event.ticket_types.get()

        response = api_client.post(
            f"/api/events/{event.id}/quote",
            {"tickets": {str(open_entry.id): MAX_TICKETS_PER_TYPE}},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["grand_total"] == "154250000.00"

    def test_quote_accepts_uppercase_ticket_type_id(self, api_client: APIClient, make_event_row):
        """Given an uppercase ticket type id, prices it under its canonical id."""
        event = make_event_row()
        regular = event.ticket_types.get(name="Regular")

        response = api_client.post(
            f"/api/events/{event.id}/quote",
            {"tickets": {str(regular.id).upper(): 2}},
            format="json",
        )

        assert response.status_code == 200
        body = response.json()
        assert body["lines"][0]["ticket_type_id"] == str(regular.id)
        assert body["total_tickets"] == 2

    @pytest.mark.parametrize("status", ["draft", "cancelled"])
    def test_quote_event_not_on_sale(self, api_client: APIClient, make_event_row, status):
        """Given a draft or cancelled event, returns 409 EVENT_NOT_ON_SALE."""
        event = make_event_row(status=status)
        regular = event.ticket_types.get(name="Regular")

        response = api_client.post(
            f"/api/events/{event.id}/quote", {"tickets": {str(regular.id): 1}}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["code"] == "EVENT_NOT_ON_SALE"


@pytest.mark.django_db
class TestPurchase:
    """Tests for POST /api/events/{id}/purchase"""

    def test_purchase_records_sale(self, api_client: APIClient, make_event_row):
        """Given a valid selection, records the sale and returns 201."""
        event = make_event_row()
        vip = event.ticket_types.get(name="VIP")

        response = api_client.post(
            f"/api/events/{event.id}/purchase", {"tickets": {str(vip.id): 38}}, format="json"
        )

        assert response.status_code == 201
        assert response.json()["total_tickets"] == 38
        vip.refresh_from_db()
        assert vip.quantity_sold == 50

    def test_purchase_beyond_capacity_is_rejected(self, api_client: APIClient, make_event_row):
        """Given more than remaining, returns 409 and writes nothing."""
        event = make_event_row()
        vip = event.ticket_types.get(name="VIP")

        response = api_client.post(
            f"/api/events/{event.id}/purchase", {"tickets": {str(vip.id): 39}}, format="json"
        )

        assert response.status_code == 409
        vip.refresh_from_db()
        assert vip.quantity_sold == 12

    def test_purchase_huge_quantity_is_invalid(self, api_client: APIClient, make_event_row):
        """Given a quantity far above the per-type limit, returns 400 and writes nothing."""
        event = make_event_row()
        regular = event.ticket_types.get(name="Regular")

        response = api_client.post(
            f"/api/events/{event.id}/purchase", {"tickets": {str(regular.id): 10**19}}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"
        regular.refresh_from_db()
        assert regular.quantity_sold == 45

    @pytest.mark.parametrize("tickets", [{}, {"regular": 0, "vip": 0}])
    def test_purchase_without_tickets_is_not_created(
        self, api_client: APIClient, make_event_row, tickets
    ):
        """Given no positive quantities, returns 200 with a zeroed summary and writes nothing."""
        event = make_event_row()
        ids = {t.name.lower(): str(t.id) for t in event.ticket_types.all()}

        response = api_client.post(
            f"/api/events/{event.id}/purchase",
            {"tickets": {ids[name]: quantity for name, quantity in tickets.items()}},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["total_tickets"] == 0
        assert [t.quantity_sold for t in event.ticket_types.all()] == [45, 12]

    def test_purchase_cancelled_event_is_rejected(self, api_client: APIClient, make_event_row):
        """Given a cancelled event, returns 409 and writes nothing."""
        event = make_event_row(status="cancelled")
        vip = event.ticket_types.get(name="VIP")

        response = api_client.post(
            f"/api/events/{event.id}/purchase", {"tickets": {str(vip.id): 1}}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["code"] == "EVENT_NOT_ON_SALE"
        vip.refresh_from_db()
        assert vip.quantity_sold == 12


@pytest.mark.django_db
class TestCreateEvent:
    """Tests for POST /api/events"""

    payload = {
        "name": "Afrobeats Night",
        "start_date": "2026-11-20T18:00:00Z",
        "end_date": "2026-11-20T23:00:00Z",
        "location": "Eko Hotel, Lagos",
        "category": "Music",
        "pricing_plan": "per_ticket",
        "ticket_types": [
            {"name": "Regular", "price": "15000", "quantity_available": 200},
            {"name": "Table", "price": "250000"},
        ],
    }

    def test_requires_authentication(self, api_client: APIClient):
        """Anonymous users cannot create events."""
        response = api_client.post("/api/events", self.payload, format="json")
        assert response.status_code == 403

    def test_creates_event_with_ticket_types(self, api_client: APIClient, organizer):
        """Given a valid payload, creates the event and its ticket types."""
        api_client.force_authenticate(user=organizer)

        response = api_client.post("/api/events", self.payload, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["organizer_id"] == str(organizer.pk)
        assert body["status"] == "published"
        assert len(body["ticket_types"]) == 2
        created = orm.Event.objects.get(pk=body["id"])
        assert [t.name for t in created.ticket_types.all()] == ["Regular", "Table"]
        assert created.ticket_types.get(name="Table").quantity_available is None

    def test_returns_field_errors(self, api_client: APIClient, organizer):
        """Given an invalid draft, returns field errors and creates nothing."""
        api_client.force_authenticate(user=organizer)
        payload = {**self.payload, "name": "", "end_date": "2026-11-20T17:00:00Z"}

        response = api_client.post("/api/events", payload, format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_EVENT_DATA"
        assert body["errors"] == {
            "name": "Event name is required",
            "end_date": "End date must be after start date",
        }
        assert not orm.Event.objects.exists()
