"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from events.domain import Capacity, EventId, Money, TicketType, TicketTypeId


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def event_id() -> EventId:
    return EventId(uuid4())


@pytest.fixture
def make_ticket_type(event_id: EventId):
    """Factory for domain TicketType records; available=None means unlimited."""

    def factory(
        price: str = "15000",
        available: int | None = 100,
        sold: int = 0,
        name: str = "Regular",
    ) -> TicketType:
        return TicketType(
            id=TicketTypeId(uuid4()),
            event_id=event_id,
            name=name,
            price=Money(Decimal(price)),
            quantity_available=Capacity(available) if available is not None else None,
            quantity_sold=sold,
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )

    return factory


@pytest.fixture
def organizer(db, django_user_model):
    return django_user_model.objects.create_user(username="organizer", password="secret123")


@pytest.fixture
def make_event_row(db):
    """Factory for persisted Event rows with ticket types."""
    from django.utils import timezone as dj_timezone

    from events import models as orm

    def factory(
        name: str = "Lagos Tech Summit",
        category: str = "Technology",
        status: str = "published",
        pricing_plan: str = "per_ticket",
        ticket_types: list[dict] | None = None,
    ) -> orm.Event:
        start = dj_timezone.now() + timedelta(days=30)
        event = orm.Event.objects.create(
            organizer_id="organizer-1",
            name=name,
            description="A day of talks",
            start_date=start,
            end_date=start + timedelta(hours=8),
            location="Landmark Centre, Lagos",
            category=category,
            status=status,
            pricing_plan=pricing_plan,
        )
        specs = ticket_types if ticket_types is not None else [
            {"name": "Regular", "price": Decimal("15000"), "quantity_available": 100, "quantity_sold": 45},
            {"name": "VIP", "price": Decimal("35000"), "quantity_available": 50, "quantity_sold": 12},
        ]
        for position, spec in enumerate(specs):
            orm.TicketType.objects.create(event=event, position=position, **spec)
        return event

    return factory
