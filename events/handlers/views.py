"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from dataclasses import replace

from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events import cache as cache_keys
from events.domain import Err
from events.domain.errors import DomainError, ErrorCode, WizardValidationError
from events.domain.wizard import EventDraft, EventWizard, TicketTypeDraft
from events.handlers.serializers import (
    EventDraftSerializer,
    EventSerializer,
    OrderSummarySerializer,
    SelectionRequestSerializer,
    TicketInventorySerializer,
)
from events.services.event_service import EventService
from events.stores.django_store import DjangoEventStore

ERROR_STATUS = {
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.UNKNOWN_TICKET_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NEGATIVE_QUANTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EXCEEDS_AVAILABILITY: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_EVENT_DATA: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_ON_SALE: status.HTTP_409_CONFLICT,
}


def get_event_service() -> EventService:
    return EventService(DjangoEventStore())


def error_response(error: DomainError) -> Response:
    body = {"code": error.code.value, "message": error.message}
    if isinstance(error, WizardValidationError):
        body["errors"] = error.errors
    return Response(body, status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST))


def invalid_request(errors) -> Response:
    return Response(
        {"code": "INVALID_REQUEST", "message": "Malformed request body", "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


class EventListView(APIView):
    """Handler for GET /api/events and POST /api/events"""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated()]
        return [AllowAny()]

    def get(self, request: Request) -> Response:
        category = request.query_params.get("category") or None
        key = cache_keys.list_key(category)
        events = cache.get(key)
        if events is None:
            events = get_event_service().list_events(category=category)
            cache.set(key, events, cache_keys.timeout())
        return Response({"results": EventSerializer(events, many=True).data, "count": len(events)})

    def post(self, request: Request) -> Response:
        serializer = EventDraftSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)

        data = dict(serializer.validated_data)
        tickets = [TicketTypeDraft(**ticket) for ticket in data.pop("ticket_types")]
        wizard = EventWizard(EventDraft(**data, ticket_types=tickets))

        outcome = get_event_service().create_event(wizard, organizer_id=str(request.user.pk))
        if isinstance(outcome, Err):
            return error_response(outcome.error)
        event = outcome.value
        body = EventSerializer(event).data
        body["ticket_types"] = [str(t.id) for t in event.ticket_types]
        return Response(body, status=status.HTTP_201_CREATED)


class EventDetailView(APIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        service = get_event_service()
        try:
            inventory = service.get_ticket_inventory(event_id)
            key = cache_keys.detail_key(str(service.parse_event_id(event_id)))
            event = cache.get(key)
            if event is None:
                event = replace(service.get_event(event_id), ticket_types=())
                cache.set(key, event, cache_keys.timeout())
        except DomainError as exc:
            return error_response(exc)

        body = EventSerializer(event).data
        body["ticket_types"] = TicketInventorySerializer(
            [{"ticket_type": t, "availability": a} for t, a in inventory], many=True
        ).data
        return Response(body)


class QuoteView(APIView):
    """Handler for POST /api/events/{event_id}/quote"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = SelectionRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)
        try:
            outcome = get_event_service().quote(event_id, serializer.validated_data["tickets"])
        except DomainError as exc:
            return error_response(exc)
        if isinstance(outcome, Err):
            return error_response(outcome.error)
        return Response(OrderSummarySerializer(outcome.value).data)


class PurchaseView(APIView):
    """Handler for POST /api/events/{event_id}/purchase"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = SelectionRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)
        try:
            outcome = get_event_service().commit_purchase(
                event_id, serializer.validated_data["tickets"]
            )
        except DomainError as exc:
            return error_response(exc)
        if isinstance(outcome, Err):
            return error_response(outcome.error)
        summary = outcome.value
        code = status.HTTP_201_CREATED if summary.total_tickets else status.HTTP_200_OK
        return Response(OrderSummarySerializer(summary).data, status=code)
