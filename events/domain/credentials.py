"""Payload embedded in a ticket's scannable credential."""

import json
from dataclasses import dataclass


@dataclass(frozen=True)
class TicketPayload:
    ticket_id: str
    event_id: str
    timestamp: int


def encode_ticket_payload(ticket_id: str, event_id: str, timestamp_ms: int) -> str:
    return json.dumps({"ticketId": ticket_id, "eventId": event_id, "timestamp": timestamp_ms})


def parse_ticket_payload(raw: str) -> TicketPayload | None:
    """Decode a scanned payload, or None if it is not one of ours."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None

    ticket_id = data.get("ticketId")
    event_id = data.get("eventId")
    timestamp = data.get("timestamp")
    if not ticket_id or not event_id or not timestamp:
        return None
    if not isinstance(timestamp, int) or isinstance(timestamp, bool):
        return None
    return TicketPayload(ticket_id=str(ticket_id), event_id=str(event_id), timestamp=timestamp)
