from events.handlers.views import EventDetailView, EventListView, PurchaseView, QuoteView

__all__ = ["EventDetailView", "EventListView", "PurchaseView", "QuoteView"]
