from django.urls import path

from events.handlers import EventDetailView, EventListView, PurchaseView, QuoteView

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/quote", QuoteView.as_view(), name="event-quote"),
    path("events/<str:event_id>/purchase", PurchaseView.as_view(), name="event-purchase"),
]
