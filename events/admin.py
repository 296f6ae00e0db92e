from django.contrib import admin

from events.models import Event, TicketType


class TicketTypeInline(admin.TabularInline):
    model = TicketType
    extra = 1
    fields = ["name", "price", "quantity_available", "quantity_sold", "position"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "category", "status", "pricing_plan", "start_date"]
    list_filter = ["status", "pricing_plan", "category"]
    search_fields = ["name", "location"]
    inlines = [TicketTypeInline]


@admin.register(TicketType)
class TicketTypeAdmin(admin.ModelAdmin):
    list_display = ["name", "event", "price", "quantity_available", "quantity_sold"]
    list_filter = ["event"]
