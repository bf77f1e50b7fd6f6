from django.contrib import admin

from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ("scheduled_at", "customer", "service", "professional", "room", "status")
    list_filter = ("status", "room", "professional", "service")
    search_fields = ("customer__name", "customer__surname", "customer__cpf", "service__display_name")
    date_hierarchy = "scheduled_at"
