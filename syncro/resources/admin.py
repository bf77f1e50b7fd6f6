from django.contrib import admin

from .models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("display_name", "created_at", "updated_at")
    search_fields = ("display_name",)
