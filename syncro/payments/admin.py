from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("paid_at", "customer", "amount", "payment_type", "professional", "service")
    list_filter = ("payment_type", "professional")
    search_fields = ("customer__name", "customer__surname", "customer__cpf", "notes")
    date_hierarchy = "paid_at"
