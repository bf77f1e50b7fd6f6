from django.contrib import admin

from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("name", "surname", "cpf", "phone", "email")
    search_fields = ("name", "surname", "nickname", "cpf", "phone", "email")
