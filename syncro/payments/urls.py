from django.urls import path

from . import views

app_name = "payments"

urlpatterns = [
    path("", views.PaymentListView.as_view(), name="list"),
    path("create/", views.PaymentCreateView.as_view(), name="create"),
    path("<int:pk>/edit/", views.PaymentUpdateView.as_view(), name="edit"),
    path("<int:pk>/delete/", views.PaymentDeleteView.as_view(), name="delete"),
    path("export/", views.PaymentExportView.as_view(), name="export"),
]
