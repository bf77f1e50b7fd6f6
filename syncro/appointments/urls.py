from django.urls import path

from . import views

app_name = "appointments"

urlpatterns = [
    path("", views.AppointmentListView.as_view(), name="list"),
    path("create/", views.AppointmentCreateView.as_view(), name="create"),
    path("<int:pk>/", views.AppointmentDetailView.as_view(), name="detail"),
    path("<int:pk>/edit/", views.AppointmentUpdateView.as_view(), name="edit"),
    path("<int:pk>/delete/", views.AppointmentDeleteView.as_view(), name="delete"),
    path("<int:pk>/status/", views.AppointmentChangeStatusView.as_view(), name="change-status"),

    # JSON endpoints
    path("api/availability/", views.check_availability, name="availability-json"),
    path("api/appointments/", views.appointments_json, name="appointments-json"),
    path("api/appointments/<int:appointment_id>/status/", views.update_status_ajax, name="status-ajax"),
]
