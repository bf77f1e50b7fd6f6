from django.urls import path

from . import views

app_name = "catalog"

urlpatterns = [
    path("services/", views.ServiceListView.as_view(), name="service-list"),
    path("services/create/", views.ServiceCreateView.as_view(), name="service-create"),
    path("services/<int:pk>/edit/", views.ServiceUpdateView.as_view(), name="service-edit"),
    path("services/<int:pk>/delete/", views.ServiceDeleteView.as_view(), name="service-delete"),
]
