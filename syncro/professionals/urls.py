from django.urls import path

from . import views

app_name = "professionals"

urlpatterns = [
    path("", views.ProfessionalListView.as_view(), name="list"),
    path("create/", views.ProfessionalCreateView.as_view(), name="create"),
    path("<int:pk>/edit/", views.ProfessionalUpdateView.as_view(), name="edit"),
    path("<int:pk>/delete/", views.ProfessionalDeleteView.as_view(), name="delete"),
]
