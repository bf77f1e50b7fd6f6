from django.urls import path

from . import views

app_name = "core"

urlpatterns = [
    path("date-range/", views.DateRangeUpdateView.as_view(), name="date-range"),
    path("sidebar/toggle/", views.SidebarToggleView.as_view(), name="sidebar-toggle"),
    path("theme/toggle/", views.ThemeToggleView.as_view(), name="theme-toggle"),
]
