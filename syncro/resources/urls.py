from django.urls import path

from . import views

app_name = "resources"

urlpatterns = [
    path("rooms/", views.RoomListView.as_view(), name="room-list"),
    path("rooms/create/", views.RoomCreateView.as_view(), name="room-create"),
    path("rooms/<int:pk>/edit/", views.RoomUpdateView.as_view(), name="room-edit"),
    path("rooms/<int:pk>/delete/", views.RoomDeleteView.as_view(), name="room-delete"),
]
