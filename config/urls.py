from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path("", RedirectView.as_view(pattern_name="appointments:list", permanent=False)),
    path("admin/", admin.site.urls),
    path("accounts/", include("syncro.users.urls")),
    path("ui/", include("syncro.core.urls")),
    path("customers/", include("syncro.customers.urls")),
    path("professionals/", include("syncro.professionals.urls")),
    path("catalog/", include("syncro.catalog.urls")),
    path("resources/", include("syncro.resources.urls")),
    path("appointments/", include("syncro.appointments.urls")),
    path("payments/", include("syncro.payments.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
