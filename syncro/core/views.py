"""
Core Views - persist UI preferences (date range, sidebar, theme)
"""
import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import JsonResponse
from django.shortcuts import redirect
from django.utils import timezone
from django.utils.dateparse import parse_date
from django.utils.http import url_has_allowed_host_and_scheme
from django.utils.translation import gettext as _
from django.views import View

from .ui_state import DateRange, UIState

logger = logging.getLogger(__name__)

PRESET_DAYS = {
    "last_7": 7,
    "last_30": 30,
    "last_90": 90,
}


def _next_url(request, default="appointments:list"):
    next_url = request.POST.get("next") or request.GET.get("next")
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        return next_url
    return default


class DateRangeUpdateView(LoginRequiredMixin, View):
    """Change the date range used by list and financial screens"""

    def post(self, request):
        state = UIState.load(request)
        preset = request.POST.get("preset")

        if preset == "today":
            today = timezone.localdate()
            state.date_range = DateRange.between(today, today, _("Today"))
        elif preset in PRESET_DAYS:
            state.date_range = DateRange.last_days(PRESET_DAYS[preset])
        else:
            start_date = parse_date(request.POST.get("start", "") or "")
            end_date = parse_date(request.POST.get("end", "") or "")
            if not start_date or not end_date:
                messages.error(request, _("Select a start and an end date."))
                return redirect(_next_url(request))
            try:
                state.date_range = DateRange.between(start_date, end_date, request.POST.get("label"))
            except ValueError:
                messages.error(request, _("End date cannot be before start date."))
                return redirect(_next_url(request))

        state.save(request)
        logger.debug(f"Date range set to {state.date_range.start:%Y-%m-%d} - {state.date_range.end:%Y-%m-%d}")
        return redirect(_next_url(request))


class SidebarToggleView(LoginRequiredMixin, View):
    def post(self, request):
        state = UIState.load(request)
        state.toggle_sidebar()
        state.save(request)
        return JsonResponse({"success": True, "sidebar_open": state.sidebar_open})


class ThemeToggleView(LoginRequiredMixin, View):
    def post(self, request):
        state = UIState.load(request)
        state.toggle_theme()
        state.save(request)
        return JsonResponse({"success": True, "theme": state.theme})
