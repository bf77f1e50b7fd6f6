"""
Per-browser UI state: selected date range, sidebar flag and theme.

The state lives in the session so it survives reloads on the same browser
but does not follow the user to another device. Views load it at the start
of a request and save it back whenever it changes.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta

from django.utils import timezone
from django.utils.translation import gettext as _

logger = logging.getLogger(__name__)

SESSION_KEY = "syncro:ui"
DEFAULT_RANGE_DAYS = 30
THEMES = ("light", "dark")


def start_of_day(day):
    return timezone.make_aware(datetime.combine(day, time.min))


def end_of_day(day):
    return timezone.make_aware(datetime.combine(day, time.max))


@dataclass
class DateRange:
    start: datetime
    end: datetime
    label: str

    @classmethod
    def last_days(cls, days=DEFAULT_RANGE_DAYS, today=None):
        today = today or timezone.localdate()
        return cls(
            start=start_of_day(today - timedelta(days=days)),
            end=end_of_day(today),
            label=_("Last %(days)d days") % {"days": days},
        )

    @classmethod
    def between(cls, start_date, end_date, label=None):
        """Whole days from start_date 00:00 to end_date 23:59:59.999999"""
        if end_date < start_date:
            raise ValueError("End date cannot be before start date")
        return cls(
            start=start_of_day(start_date),
            end=end_of_day(end_date),
            label=label or _("Custom period"),
        )

    def to_dict(self):
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            start=datetime.fromisoformat(data["start"]),
            end=datetime.fromisoformat(data["end"]),
            label=data["label"],
        )


@dataclass
class UIState:
    date_range: DateRange = field(default_factory=DateRange.last_days)
    sidebar_open: bool = True
    theme: str = "light"

    @classmethod
    def load(cls, request):
        """Read the state saved for this browser, falling back to defaults"""
        saved = request.session.get(SESSION_KEY)
        if not saved:
            return cls()

        state = cls()
        try:
            if saved.get("date_range"):
                state.date_range = DateRange.from_dict(saved["date_range"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Error loading saved date range: {e}")
        state.sidebar_open = bool(saved.get("sidebar_open", True))
        if saved.get("theme") in THEMES:
            state.theme = saved["theme"]
        return state

    def save(self, request):
        request.session[SESSION_KEY] = {
            "date_range": self.date_range.to_dict(),
            "sidebar_open": self.sidebar_open,
            "theme": self.theme,
        }

    @property
    def is_dark(self):
        return self.theme == "dark"

    def toggle_sidebar(self):
        self.sidebar_open = not self.sidebar_open
        return self.sidebar_open

    def toggle_theme(self):
        self.theme = "light" if self.is_dark else "dark"
        return self.theme
