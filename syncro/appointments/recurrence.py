"""
Expansion of one booking request into a series of dates.
"""
from dateutil.relativedelta import relativedelta
from django.utils.translation import gettext_lazy as _

NONE = "none"
DAILY = "daily"
WEEKLY = "weekly"
BIWEEKLY = "biweekly"
MONTHLY = "monthly"

CADENCE_CHOICES = [
    (NONE, _("Does not repeat")),
    (DAILY, _("Daily")),
    (WEEKLY, _("Weekly")),
    (BIWEEKLY, _("Every two weeks")),
    (MONTHLY, _("Monthly")),
]

# Upper bound on the length of one recurring series
MAX_OCCURRENCES = 52

# Offset of the i-th occurrence from the base date. Always computed from the
# base date, so a series starting on the 31st lands on the last day of
# shorter months and returns to the 31st afterwards.
_STEPS = {
    DAILY: lambda i: relativedelta(days=i),
    WEEKLY: lambda i: relativedelta(weeks=i),
    BIWEEKLY: lambda i: relativedelta(weeks=2 * i),
    MONTHLY: lambda i: relativedelta(months=i),
}


def generate_dates(base_date, cadence, occurrences):
    """
    Return the ordered dates of a recurring booking.

    The first date is always base_date. A cadence of "none" yields only the
    base date whatever the number of occurrences.
    """
    if cadence != NONE and cadence not in _STEPS:
        raise ValueError(f"Unknown recurrence cadence: {cadence}")
    if occurrences < 1:
        raise ValueError("Number of occurrences must be at least 1")
    if cadence == NONE:
        return [base_date]
    if occurrences > MAX_OCCURRENCES:
        raise ValueError(f"Number of occurrences must be at most {MAX_OCCURRENCES}")

    step = _STEPS[cadence]
    try:
        return [base_date + step(i) for i in range(occurrences)]
    except (OverflowError, ValueError) as e:
        raise ValueError(f"Recurring series runs past the last supported date: {e}") from e
