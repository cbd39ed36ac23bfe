"""
Dashboard statistics and the reservations chart.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from apps.web.reservations.models import Reservation, ReservationStatus
from apps.web.restaurant.models import NewsletterSubscriber, Review

DEFAULT_CHART_DAYS = 7
SHORT_LABEL_MAX_DAYS = 14
RECENT_LIMIT = 5


@dataclass
class DashboardStats:
    reservations_today: int
    pending_reservations: int
    monthly_revenue: Decimal
    new_subscribers: int


def month_bounds(today: date) -> tuple[date, date]:
    """First and last day of the month containing today."""
    start = today.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


def collect_stats(today: date) -> DashboardStats:
    month_start, month_end = month_bounds(today)
    return DashboardStats(
        reservations_today=Reservation.objects.filter(date=today).count(),
        pending_reservations=Reservation.objects.with_status(
            ReservationStatus.PENDING
        ).count(),
        monthly_revenue=Reservation.objects.between(month_start, month_end).revenue(),
        new_subscribers=NewsletterSubscriber.objects.filter(
            created_at__date__gte=month_start,
            created_at__date__lte=month_end,
        ).count(),
    )


def latest_reservations(limit: int = RECENT_LIMIT) -> list[Reservation]:
    return list(Reservation.objects.order_by("-created_at")[:limit])


def pending_reviews(limit: int = RECENT_LIMIT) -> list[Review]:
    return list(Review.objects.pending().order_by("-created_at")[:limit])


def chart_range(
    today: date, start: date | None = None, end: date | None = None
) -> tuple[date, date]:
    """Requested range, defaulting to the last DEFAULT_CHART_DAYS days."""
    end = end or today
    start = start or end - timedelta(days=DEFAULT_CHART_DAYS - 1)
    if start > end:
        start, end = end, start
    return start, end


def reservations_chart(start: date, end: date) -> dict[str, list]:
    """
    Reservation counts per day in [start, end], zero-filled.

    Labels are weekday names ("Mon") for short ranges and "dd/mm" once the
    range is longer than two weeks.
    """
    counts = Reservation.objects.daily_counts(start, end)
    days = [start + timedelta(days=n) for n in range((end - start).days + 1)]
    label_format = "%d/%m" if len(days) > SHORT_LABEL_MAX_DAYS else "%a"
    return {
        "labels": [day.strftime(label_format) for day in days],
        "dates": [day.isoformat() for day in days],
        "counts": [counts.get(day, 0) for day in days],
    }
